"""Tests for SessionTimeoutMonitor callback dispatch and polling lifecycle."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from app.services.session import ActivityTimeoutTracker, SessionSignal, SessionTimeoutMonitor

START = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def callbacks():
    return MagicMock()


@pytest.fixture
def make_monitor(clock, callbacks):
    """Build a monitor with a fake clock; stops its scheduler afterwards."""
    monitors = []

    def _make(authenticated: bool = True, **kwargs) -> SessionTimeoutMonitor:
        options = {
            "is_authenticated": lambda: authenticated,
            "on_warning": callbacks.on_warning,
            "on_timeout": callbacks.on_timeout,
            "on_guest_timeout": callbacks.on_guest_timeout,
            "clock": clock,
            # Long interval keeps the background job from firing during tests
            "check_interval": timedelta(hours=1),
        }
        options.update(kwargs)
        monitor = SessionTimeoutMonitor(**options)
        monitors.append(monitor)
        return monitor

    yield _make

    for monitor in monitors:
        monitor.stop()


class TestPollDispatch:
    """Tracker signals are turned into callbacks."""

    def test_quiet_poll_calls_nothing(self, make_monitor, clock, callbacks):
        monitor = make_monitor()

        assert monitor.poll(clock.advance(minutes=5)) == SessionSignal.NONE
        assert callbacks.method_calls == []

    def test_warning_callback(self, make_monitor, clock, callbacks):
        monitor = make_monitor()

        assert monitor.poll(clock.advance(minutes=13)) == SessionSignal.WARN
        callbacks.on_warning.assert_called_once_with()

        monitor.poll(clock.advance(seconds=30))
        callbacks.on_warning.assert_called_once_with()

    def test_authenticated_timeout_signs_out(self, make_monitor, clock, callbacks):
        monitor = make_monitor(authenticated=True)

        assert monitor.poll(clock.advance(minutes=15)) == SessionSignal.TIMEOUT
        callbacks.on_timeout.assert_called_once_with()
        callbacks.on_guest_timeout.assert_not_called()

    def test_guest_timeout_uses_guest_callback(self, make_monitor, clock, callbacks):
        monitor = make_monitor(authenticated=False)

        monitor.poll(clock.advance(minutes=15))

        callbacks.on_guest_timeout.assert_called_once_with()
        callbacks.on_timeout.assert_not_called()

    def test_poll_defaults_to_clock(self, make_monitor, clock, callbacks):
        monitor = make_monitor()
        clock.advance(minutes=13)

        assert monitor.poll() == SessionSignal.WARN

    def test_missing_callbacks_are_skipped(self, make_monitor, clock):
        monitor = make_monitor(on_warning=None, on_timeout=None)

        assert monitor.poll(clock.advance(minutes=13)) == SessionSignal.WARN
        assert monitor.poll(clock.advance(minutes=2)) == SessionSignal.TIMEOUT

    def test_failing_callback_is_logged(self, make_monitor, clock, callbacks, caplog):
        callbacks.on_timeout.side_effect = RuntimeError("sign-out failed")
        monitor = make_monitor()

        assert monitor.poll(clock.advance(minutes=15)) == SessionSignal.TIMEOUT
        assert "Session timeout callback failed" in caplog.text

    def test_activity_delays_warning(self, make_monitor, clock, callbacks):
        monitor = make_monitor()
        clock.advance(minutes=10)
        monitor.notify_activity()

        assert monitor.poll(clock.advance(minutes=12)) == SessionSignal.NONE
        assert monitor.last_activity == START + timedelta(minutes=10)
        assert monitor.get_remaining_time() == timedelta(minutes=3)


class TestPollingLifecycle:
    """Scheduling of the periodic check job."""

    def test_start_schedules_job(self, make_monitor):
        monitor = make_monitor()

        monitor.start()

        assert monitor.is_polling
        assert monitor.scheduler.running
        job = monitor.scheduler.get_job(monitor.job_id)
        assert job.trigger.interval == timedelta(hours=1)

    def test_stop_removes_job_and_shuts_down(self, make_monitor):
        monitor = make_monitor()
        monitor.start()

        monitor.stop()

        assert not monitor.is_polling
        assert not monitor.scheduler.running

    def test_disabled_monitor_never_polls(self, make_monitor):
        monitor = make_monitor(enabled=False)

        monitor.start()

        assert not monitor.is_polling
        assert not monitor.scheduler.running

    def test_timeout_pauses_polling_until_activity(self, make_monitor, clock):
        monitor = make_monitor()
        monitor.start()

        monitor.poll(clock.advance(minutes=15))
        assert not monitor.is_polling

        clock.advance(minutes=1)
        monitor.notify_activity()
        assert monitor.is_polling

    def test_activity_before_start_does_not_schedule(self, make_monitor):
        monitor = make_monitor()

        monitor.notify_activity()

        assert not monitor.is_polling

    def test_shared_scheduler_is_left_running(self, make_monitor):
        owner = make_monitor()
        owner.start()
        guest = make_monitor(
            scheduler=owner.scheduler,
            tracker=ActivityTimeoutTracker(started_at=START),
        )
        guest.start()

        guest.stop()

        assert owner.scheduler.running
        assert owner.is_polling

    def test_monitors_sharing_a_scheduler_poll_independently(self, make_monitor, clock):
        """Each monitor keeps its own job on a shared scheduler."""
        first = make_monitor()
        first.start()
        second = make_monitor(
            scheduler=first.scheduler,
            tracker=ActivityTimeoutTracker(started_at=START),
        )
        second.start()

        assert first.job_id != second.job_id
        assert len(first.scheduler.get_jobs()) == 2
        assert first.scheduler.get_job(first.job_id).func == first.poll

        second.poll(clock.advance(minutes=15))

        assert first.is_polling
        assert not second.is_polling
