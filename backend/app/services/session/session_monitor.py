"""Polling host that turns tracker signals into warning and sign-out callbacks."""

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.config import settings
from app.services.session.activity_tracker import ActivityTimeoutTracker, SessionSignal

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class SessionTimeoutMonitor:
    """Polls an ActivityTimeoutTracker on an APScheduler interval job.

    - WARN    -> on_warning()
    - TIMEOUT -> on_timeout() for authenticated users (sign out),
                 on_guest_timeout() for guests (e.g. offer to keep the cart)

    Polling stops after a timeout and resumes on the next activity.

    Usage:
        monitor = SessionTimeoutMonitor(
            is_authenticated=lambda: current_user is not None,
            on_warning=show_expiry_banner,
            on_timeout=sign_out,
        )
        monitor.start()
        ...
        monitor.notify_activity()  # wire to input events
    """

    JOB_ID_PREFIX = "session_timeout_check"

    def __init__(
        self,
        is_authenticated: Callable[[], bool],
        on_warning: Callable[[], None] | None = None,
        on_timeout: Callable[[], None] | None = None,
        on_guest_timeout: Callable[[], None] | None = None,
        tracker: ActivityTimeoutTracker | None = None,
        clock: Callable[[], datetime] = utc_now,
        check_interval: timedelta | None = None,
        scheduler: BaseScheduler | None = None,
        enabled: bool = True,
    ) -> None:
        self.is_authenticated = is_authenticated
        self.on_warning = on_warning
        self.on_timeout = on_timeout
        self.on_guest_timeout = on_guest_timeout
        self.clock = clock
        self.tracker = tracker or ActivityTimeoutTracker(started_at=clock())
        self.check_interval = check_interval or timedelta(
            seconds=settings.session_check_interval_seconds
        )
        self.enabled = enabled

        self._owns_scheduler = scheduler is None
        self.scheduler = scheduler or BackgroundScheduler(daemon=True)
        self._started = False
        # Monitors may share one scheduler; each polls under its own job
        self.job_id = f"{self.JOB_ID_PREFIX}:{uuid.uuid4().hex}"

    @property
    def is_polling(self) -> bool:
        return self.scheduler.get_job(self.job_id) is not None

    @property
    def last_activity(self) -> datetime:
        return self.tracker.last_activity_at

    def get_remaining_time(self) -> timedelta:
        return self.tracker.get_remaining_time(self.clock())

    def start(self) -> None:
        """Begin periodic checks."""
        if not self.enabled:
            logger.info("Session timeout monitor disabled")
            return

        self._started = True
        self._schedule()
        if not self.scheduler.running:
            self.scheduler.start()
        logger.info(
            f"Session timeout monitor started - timeout {self.tracker.timeout}, "
            f"checking every {self.check_interval}"
        )

    def stop(self) -> None:
        """Stop periodic checks and release the scheduler if this monitor created it."""
        self._started = False
        self._unschedule()
        if self._owns_scheduler and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logger.info("Session timeout monitor stopped")

    def notify_activity(self) -> None:
        """Record user activity now, resuming polling if a timeout paused it."""
        self.tracker.record_activity(self.clock())
        if self._started and not self.is_polling:
            self._schedule()

    def poll(self, now: datetime | None = None) -> SessionSignal:
        """Run one check and dispatch the matching callback."""
        signal = self.tracker.check(now or self.clock())

        if signal is SessionSignal.WARN:
            remaining = self.tracker.warning_lead
            logger.info(f"Session will expire in {remaining} due to inactivity")
            self._invoke(self.on_warning, "warning")

        elif signal is SessionSignal.TIMEOUT:
            logger.info("Session expired due to inactivity")
            self._unschedule()
            if self.is_authenticated():
                self._invoke(self.on_timeout, "timeout")
            else:
                self._invoke(self.on_guest_timeout, "guest timeout")

        return signal

    def _schedule(self) -> None:
        self.scheduler.add_job(
            self.poll,
            trigger=IntervalTrigger(seconds=self.check_interval.total_seconds()),
            id=self.job_id,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

    def _unschedule(self) -> None:
        if self.is_polling:
            self.scheduler.remove_job(self.job_id)

    @staticmethod
    def _invoke(callback: Callable[[], None] | None, name: str) -> None:
        if callback is None:
            return
        try:
            callback()
        except Exception:
            # A failing sign-out must not kill the polling job
            logger.exception(f"Session {name} callback failed")
