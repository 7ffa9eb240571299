"""Inactivity tracking: one warning and one timeout per idle cycle."""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from app.config import settings


class SessionSignal(str, Enum):
    """Result of a tracker check."""

    NONE = "none"
    WARN = "warn"
    TIMEOUT = "timeout"


class SessionState(str, Enum):
    ACTIVE = "active"
    WARNING_ISSUED = "warning_issued"
    TIMED_OUT = "timed_out"


@dataclass
class ActivitySession:
    """Mutable per-session state owned by one tracker."""

    last_activity_at: datetime
    warning_emitted: bool = False
    timed_out: bool = False


class ActivityTimeoutTracker:
    """Decides from activity timestamps whether to warn or time out.

    The tracker is not a timer: a host polls `check(now)` on its own
    schedule and feeds activity through `record_activity(now)`. Callers
    must pass timestamps of one kind (all aware or all naive).

    Timeline for timeout=15m, warning_lead=2m:
        elapsed < 13:00          -> NONE
        13:00 <= elapsed < 15:00 -> WARN on the first check, NONE after
        elapsed >= 15:00         -> TIMEOUT
    """

    def __init__(
        self,
        started_at: datetime,
        timeout: timedelta | None = None,
        warning_lead: timedelta | None = None,
    ) -> None:
        if timeout is None:
            timeout = timedelta(minutes=settings.session_timeout_minutes)
        if warning_lead is None:
            warning_lead = timedelta(minutes=settings.session_warning_minutes)
        self.timeout = timeout
        self.warning_lead = warning_lead

        if self.timeout <= timedelta(0) or self.warning_lead <= timedelta(0):
            raise ValueError("Session timeout and warning lead time must be positive")
        if self.warning_lead >= self.timeout:
            raise ValueError(
                f"Warning lead time ({self.warning_lead}) must be shorter than "
                f"the timeout ({self.timeout})"
            )

        self._session = ActivitySession(last_activity_at=started_at)
        # record_activity touches two fields; keep them consistent across threads
        self._lock = threading.Lock()

    @property
    def last_activity_at(self) -> datetime:
        with self._lock:
            return self._session.last_activity_at

    @property
    def warning_threshold(self) -> timedelta:
        """Elapsed idle time at which the warning fires."""
        return self.timeout - self.warning_lead

    @property
    def state(self) -> SessionState:
        with self._lock:
            if self._session.timed_out:
                return SessionState.TIMED_OUT
            if self._session.warning_emitted:
                return SessionState.WARNING_ISSUED
            return SessionState.ACTIVE

    def record_activity(self, now: datetime) -> None:
        """Reset the idle clock and re-arm the warning. Never fails."""
        with self._lock:
            # Out-of-order events must not move the clock backwards
            if now > self._session.last_activity_at:
                self._session.last_activity_at = now
            self._session.warning_emitted = False
            self._session.timed_out = False

    def check(self, now: datetime) -> SessionSignal:
        """Classify the idle time at `now`, emitting WARN at most once per cycle."""
        with self._lock:
            elapsed = now - self._session.last_activity_at

            if elapsed >= self.timeout:
                self._session.timed_out = True
                return SessionSignal.TIMEOUT

            if elapsed >= self.warning_threshold and not self._session.warning_emitted:
                self._session.warning_emitted = True
                return SessionSignal.WARN

            return SessionSignal.NONE

    def get_remaining_time(self, now: datetime) -> timedelta:
        """Time left before timeout, between zero and the full timeout."""
        with self._lock:
            elapsed = max(timedelta(0), now - self._session.last_activity_at)
        return max(timedelta(0), self.timeout - elapsed)
