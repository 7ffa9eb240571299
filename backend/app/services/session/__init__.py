"""Session inactivity tracking and timeout polling."""

from .activity_tracker import ActivitySession, ActivityTimeoutTracker, SessionSignal, SessionState
from .session_monitor import SessionTimeoutMonitor

__all__ = [
    "ActivitySession",
    "ActivityTimeoutTracker",
    "SessionSignal",
    "SessionState",
    "SessionTimeoutMonitor",
]
