"""Application service layer.

    from adlookup.services import lookup
"""

from .audit import DbEventLogger, EventLogger, LoggingEventLogger, audit_event, recent_events
from .lookup import lookup

__all__ = [
    "DbEventLogger",
    "EventLogger",
    "LoggingEventLogger",
    "audit_event",
    "lookup",
    "recent_events",
]
