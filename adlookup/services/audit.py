from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..models import LookupEvent

logger = logging.getLogger(__name__)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class EventLogger(Protocol):
    def log(
        self,
        description: str,
        context: Mapping[str, Any],
        error: Optional[BaseException],
        severity: str,
        category: str,
    ) -> None:
        ...


class LoggingEventLogger:
    """Write events to the `adlookup.events` logger."""

    def __init__(self, name: str = "adlookup.events") -> None:
        self.logger = logging.getLogger(name)

    def log(self, description, context, error, severity="error", category="") -> None:
        level = _LEVELS.get((severity or "").lower(), logging.ERROR)
        ctx = ", ".join(f"{k}={v}" for k, v in (context or {}).items())
        self.logger.log(level, "[%s] %s (%s): %s", category, description, ctx, error)


def audit_event(
    db: Session,
    description: str,
    severity: str,
    category: str,
    path: str = "",
    filter: str = "",
    error: str = "",
) -> None:
    db.add(
        LookupEvent(
            description=description[:256],
            severity=severity[:16],
            category=category[:32],
            path=path[:1024],
            filter=filter[:2048],
            error=error[:1024],
        )
    )
    db.commit()


class DbEventLogger:
    """Persist events to the lookup_event table. Never raises."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    def log(self, description, context, error, severity="error", category="") -> None:
        ctx = dict(context or {})
        try:
            with self.session_factory() as db:
                audit_event(
                    db,
                    description=description,
                    severity=severity,
                    category=category,
                    path=str(ctx.get("path", "")),
                    filter=str(ctx.get("filter", "")),
                    error=str(error or ""),
                )
        except SQLAlchemyError:
            logger.exception("Failed to persist lookup event: %s", description)


def recent_events(db: Session, limit: int = 50) -> list[LookupEvent]:
    stmt = select(LookupEvent).order_by(LookupEvent.ts.desc(), LookupEvent.id.desc()).limit(limit)
    return list(db.scalars(stmt))
