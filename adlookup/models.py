from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LookupEvent(Base):
    __tablename__ = "lookup_event"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ts: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)

    severity: Mapped[str] = mapped_column(String(16), default="error", nullable=False)  # info|warning|error
    category: Mapped[str] = mapped_column(String(32), default="", nullable=False)
    description: Mapped[str] = mapped_column(String(256), default="", nullable=False)

    path: Mapped[str] = mapped_column(String(1024), default="", nullable=False)
    filter: Mapped[str] = mapped_column(String(2048), default="", nullable=False)
    error: Mapped[str] = mapped_column(String(1024), default="", nullable=False)
