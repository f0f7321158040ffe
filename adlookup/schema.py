from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class LookupResponse(BaseModel):
    count: int
    items: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    code: str
    detail: str
    path: Optional[str] = None
    ldap_code: Optional[int] = None
    win32_code: Optional[str] = None


class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ts: datetime
    severity: str
    category: str
    description: str
    path: str
    filter: str
    error: str
