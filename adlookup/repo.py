from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker

from .db import get_engine, make_session_factory


@contextmanager
def db_session(factory: sessionmaker | None = None) -> Iterator[Session]:
    db = (factory or make_session_factory(get_engine()))()
    try:
        yield db
    finally:
        db.close()
