"""Dependency injection wiring."""

from typing import Generator, Optional

from redlock import Redlock
from sqlalchemy.orm import Session

from backoffice.db.session import SessionLocal
from backoffice.core.redis import redlock


def get_db() -> Generator[Session, None, None]:
    """One session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_redlock() -> Optional[Redlock]:
    """Redlock instance, or None when distributed locking is disabled or unconfigured."""
    if redlock is None or not getattr(redlock, "servers", None):
        return None
    return redlock
