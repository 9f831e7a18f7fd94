"""Opinionated SQLAlchemy session helpers."""
from __future__ import annotations

from functools import lru_cache

from sqlalchemy.orm import sessionmaker

from .engine import create_sync_engine


def get_sessionmaker(url: str | None = None, **kwargs) -> sessionmaker:
    """Return a ``sessionmaker`` bound to a new engine."""

    engine = create_sync_engine(url, **kwargs)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@lru_cache(maxsize=1)
def get_default_sessionmaker() -> sessionmaker:
    """Return the process-wide ``sessionmaker`` for the configured database."""

    return get_sessionmaker()

