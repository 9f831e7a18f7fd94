"""Shared FastAPI dependency definitions."""
from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from contribcalc.core.security import AuthenticatedUser, get_authenticated_user
from contribcalc.db.session import get_default_sessionmaker


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session suitable for request-scoped usage."""

    session = get_default_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


def get_company_id(user: AuthenticatedUser = Depends(get_authenticated_user)) -> str:
    """Tenant every query of the current request is scoped to."""

    return user.company_id
