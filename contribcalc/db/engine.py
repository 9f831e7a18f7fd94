"""Database engine factories."""
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from contribcalc.core.config import get_settings
from contribcalc.core.log import get_logger

LOGGER = get_logger(__name__)


def create_sync_engine(url: str | None = None, **kwargs) -> Engine:
    """Create a synchronous SQLAlchemy engine using configured defaults."""

    settings = get_settings()
    resolved_url = url or settings.database.sqlalchemy_url

    options = dict(kwargs)
    options.setdefault("echo", settings.sqlalchemy_echo)
    if resolved_url.startswith("sqlite"):
        options.setdefault("connect_args", {"check_same_thread": False})

    masked_url = make_url(resolved_url).render_as_string(hide_password=True)
    LOGGER.debug("Creating SQLAlchemy engine", extra={"url": masked_url, "options": options})
    return create_engine(resolved_url, **options)


def create_schema(engine: Engine) -> None:
    """Create any missing tables for the ORM models."""

    from contribcalc.models import Base

    Base.metadata.create_all(engine)
    LOGGER.info("Database schema ensured (%d tables)", len(Base.metadata.tables))
