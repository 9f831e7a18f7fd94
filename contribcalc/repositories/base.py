"""Shared helpers for tenant-scoped repositories."""
from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session


class BaseRepository:
    """Base repository holding the session and shared query helpers."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _count(self, statement: Select[Any]) -> int:
        """Return the number of rows ``statement`` would produce."""

        count_statement = select(func.count()).select_from(
            statement.order_by(None).subquery()
        )
        return int(self._session.scalar(count_statement) or 0)

    @staticmethod
    def _search_pattern(value: str | None) -> str | None:
        if not value:
            return None
        return f"%{value.lower()}%"
