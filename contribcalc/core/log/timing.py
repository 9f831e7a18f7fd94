"""Timing helpers to log duration and throughput of operations."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional

from sqlalchemy import event
from sqlalchemy.orm import Session


class StatementCounter:
    """Count statements a session executes while attached."""

    def __init__(self) -> None:
        self.call_count = 0
        self._session: Session | None = None

    def _on_execute(self, orm_execute_state) -> None:
        self.call_count += 1

    def attach(self, session: Session) -> None:
        self._session = session
        event.listen(session, "do_orm_execute", self._on_execute)

    def detach(self) -> None:
        if self._session is not None:
            event.remove(self._session, "do_orm_execute", self._on_execute)
            self._session = None


@dataclass
class _Timer:
    label: str
    logger: logging.Logger
    level: int
    unit: str
    expected_total: Optional[int]
    count: int = 0
    start: float = field(default_factory=perf_counter)
    counter: Optional[StatementCounter] = None

    def add(self, amount: int = 1) -> None:
        self.count += amount

    def set_total(self, total: int) -> None:
        self.expected_total = total

    def _resolved_total(self) -> Optional[int]:
        return self.expected_total if self.expected_total is not None else self.count

    @property
    def db_calls(self) -> int:
        return self.counter.call_count if self.counter else 0

    def finish(self, success: bool = True) -> None:
        elapsed = perf_counter() - self.start
        total = self._resolved_total()

        if success:
            message = f"{self.label} completed in {elapsed:.2f}s"
            if total is not None:
                message += f" ({total:,} {self.unit}"
                if elapsed > 0 and total:
                    message += f" @ {total / elapsed:,.0f} {self.unit}/s"
                message += ")"
        else:
            message = f"{self.label} failed after {elapsed:.2f}s"
            if total is not None:
                message += f" ({total:,} {self.unit})"

        if self.counter is not None and self.db_calls:
            message += f" ({self.db_calls:,} DB calls)"

        if success:
            self.logger.log(self.level, message)
        else:
            self.logger.error(message)


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    unit: str = "items",
    total: Optional[int] = None,
    session: Optional[Session] = None,
) -> Iterator[_Timer]:
    """Time the enclosed block and log its duration.

    Args:
        label: Description of the operation being timed
        logger: Logger instance to use (defaults to "contribcalc.timer")
        level: Logging level for the success message
        unit: Unit for throughput calculation (e.g. "rows", "employees")
        total: Expected total count; otherwise the count accumulated via ``add``
        session: When given, statements executed through it are counted
    """
    counter = None
    if session is not None:
        counter = StatementCounter()
        counter.attach(session)

    timer = _Timer(
        label=label,
        logger=logger or logging.getLogger("contribcalc.timer"),
        level=level,
        unit=unit,
        expected_total=total,
        counter=counter,
    )

    try:
        yield timer
    except Exception:
        timer.finish(success=False)
        raise
    else:
        timer.finish(success=True)
    finally:
        if counter is not None:
            counter.detach()
