"""Progress bars backed by rich, sharing the logging console."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, TypeVar

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

T = TypeVar("T")


@dataclass
class _Task:
    progress: Progress
    task_id: TaskID

    def advance(self, amount: float = 1.0) -> None:
        self.progress.advance(self.task_id, amount)


class ProgressManager:
    """Create progress bars that render on the same console as log output."""

    def __init__(self) -> None:
        self._console: Console = Console(stderr=True)

    def use_console(self, console: Console) -> None:
        self._console = console

    def reset_console(self) -> None:
        self._console = Console(stderr=True)

    @contextmanager
    def task(self, description: str, *, total: Optional[float] = None) -> Iterator[_Task]:
        progress = Progress(
            TextColumn("[bold blue]{task.description}[/]"),
            BarColumn(bar_width=None),
            TaskProgressColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
            transient=True,
        )
        with progress:
            task_id = progress.add_task(description, total=total)
            yield _Task(progress, task_id)

    def track(
        self,
        iterable: Iterable[T],
        *,
        description: str,
        total: Optional[int] = None,
    ) -> Iterator[T]:
        with self.task(description, total=total) as task:
            for item in iterable:
                yield item
                task.advance(1)


progress_manager = ProgressManager()
