"""Logging for the contribution calculator.

Records go through a ``QueueHandler`` on the root logger and are written by a
background ``QueueListener`` to a rich console handler and, when a log
directory is configured, one file per calendar day. Every record carries the
bound :data:`log_context` (tenant, city, ...) as a ``key=value`` prefix.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from threading import RLock

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .context import ContextFilter, log_context
from .progress import progress_manager
from .timing import timeit

__all__ = [
    "init_logging",
    "get_logger",
    "shutdown_logging",
    "log_context",
    "progress_manager",
    "timeit",
]

APP_LOGGER = "contribcalc"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    level: str | int = "INFO"
    log_dir: str | Path | None = None
    console: bool = True
    rich_tracebacks: bool = True
    queue: bool = True

    @property
    def numeric_level(self) -> int:
        if isinstance(self.level, int):
            return self.level
        value = logging.getLevelName(str(self.level).upper())
        return value if isinstance(value, int) else logging.INFO


class DatedFileHandler(logging.FileHandler):
    """Append to ``<directory>/YYYY_MM_DD.log``, switching files at midnight."""

    def __init__(self, directory: str | Path, *, encoding: str = "utf-8") -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._day = date.today()
        super().__init__(self._file_for(self._day), mode="a", encoding=encoding, delay=True)

    def _file_for(self, day: date) -> Path:
        return self.directory / f"{day:%Y_%m_%d}.log"

    def emit(self, record: logging.LogRecord) -> None:
        day = datetime.fromtimestamp(record.created).date()
        if day != self._day:
            self._day = day
            self.close()
            self.baseFilename = str(self._file_for(day).resolve())
        super().emit(record)


class _LoggingState:
    """The installed configuration and its queue listener."""

    def __init__(self) -> None:
        self.lock = RLock()
        self.config: LoggingConfig | None = None
        self.listener: QueueListener | None = None
        self.context_filter = ContextFilter()

    def handlers_for(self, config: LoggingConfig) -> list[logging.Handler]:
        level = config.numeric_level
        handlers: list[logging.Handler] = []

        console = Console(stderr=True)
        progress_manager.use_console(console)
        if config.rich_tracebacks:
            install_rich_traceback(show_locals=False)

        if config.console:
            console_handler = RichHandler(
                console=console,
                rich_tracebacks=config.rich_tracebacks,
                show_path=False,
                markup=False,
                log_time_format=_DATE_FORMAT,
            )
            console_handler.setFormatter(logging.Formatter("%(context)s%(message)s"))
            handlers.append(console_handler)

        if config.log_dir:
            file_handler = DatedFileHandler(config.log_dir)
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
            handlers.append(file_handler)

        for handler in handlers:
            handler.setLevel(level)
            handler.addFilter(self.context_filter)
        return handlers

    def install(self, config: LoggingConfig) -> None:
        if config == self.config:
            return
        self.uninstall()

        root = logging.getLogger()
        root.setLevel(logging.NOTSET)
        handlers = self.handlers_for(config)

        if config.queue and handlers:
            queue_handler = QueueHandler(SimpleQueue())
            queue_handler.setLevel(config.numeric_level)
            # The context lives in a contextvar, so it is rendered before the
            # record leaves the producing thread.
            queue_handler.addFilter(self.context_filter)
            root.addHandler(queue_handler)
            self.listener = QueueListener(queue_handler.queue, *handlers, respect_handler_level=True)
            self.listener.start()
        else:
            for handler in handlers:
                root.addHandler(handler)

        self.config = config

    def uninstall(self) -> None:
        if self.listener is not None:
            self.listener.stop()
            for handler in self.listener.handlers:
                handler.close()
            self.listener = None
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
        progress_manager.reset_console()
        self.config = None


_state = _LoggingState()


def init_logging(**options: object) -> None:
    """Install handlers; ``options`` override :class:`LoggingConfig` fields.

    Calling it again with the same options does nothing; different options
    replace the running handlers.
    """

    known = {key: value for key, value in options.items() if key in LoggingConfig.__dataclass_fields__}
    with _state.lock:
        _state.install(replace(LoggingConfig(), **known))


def shutdown_logging() -> None:
    """Stop the queue listener and detach handlers, flushing pending records."""

    with _state.lock:
        _state.uninstall()


def get_logger(name: str | None = None) -> logging.Logger:
    with _state.lock:
        if _state.config is None:
            _state.install(LoggingConfig())
    return logging.getLogger(name or APP_LOGGER)
