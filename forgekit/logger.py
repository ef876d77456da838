"""
EntropyForge Structured Logger
===============================

:class:`ForgeLogger` sends records to a Rich console handler on stderr
and, optionally, to a rotating file as plain text or JSON lines.

The active *operation* lives in a :class:`contextvars.ContextVar`, so
threads and tasks sharing one engine each see their own value.  A
filter stamps ``tool_name`` and ``operation`` onto every record when it
is created.

Generated passwords are never passed to the logger; records carry only
lengths, option flags, scores and timings.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - PEP 567 (2017). Context Variables.
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
    }
)

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(operation)s | %(message)s"

_current_operation: ContextVar[str | None] = ContextVar(
    "forge_operation", default=None
)

# Keyword arguments the stdlib logging calls accept themselves.
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


class _ContextFilter(logging.Filter):
    """Stamp the component name and the caller's operation onto records."""

    def __init__(self, tool_name: str) -> None:
        super().__init__()
        self._tool_name = tool_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.tool_name = self._tool_name
        record.operation = _current_operation.get()
        if not hasattr(record, "forge_extra"):
            record.forge_extra = None
        return True


class _JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``timestamp``, ``level``, ``logger``, ``message``,
    ``tool_name``, and when present ``operation``, ``extra`` and
    ``exc_info``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "tool_name": getattr(record, "tool_name", None),
        }
        if getattr(record, "operation", None) is not None:
            entry["operation"] = record.operation
        if getattr(record, "forge_extra", None):
            entry["extra"] = record.forge_extra
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _console_handler() -> logging.Handler:
    return RichHandler(
        console=Console(theme=_LOG_THEME, stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )


def _file_handler(path: Path, json_logs: bool, max_bytes: int, backup_count: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(
        _JSONFormatter()
        if json_logs
        else logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
    )
    return handler


class Stopwatch:
    """Elapsed wall time since construction."""

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self._start


class ForgeLogger:
    """Logger bound to one EntropyForge component.

    Usage::

        log = ForgeLogger("engine", log_file="forge.log", json_logs=True)
        with log.operation("diceware_analysis"):
            log.debug("Generating passphrase", word_count=6)

    Keyword arguments other than ``exc_info``, ``stack_info`` and
    ``stacklevel`` are collected into the record's ``forge_extra`` dict.

    Re-creating a logger for the same component closes and replaces the
    handlers of the previous instance; both instances then share the new
    handlers.

    Args:
        tool_name: Component name; the stdlib logger is ``entropyforge.<tool_name>``.
        log_level: Minimum severity name.
        log_file: Rotating log file; ``None`` disables file logging.
        json_logs: Write JSON lines instead of plain text to the file.
        max_bytes: File size that triggers rotation.
        backup_count: Rotated files to keep.
        console_output: Attach the Rich stderr handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._logger = logging.getLogger(f"entropyforge.{tool_name}")
        self._logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        self._logger.propagate = False

        handlers: list[logging.Handler] = []
        if console_output:
            handlers.append(_console_handler())
        if log_file is not None:
            handlers.append(_file_handler(Path(log_file), json_logs, max_bytes, backup_count))
        if not handlers:
            handlers.append(logging.NullHandler())
        self._replace_handlers(handlers)

        for existing in list(self._logger.filters):
            if isinstance(existing, _ContextFilter):
                self._logger.removeFilter(existing)
        self._logger.addFilter(_ContextFilter(tool_name))

    def _replace_handlers(self, handlers: list[logging.Handler]) -> None:
        for old in list(self._logger.handlers):
            self._logger.removeHandler(old)
            old.close()
        for handler in handlers:
            self._logger.addHandler(handler)

    # ------------------------------------------------------------------ #
    #  Context
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[ForgeLogger]:
        """Tag records emitted in this context with ``operation=<name>``."""
        token = _current_operation.set(name)
        try:
            yield self
        finally:
            _current_operation.reset(token)

    @contextmanager
    def timed(self, label: str) -> Iterator[Stopwatch]:
        """Log *label* at DEBUG on entry and with its duration at INFO on exit."""
        self.debug("Started: %s", label)
        watch = Stopwatch()
        try:
            yield watch
        finally:
            self.info("Completed: %s (%.3f sec)", label, watch.elapsed)

    @staticmethod
    def current_operation() -> str | None:
        """Operation bound in the caller's context, if any."""
        return _current_operation.get()

    # ------------------------------------------------------------------ #
    #  Emit
    # ------------------------------------------------------------------ #

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        fields = {k: kwargs.pop(k) for k in list(kwargs) if k not in _LOGGING_KWARGS}
        self._logger.log(level, msg, *args, extra={"forge_extra": fields or None}, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, args, kwargs)

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """The stdlib :class:`logging.Logger` behind this component."""
        return self._logger
