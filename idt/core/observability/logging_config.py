"""
Logging configuration for the idt CLI.

Installs run on worker threads, one tool each, so interleaved lines
are only readable when each record says which tool produced it. Every
handler gets a ``ToolContextFilter`` that stamps ``record.tool`` with
the ``bin_name`` bound by ``tool_context()`` (``-`` outside any tool).

Levels:
    --debug / --verbose / --quiet  >  IDT_LOG_LEVEL  >  WARNING

IDT_LOG_FILE adds a file handler, at IDT_LOG_FILE_LEVEL when set.
"""

from __future__ import annotations

import contextvars
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager

ENV_LEVEL = "IDT_LOG_LEVEL"
ENV_FILE = "IDT_LOG_FILE"
ENV_FILE_LEVEL = "IDT_LOG_FILE_LEVEL"

NO_TOOL = "-"

_current_tool: contextvars.ContextVar[str] = contextvars.ContextVar(
    "idt_tool", default=NO_TOOL,
)

# Console: bare messages unless asked for more; the tool tag shows up
# as soon as timestamps do.
_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: (
        "%(asctime)s %(levelname)-5s [%(tool)s] %(name)s:%(lineno)d - %(message)s",
        "%H:%M:%S",
    ),
    logging.INFO: ("%(asctime)s [%(tool)s] %(message)s", "%H:%M:%S"),
}
_FMT_PLAIN = "%(message)s"
_FMT_FILE = (
    "%(asctime)s %(levelname)-5s %(threadName)s [%(tool)s] "
    "%(name)s:%(lineno)d - %(message)s"
)

# Raised to WARNING unless running at DEBUG
_NOISY_LOGGERS = ("concurrent.futures",)


class ToolContextFilter(logging.Filter):
    """Adds ``record.tool``: the tool being installed on this thread."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tool = _current_tool.get()
        return True


@contextmanager
def tool_context(bin_name: str) -> Iterator[None]:
    """Attribute every record logged inside the block to ``bin_name``."""
    token = _current_tool.set(bin_name)
    try:
        yield
    finally:
        _current_tool.reset(token)


def current_tool() -> str:
    return _current_tool.get()


def resolve_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """CLI flags first, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def _parse_level(level: str | None) -> int:
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING


def _handler(handler: logging.Handler, level: int, fmt: str, datefmt: str | None):
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    handler.addFilter(ToolContextFilter())
    return handler


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger once, at CLI start.

    Args:
        level: Console level name. The file handler (if IDT_LOG_FILE is
            set) defaults to the same level.
    """
    console_level = _parse_level(level)
    fmt, datefmt = next(
        (f for threshold, f in sorted(_FORMATS.items()) if console_level <= threshold),
        (_FMT_PLAIN, None),
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_handler(logging.StreamHandler(sys.stderr), console_level, fmt, datefmt))
    root_level = console_level

    log_file = os.environ.get(ENV_FILE)
    if log_file:
        file_level = _parse_level(os.environ.get(ENV_FILE_LEVEL) or level)
        root.addHandler(_handler(
            logging.FileHandler(log_file, encoding="utf-8"),
            file_level, _FMT_FILE, "%Y-%m-%d %H:%M:%S",
        ))
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False
