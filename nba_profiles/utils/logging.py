"""Structured logging configuration.

structlog renders through the stdlib root logger so library output (duckdb,
pyarrow) and pipeline events share one stream. Context bound for a run
(``run_id``, ``pipeline``) is merged into every event emitted inside it.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.types import Processor

from nba_profiles.utils.config import get_settings

LOG_FILE_NAME = "nba_profiles.log"

_active_log_file: Path | None = None


def get_active_log_file() -> Path | None:
    """Return the log file attached by :func:`setup_logging`, if any."""
    return _active_log_file


def _console_renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _file_handler(log_dir: Path, level: int) -> logging.Handler | None:
    settings = get_settings()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
    except (PermissionError, OSError) as e:
        print(
            f"Warning: file logging disabled, cannot write to '{log_dir}': {e}",
            file=sys.stderr,
        )
        return None

    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer())
    )
    return handler


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structured logging for the application.

    Console output uses the configured format; the rotating file under
    ``log_dir`` is always JSON lines.

    Args:
        level: Overrides ``settings.log_level``.
        log_format: Overrides ``settings.log_format`` ("json" or "console").
    """
    global _active_log_file  # noqa: PLW0603

    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_console_renderer(log_format or settings.log_format)
        )
    )
    root.addHandler(console_handler)

    file_handler = _file_handler(Path(settings.log_dir), numeric_level)
    if file_handler is not None:
        root.addHandler(file_handler)
        _active_log_file = Path(file_handler.baseFilename)
    else:
        _active_log_file = None

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.ExceptionRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def run_log_context(**kwargs: Any) -> Iterator[None]:
    """
    Bind key-value pairs to every log event emitted inside the block.

    Keys bound by an enclosing block are restored on exit.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
