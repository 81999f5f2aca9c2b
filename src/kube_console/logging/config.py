"""structlog setup for kcon.

The TUI owns the terminal while it runs, so records are written as JSON lines
to a rotating file. Rendering to stderr is opt-in and meant for commands that
do not start the TUI.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

DEFAULT_LOG_FILE = Path.home() / ".local" / "state" / "kcon" / "kcon.log"
LOG_FILE_ENV = "KCON_LOG_FILE"
MAX_LOG_SIZE = 10 * 1024 * 1024
BACKUP_COUNT = 5
RETENTION_DAYS = 30

# Chatty at DEBUG: one record per HTTP request.
NOISY_LOGGERS = ("kubernetes", "urllib3")

SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def resolve_log_file(log_file: Path | None = None) -> Path:
    """Pick the log file: explicit path, then ``KCON_LOG_FILE``, then the default."""
    if log_file is not None:
        return log_file.expanduser()
    if env_path := os.environ.get(LOG_FILE_ENV):
        return Path(env_path).expanduser()
    return DEFAULT_LOG_FILE


def prune_old_logs(log_file: Path, retention_days: int = RETENTION_DAYS) -> list[Path]:
    """Remove rotated copies of ``log_file`` not written to for ``retention_days``.

    Files that cannot be removed are left alone.

    Returns:
        The paths that were removed.
    """
    if not log_file.parent.is_dir():
        return []
    cutoff = time.time() - retention_days * 86400
    removed = []
    for candidate in log_file.parent.glob(f"{log_file.name}*"):
        with contextlib.suppress(OSError):
            if candidate.stat().st_mtime < cutoff:
                candidate.unlink()
                removed.append(candidate)
    return removed


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=MAX_LOG_SIZE, backupCount=BACKUP_COUNT)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=SHARED_PROCESSORS,
        )
    )
    return handler


def _console_handler(level: int, show_locals: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=show_locals),
            ),
            foreign_pre_chain=SHARED_PROCESSORS,
        )
    )
    return handler


def configure_logging(
    verbose: bool = False,
    debug: bool = False,
    console: bool = False,
    log_file: Path | None = None,
) -> Path:
    """Route structlog through stdlib logging into the kcon log file.

    Args:
        verbose: Log at INFO instead of WARNING.
        debug: Log at DEBUG; also shows locals in console tracebacks.
        console: Also render records to stderr. Leave off while the TUI runs.
        log_file: Overrides ``KCON_LOG_FILE`` and the default location.

    Returns:
        The file records are written to.
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING

    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Level filtering happens in structlog and on each handler.
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if console:
        root.addHandler(_console_handler(level, show_locals=debug))

    path = resolve_log_file(log_file)
    prune_old_logs(path)
    root.addHandler(_file_handler(path))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return path
