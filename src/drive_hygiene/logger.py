"""Console and file logging for the drive_hygiene package."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

ROOT_LOGGER = "drive_hygiene"
LOG_FILE = Path("logs") / "drive_hygiene.log"

_file_logging_configured = False
_configured_log_file: Optional[Path] = None


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Path:
    """Mirror package log records into a file.

    Args:
        log_file: Target file (defaults to logs/drive_hygiene.log)
        verbose: Log at DEBUG instead of INFO

    Returns:
        The file actually written to. Falls back to the temp directory when
        the requested location is not writable.
    """
    global _file_logging_configured, _configured_log_file

    target = Path(log_file) if log_file else LOG_FILE
    root_logger = logging.getLogger(ROOT_LOGGER)
    level = logging.DEBUG if verbose else logging.INFO

    if _file_logging_configured and _configured_log_file is not None:
        root_logger.setLevel(level)
        return _configured_log_file

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        target = Path(tempfile.gettempdir()) / "drive_hygiene.log"
        handler = logging.FileHandler(target, encoding="utf-8")

    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    _file_logging_configured = True
    _configured_log_file = target
    root_logger.info("File logging initialized: %s", target)
    return target


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace.

    The rich console handler is attached once, to the package root logger,
    so child loggers inherit it through propagation.
    """
    _console_handler()
    return logging.getLogger(name)


def set_console_level(verbose: bool) -> None:
    _console_handler().setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)


def _console_handler() -> RichHandler:
    root_logger = logging.getLogger(ROOT_LOGGER)
    for h in root_logger.handlers:
        if isinstance(h, RichHandler):
            return h
    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(logging.WARNING)
    root_logger.addHandler(handler)
    if root_logger.level == logging.NOTSET:
        root_logger.setLevel(logging.INFO)
    return handler
