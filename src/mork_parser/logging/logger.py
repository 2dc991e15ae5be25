"""
Logging setup for the Mork parser.

Every logger comes from ``get_logger``. The first call reads the ``logging``
section of ``config/mork_parser.yml`` into a ``LogSettings`` and hangs the
shared handlers on the ``mork_parser`` logger:

* ``logs/mork_parser.log``, the master file (rotating if ``rotate: true``);
* a stderr console handler.

Each named logger below it also writes ``logs/<name>.log``. ``debug: true``
forces DEBUG everywhere.

The parser reports through two channels built on top of this:
``mork_parser.trace`` (running commentary, echoed to stdout) and
``mork_parser.errors`` (recoverable problems and format errors).
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from mork_parser.config import get_config

PROJECT_ROOT = Path(__file__).resolve().parents[3]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TRACE_FORMAT = "%(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

BASE_LOGGER_NAME = "mork_parser"
TRACE_LOGGER_NAME = "mork_parser.trace"
ERROR_LOGGER_NAME = "mork_parser.errors"

ROTATE_MAX_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 5


@dataclass(frozen=True)
class LogSettings:
    level: int
    console_level: int
    log_dir: Path
    master_file: str
    rotate: bool

    @classmethod
    def from_config(cls) -> "LogSettings":
        cfg = get_config()
        section = cfg.logging

        level = getattr(logging, str(section.get("level", "INFO")).upper(), logging.INFO)
        if cfg.debug:
            level = logging.DEBUG

        log_dir = Path(section.get("dir") or cfg.paths.get("logs_dir") or "logs")
        if not log_dir.is_absolute():
            log_dir = PROJECT_ROOT / log_dir

        return cls(
            level=level,
            console_level=logging.DEBUG if cfg.debug else logging.INFO,
            log_dir=log_dir,
            master_file=section.get("file", "mork_parser.log"),
            rotate=bool(section.get("rotate", False)),
        )

    def file_handler(self, filename: str) -> logging.Handler:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        path = self.log_dir / filename
        if self.rotate:
            handler: logging.Handler = RotatingFileHandler(
                path,
                maxBytes=ROTATE_MAX_BYTES,
                backupCount=ROTATE_BACKUPS,
                encoding="utf-8",
            )
        else:
            handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(self.level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler


_settings: Optional[LogSettings] = None


def _setup() -> LogSettings:
    """Attach the master file and console handlers to the base logger, once."""
    global _settings
    if _settings is not None:
        return _settings

    settings = LogSettings.from_config()
    base = logging.getLogger(BASE_LOGGER_NAME)
    base.setLevel(settings.level)
    base.propagate = False
    base.addHandler(settings.file_handler(settings.master_file))

    console = StreamHandler()
    console.setLevel(settings.console_level)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base.addHandler(console)

    _settings = settings
    return settings


def get_logger(name: str | None = None) -> Logger:
    """Return ``name``'s logger wired to the shared handlers.

    Loggers under ``mork_parser`` propagate to the base logger and get their
    own ``logs/<name>.log`` on first use.
    """
    settings = _setup()
    logger = logging.getLogger(name or BASE_LOGGER_NAME)
    logger.setLevel(settings.level)
    if logger.name == BASE_LOGGER_NAME:
        return logger

    if not any(getattr(h, "is_module_handler", False) for h in logger.handlers):
        handler = settings.file_handler(f"{logger.name.replace('.', '_')}.log")
        handler.is_module_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.propagate = True
    return logger


def get_trace_logger() -> Logger:
    """Return the parser trace channel (DEBUG, echoed to stdout as bare lines)."""
    logger = get_logger(TRACE_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    if not any(getattr(h, "is_trace_handler", False) for h in logger.handlers):
        handler = StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(TRACE_FORMAT))
        handler.is_trace_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


def get_error_logger() -> Logger:
    """Return the error channel (warnings and errors, console + files)."""
    return get_logger(ERROR_LOGGER_NAME)
