"""
Logging setup for the hpcheck command line.

The library modules only create module loggers (``logging.getLogger(__name__)``)
and never configure handlers; the CLI calls ``ensure_logging`` once. Log
records may carry ``postal_code``, ``rule_id`` or ``intervention_id`` extras,
which both formatters append to the output.

Usage:
    from hpcheck.utils.logging_config import setup_logging

    setup_logging("DEBUG", log_to_file=True)
"""

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


# Default log level from environment
DEFAULT_LOG_LEVEL = os.environ.get("HPCHECK_LOG_LEVEL", "WARNING").upper()

# Log directory
LOG_DIR = Path(os.environ.get("HPCHECK_LOG_DIR", "logs"))

CONTEXT_KEYS = ("postal_code", "rule_id", "intervention_id")


class HpcheckFormatter(logging.Formatter):
    """Console formatter with color support and context extras."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors and sys.stderr.isatty()
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        extras = [f"{key}={getattr(record, key)}" for key in CONTEXT_KEYS if hasattr(record, key)]
        if extras:
            formatted = f"{formatted} [{', '.join(extras)}]"

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            return f"{color}{formatted}{self.RESET}"
        return formatted


class FileFormatter(logging.Formatter):
    """Dict-style formatter for file output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in CONTEXT_KEYS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return str(log_data)


def setup_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_to_file: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure logging for the command line application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to also log to a file
        log_file: Custom log file path (default: logs/hpcheck_YYYYMMDD.log)
    """
    level = level.upper()
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level, logging.WARNING))

    root_logger.handlers.clear()

    # Console output goes to stderr so --json output stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(HpcheckFormatter(use_colors=True))
    console_handler.setLevel(getattr(logging, level, logging.WARNING))
    root_logger.addHandler(console_handler)

    if log_to_file:
        if log_file is None:
            LOG_DIR.mkdir(exist_ok=True)
            log_file = LOG_DIR / f"hpcheck_{datetime.now().strftime('%Y%m%d')}.log"
        else:
            log_file = Path(log_file)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(FileFormatter())
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)


_initialized = False


def ensure_logging(level: Optional[str] = None) -> None:
    """Set up logging once per process."""
    global _initialized
    if not _initialized:
        setup_logging(level or DEFAULT_LOG_LEVEL)
        _initialized = True
