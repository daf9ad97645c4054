"""
Logging utilities for the locimages package.
"""

import logging
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional


# Settings applied to loggers created lazily through get_logger()
_defaults: Dict[str, Any] = {
    "level": "INFO",
    "enable_console": True,
    "enable_file_logging": False,
    "log_dir": "logs",
}


class ColoredFormatter(logging.Formatter):
    """Colored console formatter for logs."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        level_colored = f"{color}{record.levelname:<8}{reset}"
        logger_name = f"[{record.name}]" if record.name != 'root' else ""

        message = f"{timestamp} {level_colored} {logger_name} {record.getMessage()}"

        if getattr(record, 'extra_fields', None):
            extra_str = " | ".join([f"{k}={v}" for k, v in record.extra_fields.items()])
            message += f" | {extra_str}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for the file handlers."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "time": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if getattr(record, 'extra_fields', None):
            log_entry.update(record.extra_fields)

        if record.name != 'root':
            log_entry['logger'] = record.name

        if record.funcName:
            log_entry['function'] = record.funcName

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


def setup_logger(name: str = "locimages",
                 level: str = "INFO",
                 enable_console: bool = True,
                 enable_file_logging: bool = False,
                 log_dir: str = "logs") -> logging.Logger:
    """
    Set up a logger with colored console output and optional JSON log files.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Whether to enable colored console output (stderr)
        enable_file_logging: Whether to write info.log / error.log
        log_dir: Directory for log files

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredFormatter())
        logger.addHandler(console_handler)

    if enable_file_logging:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        info_handler = logging.FileHandler(log_path / "info.log", encoding='utf-8')
        info_handler.setLevel(logging.INFO)
        info_handler.setFormatter(JSONFormatter())
        logger.addHandler(info_handler)

        error_handler = logging.FileHandler(log_path / "error.log", encoding='utf-8')
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        logger.addHandler(error_handler)

    logger.propagate = False

    return logger


def configure_logging(settings: Optional[Dict[str, Any]] = None) -> None:
    """
    Apply the ``logging`` section of the configuration.

    Loggers already handed out by get_logger() are rebuilt with the new
    settings; loggers created later pick them up on first use.
    """
    settings = settings or {}
    _defaults.update({
        "level": settings.get("level", _defaults["level"]),
        "enable_file_logging": bool(settings.get("file_logging", _defaults["enable_file_logging"])),
        "log_dir": settings.get("log_dir", _defaults["log_dir"]),
    })

    for name, existing in list(logging.Logger.manager.loggerDict.items()):
        if isinstance(existing, logging.Logger) and name.startswith("locimages") and existing.handlers:
            setup_logger(name=name, **_defaults)


def get_logger(name: str = "locimages") -> logging.Logger:
    """Get existing logger or create a new one with the current defaults."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        return setup_logger(name=name, **_defaults)

    return logger


def log_with_extra(logger: logging.Logger, level: str, message: str, **extra_fields) -> None:
    """
    Log a message with extra structured fields.

    Args:
        logger: Logger instance
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        message: Log message
        **extra_fields: Additional fields to include in the log
    """
    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return

    record = logger.makeRecord(logger.name, levelno, "", 0, message, (), None)
    record.extra_fields = extra_fields
    logger.handle(record)


def log_search(logger: logging.Logger, source: str, query: str, count: int, mode: str, **extra):
    """Log the outcome of one adapter search."""
    log_with_extra(
        logger, "INFO", f"{source} returned {count} images ({mode})",
        source=source, query=query, count=count, mode=mode, **extra
    )


def log_error(logger: logging.Logger, message: str, error: Exception, **extra):
    """Log errors with exception details."""
    log_with_extra(
        logger, "ERROR", message,
        error_type=type(error).__name__, error_message=str(error), **extra
    )
