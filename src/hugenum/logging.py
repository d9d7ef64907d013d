"""
hugenum :: Logging

Structured logging for the library and the CLI. Library modules only emit
records (DEBUG on digit-shedding, INFO from the CLI); handlers are attached
by setup_logging(), normally called from the CLI entry point.
"""

import json
import logging
import sys
from typing import Optional

LOGGER_NAME = "hugenum"


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "extra_data"):
            log_entry.update(record.extra_data)
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        ts = self.formatTime(record, "%H:%M:%S")
        if self.use_color:
            color = self.COLORS.get(record.levelname, "")
            prefix = f"{color}{ts} [{record.levelname:>7}]{self.RESET}"
        else:
            prefix = f"{ts} [{record.levelname:>7}]"
        msg = f"{prefix} {record.name}: {record.getMessage()}"
        if record.exc_info and record.exc_info[1]:
            msg += "\n" + self.formatException(record.exc_info)
        return msg


def setup_logging(
    level: str = "WARNING",
    json_output: bool = False,
    stream=None,
) -> logging.Logger:
    """
    Configure the hugenum logger tree.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format instead of the human formatter
        stream: Output stream (default: stderr)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.handlers.clear()

    stream = stream or sys.stderr
    if json_output:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = HumanFormatter(use_color=hasattr(stream, "isatty") and stream.isatty())

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the hugenum tree.

    Module paths such as "src.hugenum.domain.scaled_int" map to
    "hugenum.domain.scaled_int".
    """
    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith("src."):
        name = name[len("src."):]
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
