"""Logging setup for the shot CLI and library.

Rendered templates go to stdout, so all log output goes to stderr.

Output modes:
- Human mode: [LEVEL] message (colored if TTY)
- Verbose mode: [LEVEL][HH:MM:SS] message
- CI/JSON mode: {"level":"...","ts":"...","msg":"...", ...extra fields}
"""

import json
import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO

from shot.errors import TemplateError


class LogMode(Enum):
    """Logging output mode."""

    HUMAN = "human"
    VERBOSE = "verbose"
    JSON = "json"


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    GRAY = "\033[90m"


LEVEL_COLORS = {
    logging.DEBUG: Colors.GRAY,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.RED,
}


def _is_tty(stream: TextIO | None) -> bool:
    """Check if the stream is a TTY (supports colors)."""
    return stream is not None and hasattr(stream, "isatty") and stream.isatty()


class ConsoleFormatter(logging.Formatter):
    """Formatter for terminal output.

    Format: [LEVEL] message, or [LEVEL][HH:MM:SS] message with timestamps.
    """

    def __init__(self, use_colors: bool = False, timestamps: bool = False) -> None:
        """Initialize console formatter.

        Args:
            use_colors: Whether to use ANSI colors
            timestamps: Whether to include a wall clock time
        """
        super().__init__()
        self.use_colors = use_colors
        self.timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        label = f"[{record.levelname}]"
        if self.use_colors:
            color = LEVEL_COLORS.get(record.levelno, Colors.RESET)
            label = f"{color}{label}{Colors.RESET}"

        if self.timestamps:
            label += datetime.now().strftime("[%H:%M:%S]")

        return f"{label} {record.getMessage()}"


class JSONFormatter(logging.Formatter):
    """Formatter for JSON lines output (machine-readable).

    Format: {"level":"ERROR","ts":"2026-10-19T09:12:05+00:00","msg":"...","line":3}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": datetime.now(UTC).isoformat(),
            "msg": record.getMessage(),
        }

        if hasattr(record, "extra_data"):
            log_entry.update(record.extra_data)

        return json.dumps(log_entry, default=str)


def get_logger(name: str = "shot") -> logging.Logger:
    """Get a shot logger instance.

    Args:
        name: Logger name

    Returns:
        Logger under the "shot" hierarchy
    """
    return logging.getLogger(name)


def log_structured(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """Log a message with additional structured data.

    Extra fields only show up in JSON mode; console output prints msg alone.

    Args:
        logger: Logger to emit on
        level: Log level
        msg: Log message
        **kwargs: Additional data to include in JSON output
    """
    logger.log(level, msg, extra={"extra_data": kwargs} if kwargs else None)


def log_template_error(logger: logging.Logger, error: TemplateError) -> None:
    """Log a template error with its location as structured fields."""
    fields: dict[str, Any] = {"error": type(error).__name__}
    if error.name:
        fields["template"] = error.name
    if error.lineno is not None:
        fields["line"] = error.lineno
    expression = getattr(error, "expression", None)
    if expression:
        fields["expression"] = expression
    log_structured(logger, logging.ERROR, str(error), **fields)


def setup_logging(
    mode: LogMode = LogMode.HUMAN,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Configure the "shot" logger.

    Args:
        mode: Output mode (human, verbose, json)
        level: Minimum log level
        stream: Output stream (default: stderr)
    """
    stream = stream or sys.stderr

    logger = logging.getLogger("shot")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter: logging.Formatter
    if mode == LogMode.JSON:
        formatter = JSONFormatter()
    else:
        formatter = ConsoleFormatter(
            use_colors=_is_tty(stream),
            timestamps=mode == LogMode.VERBOSE,
        )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_from_cli(
    verbose: bool = False,
    quiet: bool = False,
    ci: bool = False,
) -> None:
    """Configure logging based on CLI flags.

    Args:
        verbose: Enable verbose mode with timestamps and debug messages
        quiet: Suppress info messages (warnings and errors only)
        ci: Enable JSON output for CI/CD
    """
    if ci:
        mode = LogMode.JSON
    elif verbose:
        mode = LogMode.VERBOSE
    else:
        mode = LogMode.HUMAN

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    setup_logging(mode=mode, level=level)
