"""Shot utility modules.

- logging: Console/JSON logging for the CLI, writing to stderr
"""

from shot.utils.logging import get_logger, log_template_error, setup_logging

__all__ = [
    "get_logger",
    "log_template_error",
    "setup_logging",
]
