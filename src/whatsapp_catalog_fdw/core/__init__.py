"""
Infrastructure helpers shared across the package.
"""

from .logging import StructuredLogFormatter, configure_logging, get_logger, log_progress

__all__ = [
    "StructuredLogFormatter",
    "configure_logging",
    "get_logger",
    "log_progress",
]
