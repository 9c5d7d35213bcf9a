"""Utilities Package."""

from . import platform
from .logging import (
    LoggerRegistry,
    clear_logger_registry,
    create_logger,
    get_logger,
    setup_logging,
)

__all__ = [
    "LoggerRegistry",
    "clear_logger_registry",
    "create_logger",
    "get_logger",
    "platform",
    "setup_logging",
]
