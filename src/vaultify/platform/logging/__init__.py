"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export the configured logger, setup helper, and the Rich event handler.
Why: Provide a single canonical import path for every module that logs.
"""

from __future__ import annotations

from .config import LOGGER_NAME, logger, setup_logger
from .handlers import EventRichHandler

__all__ = [
    "EventRichHandler",
    "LOGGER_NAME",
    "logger",
    "setup_logger",
]
