"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Build the shared ``vaultify`` logger and route uvicorn's loggers through it.
Why: The CLI reconfigures logging after config load; handlers must be replaced, not stacked.
"""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterable
from pathlib import Path
from typing import Final

from rich.console import Console

from .handlers import EventRichHandler


LOGGER_NAME: Final[str] = "vaultify"
SERVER_LOGGERS: Final[tuple[str, ...]] = ("uvicorn", "uvicorn.access")

_FILE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_MAX_LOG_BYTES: Final[int] = 10 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 5


def _reset(target: logging.Logger) -> None:
    for handler in list(target.handlers):
        handler.close()
    target.handlers.clear()


def setup_logger(
    log_file: Path | None = None,
    console_level: int | None = None,
    file_level: int = logging.DEBUG,
    server_loggers: Iterable[str] = SERVER_LOGGERS,
) -> logging.Logger:
    """Set up the service logger.

    Args:
        log_file: Rotating log file; console only when ``None``.
        console_level: Console threshold. ``None`` keeps the level of the
            current console handler, or INFO on first setup.
        file_level: File threshold.
        server_loggers: Loggers (uvicorn by default) that share the handlers.

    Returns:
        logging.Logger: The configured ``vaultify`` logger.
    """
    service_logger = logging.getLogger(LOGGER_NAME)
    if console_level is None:
        current = next((h for h in service_logger.handlers if isinstance(h, EventRichHandler)), None)
        console_level = current.level if current is not None else logging.INFO

    _reset(service_logger)
    service_logger.setLevel(logging.DEBUG)

    console_handler = EventRichHandler(console=Console(stderr=True, soft_wrap=True))
    console_handler.setLevel(console_level)
    handlers: list[logging.Handler] = [console_handler]

    if log_file is not None:
        resolved_log_file = Path(log_file).expanduser().resolve()
        resolved_log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            resolved_log_file,
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_LOG_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    for handler in handlers:
        service_logger.addHandler(handler)

    for name in server_loggers:
        server_logger = logging.getLogger(name)
        _reset(server_logger)
        server_logger.setLevel(logging.INFO)
        server_logger.propagate = False
        for handler in handlers:
            server_logger.addHandler(handler)

    return service_logger


logger: Final[logging.Logger] = setup_logger(server_loggers=())


__all__ = ["LOGGER_NAME", "SERVER_LOGGERS", "setup_logger", "logger"]
