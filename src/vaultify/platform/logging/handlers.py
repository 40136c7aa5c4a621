"""Rich console handler for structured pipeline events.

Where: src/vaultify/platform/logging/handlers.py
What: Render records carrying an ``event`` extra with icons and colours.
Why: Keep upload and reconciliation logs scannable on a terminal.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class EventRichHandler(RichHandler):
    """Rich handler that styles pipeline events and falls back to plain rendering."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "upload.start": ("🎧", "blue"),
        "upload.complete": ("🎉", "green"),
        "upload.error": ("⛔", "red"),
        "archive.expand": ("📦", "magenta"),
        "archive.member.error": ("⛔", "red"),
        "reconcile.complete": ("🔎", "cyan"),
        "catalog.provider.error": ("⚠️", "yellow"),
        "catalog.provider.empty": ("ℹ️", "yellow"),
        "store.write": ("💾", "green"),
        "store.legacy.cleanup": ("♻️", "green"),
    }

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs.setdefault("show_time", True)
        kwargs["show_path"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _render_event_message(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render a structured event with a leading icon and optional details."""

        event = getattr(record, "event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        _ = text.append(message, style=Style(color=color))

        file_name = getattr(record, "file_name", None)
        if isinstance(file_name, str) and file_name and file_name not in message:
            _ = text.append(" @ ", style=Style(color="white"))
            _ = text.append(file_name, style=Style(color="white"))

        details: list[str] = []
        provider = getattr(record, "provider", None)
        if isinstance(provider, str) and provider not in message:
            details.append(f"provider={provider}")
        duration_ms = getattr(record, "duration_ms", None)
        if isinstance(duration_ms, (int, float)):
            details.append(f"{duration_ms:.1f} ms")
        if details:
            _ = text.append(" [" + ", ".join(details) + "]", style=Style(color="bright_black"))
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for pipeline events."""

        event_text = self._render_event_message(record, message)
        if event_text is not None:
            return event_text
        return super().render_message(record, message)


__all__ = ["EventRichHandler"]
