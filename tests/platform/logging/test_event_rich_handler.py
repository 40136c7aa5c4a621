"""Tests for the ``EventRichHandler`` event rendering."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any

from rich.console import Console
from rich.text import Text

from vaultify.platform.logging import EventRichHandler
from vaultify.shared.events import PipelineEvent


def _make_handler() -> EventRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return EventRichHandler(console=console)


def _build_record(**extras: Any) -> logging.LogRecord:
    record = logging.LogRecord(
        name="vaultify",
        level=logging.INFO,
        pathname="test",
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_event_records_render_details() -> None:
    handler = _make_handler()
    record = _build_record(
        event=PipelineEvent.RECONCILE_COMPLETE,
        file_name="Anirudh - Kutti Story.mp3",
        provider="JioSaavn",
        duration_ms=12.34,
    )

    rendered = handler.render_message(record, "Reconciled")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert "Reconciled @ Anirudh - Kutti Story.mp3" in plain
    assert "provider=JioSaavn" in plain
    assert "12.3 ms" in plain


def test_file_name_already_in_message_is_not_repeated() -> None:
    handler = _make_handler()
    record = _build_record(event=PipelineEvent.UPLOAD_START, file_name="song.mp3")

    rendered = handler.render_message(record, "Uploading song.mp3")
    assert isinstance(rendered, Text)
    assert rendered.plain.count("song.mp3") == 1


def test_plain_records_fall_back_to_rich_rendering() -> None:
    handler = _make_handler()

    rendered = handler.render_message(_build_record(), "plain message [not markup]")

    assert isinstance(rendered, Text)
    assert rendered.plain == "plain message [not markup]"
