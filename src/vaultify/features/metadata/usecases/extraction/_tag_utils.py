"""Tag utility helpers.

Where: src/vaultify/features/metadata/usecases/extraction/_tag_utils.py
What: Pure helpers for reading the first value out of mutagen tag containers.
Why: Mutagen returns lists, frames or plain strings depending on the format.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "first_frame_text",
    "safe_get_first",
]


def safe_get_first(data: list[str] | None, default: str = "") -> str:
    """Safely get the first element from a list or return the default."""
    return str(data[0]) if data else default


def first_frame_text(frame: Any) -> str | None:
    """Return the first text value of an ID3 frame, or ``None`` when it has none."""
    if frame is None:
        return None
    text = getattr(frame, "text", None)
    if isinstance(text, (list, tuple)):
        return str(text[0]) if text else None
    if text is None:
        return None
    return str(text)
