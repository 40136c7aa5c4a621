"""Where: src/vaultify/platform/catalog/payload.py
What: Coerce loosely typed provider JSON values into text.
Why: Catalog payloads sometimes carry numbers or nulls where a name is expected.
"""

from __future__ import annotations

from typing import Any


def payload_text(value: Any) -> str:
    """Return ``value`` as text; numbers are stringified, anything else is empty."""

    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


__all__ = ["payload_text"]
