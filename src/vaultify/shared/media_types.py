"""Supported upload extensions and their content types.

Both the ingest feature and the filename parser need the same view of which
extensions are audio and which are archives, so the tables live here.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Final


AUDIO_EXTENSIONS: Final[frozenset[str]] = frozenset({".mp3", ".wav", ".ogg", ".flac", ".m4a", ".aac"})
ARCHIVE_EXTENSIONS: Final[frozenset[str]] = frozenset({".zip", ".rar", ".7z"})

DEFAULT_CONTENT_TYPE: Final[str] = "application/octet-stream"

CONTENT_TYPES: Final[dict[str, str]] = {
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".zip": "application/zip",
    ".rar": "application/x-rar-compressed",
    ".7z": "application/x-7z-compressed",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
}


def extension_of(file_name: str) -> str:
    """Lower-cased extension including the dot, or ``""``."""

    return PurePath(file_name).suffix.lower()


def is_audio(file_name: str) -> bool:
    return extension_of(file_name) in AUDIO_EXTENSIONS


def is_archive(file_name: str) -> bool:
    return extension_of(file_name) in ARCHIVE_EXTENSIONS


def content_type_for(file_name: str) -> str:
    """Content type stored alongside an uploaded object."""

    return CONTENT_TYPES.get(extension_of(file_name), DEFAULT_CONTENT_TYPE)


__all__ = [
    "ARCHIVE_EXTENSIONS",
    "AUDIO_EXTENSIONS",
    "CONTENT_TYPES",
    "DEFAULT_CONTENT_TYPE",
    "content_type_for",
    "extension_of",
    "is_archive",
    "is_audio",
]
