"""Shared base classes for tag extractors.

Where: src/vaultify/features/metadata/usecases/extraction/_base_extractors.py
What: Abstract base classes that encapsulate mutagen file opening and tag lookup.
Why: Each format only declares its file class and tag keys.
"""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Any, ClassVar, override

from vaultify.platform.logging import logger
from vaultify.shared.errors import DecodeError
from vaultify.shared.track_metadata import CandidateSource, MetadataCandidate

from ._tag_utils import safe_get_first

__all__ = [
    "AudioFormatExtractor",
    "BaseAudioExtractor",
    "BaseTagExtractor",
]


class AudioFormatExtractor(abc.ABC):
    """Abstract base class for audio tag extractors."""

    @abc.abstractmethod
    def extract_candidate(self, file_path: Path) -> MetadataCandidate:
        """Read embedded tags into a file-tag candidate."""
        raise NotImplementedError


class BaseTagExtractor:
    """Provides common helper methods for tag extraction."""

    @staticmethod
    def get_str_tag(tags: Any, key: str, default: str | None = None) -> str | None:
        """Extract the first string value for a key from a tag collection."""
        value = tags.get(key)
        if isinstance(value, list):
            return safe_get_first(data=value, default=default or "")
        if isinstance(value, str):
            return value
        return default


class BaseAudioExtractor(AudioFormatExtractor, abc.ABC):
    """Base class for mutagen-backed extractors."""

    FILE_CLASS: ClassVar[type | None] = None
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {}

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "",
        "artist": "",
        "album": "",
        "genre": "",
    }

    def _open_file(self, file_path: Path) -> Any:
        """Open the audio file with the format's mutagen class.

        Raises:
            DecodeError: If mutagen cannot parse the file.
        """
        if self.FILE_CLASS is None:
            raise NotImplementedError("FILE_CLASS must be defined in subclass")
        try:
            return self.FILE_CLASS(file_path, **self.FILE_INIT_PARAMS)
        except FileNotFoundError:
            raise
        except Exception as exc:
            # mutagen raises MutagenError subclasses and, for some truncated
            # files, plain struct/value errors.
            raise DecodeError(
                f"Cannot read {self.__class__.__name__.replace('Extractor', '')} tags from {file_path.name}: {exc}"
            ) from exc

    @abc.abstractmethod
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        """Get a tag value from the opened file."""
        raise NotImplementedError

    @override
    def extract_candidate(self, file_path: Path) -> MetadataCandidate:
        """Extract title, artist, album and genre.

        Raises:
            DecodeError: If the file cannot be parsed.
            FileNotFoundError: If the file does not exist.
        """
        tags = self._open_file(file_path)
        logger.debug("Opened %s with tags type: %s", file_path, type(tags))

        values = {
            name: (self._get_tag_value(tags, key=key) or "").strip() if key else ""
            for name, key in self.TAG_MAPPING.items()
        }
        candidate = MetadataCandidate(
            title=values.get("title", ""),
            artist=values.get("artist", ""),
            album=values.get("album", ""),
            genre=values.get("genre", ""),
            source=CandidateSource.FILE_TAG,
        )
        logger.debug("Extracted tag candidate: %s", candidate)
        return candidate
