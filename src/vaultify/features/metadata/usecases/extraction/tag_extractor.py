"""Embedded tag extraction facade.

Where: src/vaultify/features/metadata/usecases/extraction/tag_extractor.py
What: Route a file to its format extractor and absorb read failures.
Why: Reconciliation treats unreadable tags as missing evidence, never as an error.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from vaultify.platform.logging import logger
from vaultify.shared.errors import DecodeError
from vaultify.shared.track_metadata import CandidateSource, MetadataCandidate

from ._base_extractors import AudioFormatExtractor
from .format_extractors import (
    AacExtractor,
    FlacExtractor,
    M4aExtractor,
    Mp3Extractor,
    OggExtractor,
    WavExtractor,
)

__all__ = ["TagExtractor"]


class TagExtractor:
    """Facade for reading embedded tags from audio files.

    Selects the extractor by file extension.
    """

    _format_map: ClassVar[dict[str, AudioFormatExtractor]] = {
        ".mp3": Mp3Extractor(),
        ".flac": FlacExtractor(),
        ".ogg": OggExtractor(),
        ".m4a": M4aExtractor(),
        ".wav": WavExtractor(),
        ".aac": AacExtractor(),
    }

    @classmethod
    def supported_formats(cls) -> frozenset[str]:
        return frozenset(cls._format_map)

    @classmethod
    def extract_strict(cls, file_path: Path) -> MetadataCandidate:
        """Extract tags and let failures propagate.

        Raises:
            DecodeError: If the format is unsupported or the file cannot be parsed.
            FileNotFoundError: If the file does not exist.
        """
        ext = file_path.suffix.lower()
        extractor = cls._format_map.get(ext)
        if extractor is None:
            raise DecodeError(f"Unsupported audio format: {ext or file_path.name}")
        return extractor.extract_candidate(file_path)

    @classmethod
    def extract(cls, file_path: Path) -> MetadataCandidate:
        """Extract tags, returning an empty file-tag candidate on any failure.

        Args:
            file_path: Path to the audio payload.

        Returns:
            MetadataCandidate: Candidate with ``source`` set to the file-tag
            source; fields are empty when tags are absent or unreadable.
        """
        try:
            return cls.extract_strict(file_path)
        except (DecodeError, OSError) as exc:
            logger.warning("No readable tags in %s: %s", file_path.name, exc)
            return MetadataCandidate(source=CandidateSource.FILE_TAG)
