"""Format-specific tag extractors.

Where: src/vaultify/features/metadata/usecases/extraction/format_extractors.py
What: Concrete extractors for every accepted audio format.
Why: Keep format quirks out of the facade.
"""

from __future__ import annotations

from typing import Any, ClassVar

from mutagen.easyid3 import EasyID3
from mutagen.flac import FLAC
from mutagen.mp3 import MP3
from mutagen.mp4 import MP4
from mutagen.oggvorbis import OggVorbis
from mutagen.wave import WAVE

from ._base_extractors import BaseAudioExtractor, BaseTagExtractor
from ._tag_utils import first_frame_text

__all__ = [
    "AacExtractor",
    "FlacExtractor",
    "M4aExtractor",
    "Mp3Extractor",
    "OggExtractor",
    "WavExtractor",
]

_VORBIS_MAPPING: dict[str, str] = {
    "title": "title",
    "artist": "artist",
    "album": "album",
    "genre": "genre",
}


class Mp3Extractor(BaseAudioExtractor):
    """Extractor for MP3 files using EasyID3 tags."""

    FILE_CLASS: ClassVar[type | None] = MP3
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {"ID3": EasyID3}

    TAG_MAPPING: ClassVar[dict[str, str]] = dict(_VORBIS_MAPPING)

    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        return BaseTagExtractor.get_str_tag(tags, key)


class FlacExtractor(BaseAudioExtractor):
    """Extractor for FLAC files."""

    FILE_CLASS: ClassVar[type | None] = FLAC
    TAG_MAPPING: ClassVar[dict[str, str]] = dict(_VORBIS_MAPPING)

    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        return BaseTagExtractor.get_str_tag(tags, key)


class OggExtractor(BaseAudioExtractor):
    """Extractor for Ogg Vorbis files."""

    FILE_CLASS: ClassVar[type | None] = OggVorbis
    TAG_MAPPING: ClassVar[dict[str, str]] = dict(_VORBIS_MAPPING)

    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        return BaseTagExtractor.get_str_tag(tags, key)


class M4aExtractor(BaseAudioExtractor):
    """Extractor for M4A files using MP4 atoms."""

    FILE_CLASS: ClassVar[type | None] = MP4

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "\xa9nam",
        "artist": "\xa9ART",
        "album": "\xa9alb",
        "genre": "\xa9gen",
    }

    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        return BaseTagExtractor.get_str_tag(tags, key)


class WavExtractor(BaseAudioExtractor):
    """Extractor for WAV files carrying an ID3 chunk."""

    FILE_CLASS: ClassVar[type | None] = WAVE

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "TIT2",
        "artist": "TPE1",
        "album": "TALB",
        "genre": "TCON",
    }

    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        frames = getattr(tags, "tags", None)
        if frames is None:
            return None
        return first_frame_text(frames.get(key))


class AacExtractor(BaseAudioExtractor):
    """Extractor for raw ADTS AAC files with a leading ID3 header.

    ``mutagen.aac.AAC`` exposes stream info only, so the ID3 header is read
    directly through EasyID3.
    """

    FILE_CLASS: ClassVar[type | None] = EasyID3
    TAG_MAPPING: ClassVar[dict[str, str]] = dict(_VORBIS_MAPPING)

    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        return BaseTagExtractor.get_str_tag(tags, key)
