"""Filename heuristics for title, artist and album.

Where: src/vaultify/features/metadata/domain/filename_parser.py
What: Apply an ordered cascade of filename shapes, then keyword and dash fallbacks.
Why: Many uploads carry no tags; their names are the only local evidence.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import PurePath
from typing import Final

from vaultify.shared.media_types import ARCHIVE_EXTENSIONS, AUDIO_EXTENSIONS
from vaultify.shared.track_metadata import CandidateSource, MetadataCandidate

from .normalizer import TextNormalizer


UNKNOWN_ARTIST: Final[str] = "Unknown Artist"
UNKNOWN_ALBUM: Final[str] = "Unknown Album"

DEFAULT_REGIONAL_KEYWORDS: Final[tuple[str, ...]] = (
    "tamil",
    "tamizh",
    "tamil song",
    "tamizh song",
    "tamil movie",
    "tamizh movie",
)

_DASH_PAREN: Final[re.Pattern[str]] = re.compile(r"^(.*?)\s*-\s*(.*?)\s*\((.*?)\)$")
_PAREN_DASH: Final[re.Pattern[str]] = re.compile(r"^(.*?)\s*\((.*?)\)\s*-\s*(.*?)$")
_THREE_DASHES: Final[re.Pattern[str]] = re.compile(r"^(.*?)\s*-\s*(.*?)\s*-\s*(.*?)$")
_FIRST_PAREN: Final[re.Pattern[str]] = re.compile(r"\(([^)]*)\)")

Assignment = Callable[[Sequence[str]], dict[str, str]]


def _in_order(*names: str) -> Assignment:
    """Assign regex groups to fields positionally."""

    def assign(groups: Sequence[str]) -> dict[str, str]:
        return dict(zip(names, groups))

    return assign


def _longer_first_is_album(groups: Sequence[str]) -> dict[str, str]:
    # "Album - Title - Artist" when the first segment is the longer one,
    # otherwise read as "Title - Artist - Album".
    first, second, third = groups
    if len(first) > len(second):
        return {"album": first, "title": second, "artist": third}
    return {"title": first, "artist": second, "album": third}


@dataclass(frozen=True, slots=True)
class FilenameRule:
    """One filename shape and how its groups map onto fields."""

    name: str
    pattern: re.Pattern[str]
    assign: Assignment


# Order matters: the first rule whose pattern matches wins. The last three
# share a shape with an earlier rule and never fire; they document the
# layouts seen in the wild.
FILENAME_RULES: Final[tuple[FilenameRule, ...]] = (
    FilenameRule("artist-title-(album)", _DASH_PAREN, _in_order("artist", "title", "album")),
    FilenameRule("title-(album)-artist", _PAREN_DASH, _in_order("title", "album", "artist")),
    FilenameRule("album-title-artist", _THREE_DASHES, _longer_first_is_album),
    FilenameRule("title-artist-(album)", _DASH_PAREN, _in_order("title", "artist", "album")),
    FilenameRule("album-artist-title", _THREE_DASHES, _in_order("album", "artist", "title")),
    FilenameRule("artist-album-title", _THREE_DASHES, _in_order("artist", "album", "title")),
)


def strip_extension(file_name: str) -> str:
    """Drop a recognised audio or archive extension; other suffixes are kept."""

    path = PurePath(file_name)
    if path.suffix.lower() in AUDIO_EXTENSIONS | ARCHIVE_EXTENSIONS:
        return path.stem
    return path.name


class FilenameParser:
    """Derive a ``MetadataCandidate`` from a filename."""

    def __init__(
        self,
        regional_keywords: Iterable[str] = DEFAULT_REGIONAL_KEYWORDS,
        rules: Sequence[FilenameRule] = FILENAME_RULES,
    ) -> None:
        self._keywords: tuple[str, ...] = tuple(k.lower() for k in regional_keywords if k.strip())
        self._rules: tuple[FilenameRule, ...] = tuple(rules)

    def parse(self, file_name: str) -> MetadataCandidate:
        """Parse ``file_name`` (with or without extension).

        Rules run against the raw stem; only the extracted fields are
        normalized, so annotation tokens never change which rule fires.

        Returns:
            MetadataCandidate: Filename-sourced candidate. Title is always set
            when the name is non-empty; artist and album may be empty.
        """
        name = strip_extension(file_name).strip()

        fields = self._match_rules(name)
        if fields is None:
            fields = self._fallback(name)

        return MetadataCandidate(
            title=TextNormalizer.clean(fields.get("title")) or TextNormalizer.clean(name) or name,
            artist=TextNormalizer.clean(fields.get("artist")),
            album=TextNormalizer.clean(fields.get("album")),
            source=CandidateSource.FILENAME,
        )

    def _match_rules(self, name: str) -> dict[str, str] | None:
        for rule in self._rules:
            match = rule.pattern.match(name)
            if match:
                return rule.assign(match.groups())
        return None

    def _fallback(self, name: str) -> dict[str, str]:
        if self._has_regional_keyword(name):
            paren = _FIRST_PAREN.search(name)
            if paren:
                title = (name[: paren.start()] + name[paren.end() :]).strip()
                return {"title": title or name, "artist": UNKNOWN_ARTIST, "album": paren.group(1)}
            return {"title": name, "artist": UNKNOWN_ARTIST, "album": UNKNOWN_ALBUM}

        if " - " in name:
            artist, title = name.split(" - ", 1)
            return {"title": title, "artist": artist, "album": ""}

        return {"title": name, "artist": "", "album": ""}

    def _has_regional_keyword(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self._keywords)


__all__ = [
    "DEFAULT_REGIONAL_KEYWORDS",
    "FILENAME_RULES",
    "FilenameParser",
    "FilenameRule",
    "UNKNOWN_ALBUM",
    "UNKNOWN_ARTIST",
    "strip_extension",
]
