"""
Summary: Tests for the filename rule cascade and its fallbacks.
Why: Untagged uploads depend entirely on these heuristics for their metadata.
"""

from __future__ import annotations

import pytest

from vaultify.features.metadata.domain.filename_parser import (
    UNKNOWN_ALBUM,
    UNKNOWN_ARTIST,
    FilenameParser,
    strip_extension,
)
from vaultify.shared.track_metadata import CandidateSource


@pytest.fixture
def parser() -> FilenameParser:
    return FilenameParser()


def _fields(parser: FilenameParser, name: str) -> tuple[str, str, str]:
    candidate = parser.parse(name)
    return candidate.title, candidate.artist, candidate.album


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        # artist - title (album)
        ("A.R.Rahman - Kannalanae (96).mp3", ("Kannalanae", "A.R.Rahman", "96")),
        # title (album) - artist
        ("Vaathi Coming (Master) - Anirudh.mp3", ("Vaathi Coming", "Anirudh", "Master")),
        # album - title - artist, chosen when the first segment is longer
        ("Master Soundtrack - Kutti - Anirudh.flac", ("Kutti", "Anirudh", "Master Soundtrack")),
        # title - artist - album otherwise
        ("Kutti - Anirudh - Master.flac", ("Kutti", "Anirudh", "Master")),
        # annotation inside the album group does not stop the first rule
        ("A.R.Rahman - Kannalanae (Tamil HD).mp3", ("Kannalanae", "A.R.Rahman", "Tamil HD")),
        # a site name in the last segment is matched, then normalized away
        ("Kannalanae - A.R.Rahman - MassTamilan.dev.mp3", ("Kannalanae", "A.R.Rahman", "")),
    ],
)
def test_rules_assign_groups(parser: FilenameParser, name: str, expected: tuple[str, str, str]) -> None:
    assert _fields(parser, name) == expected


def test_annotations_are_removed_from_fields(parser: FilenameParser) -> None:
    assert _fields(parser, "Anirudh - Arabic Kuthu [Official Video] (Beast).mp3") == (
        "Arabic Kuthu",
        "Anirudh",
        "Beast",
    )


def test_regional_keyword_with_parenthetical_album(parser: FilenameParser) -> None:
    assert _fields(parser, "Rowdy Baby Tamil Song (Maari 2).mp3") == (
        "Rowdy Baby Tamil Song",
        UNKNOWN_ARTIST,
        "Maari 2",
    )


def test_regional_keyword_without_album(parser: FilenameParser) -> None:
    assert _fields(parser, "Kutti Story Tamil.mp3") == ("Kutti Story Tamil", UNKNOWN_ARTIST, UNKNOWN_ALBUM)


def test_regional_keyword_inside_removed_annotation_still_counts(parser: FilenameParser) -> None:
    """The keyword check sees the raw stem even when normalization drops the token."""

    assert _fields(parser, "Kannalanae [Tamil HD].mp3") == ("Kannalanae", UNKNOWN_ARTIST, UNKNOWN_ALBUM)


def test_custom_keywords_replace_defaults() -> None:
    parser = FilenameParser(regional_keywords=("telugu",))
    assert _fields(parser, "Samajavaragamana Telugu.mp3")[1] == UNKNOWN_ARTIST
    assert _fields(parser, "Kutti Story Tamil.mp3") == ("Kutti Story Tamil", "", "")


def test_dash_fallback_reads_artist_then_title(parser: FilenameParser) -> None:
    assert _fields(parser, "Anirudh - Arabic Kuthu.mp3") == ("Arabic Kuthu", "Anirudh", "")


def test_bare_name_becomes_title(parser: FilenameParser) -> None:
    candidate = parser.parse("track01.mp3")
    assert (candidate.title, candidate.artist, candidate.album) == ("track01", "", "")
    assert candidate.source is CandidateSource.FILENAME


def test_title_never_empty_for_non_empty_name(parser: FilenameParser) -> None:
    assert parser.parse(" - Anirudh - .mp3").title


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("song.MP3", "song"),
        ("album.zip", "album"),
        ("notes.txt", "notes.txt"),
        ("no_extension", "no_extension"),
        ("v1.2 remix.wav", "v1.2 remix"),
    ],
)
def test_strip_extension_only_drops_known_suffixes(name: str, expected: str) -> None:
    assert strip_extension(name) == expected
