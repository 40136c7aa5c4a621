"""
Summary: Tests for MetadataReconciler record derivation and match ranking.
Why: This is where tag, filename and catalog evidence meet; precedence bugs corrupt the library.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from vaultify.config import PipelineConfig
from vaultify.features.metadata.usecases.extraction import TagExtractor
from vaultify.features.metadata.usecases.reconciler import MetadataReconciler, placeholder_cover_url
from vaultify.shared.track_metadata import CandidateSource, MetadataCandidate, TrackMetadata


def _tags_returning(candidate: MetadataCandidate) -> type[TagExtractor]:
    class _Tags(TagExtractor):
        @classmethod
        def extract(cls, file_path: Path) -> MetadataCandidate:
            return candidate

    return _Tags


EMPTY_TAGS = MetadataCandidate(source=CandidateSource.FILE_TAG)


def _catalog(**fields: str) -> MetadataCandidate:
    base = {
        "title": "Kannalanae",
        "artist": "A.R.Rahman",
        "album": "96",
        "genre": "Tamil",
        "cover_url": "https://img.example/96.jpg",
    }
    base.update(fields)
    return MetadataCandidate(source=CandidateSource.CATALOG, provider="JioSaavn", **base)


def test_tags_win_over_filename(tmp_path: Path) -> None:
    tags = MetadataCandidate(title="Tagged", artist="Tag Artist", album="Tag Album", source=CandidateSource.FILE_TAG)
    reconciler = MetadataReconciler(None, tag_extractor=_tags_returning(tags))

    record = reconciler.reconcile("Name Artist - Name Title (Name Album).mp3", tmp_path / "x.mp3")

    assert record.title == "Tagged"
    assert record.artist == "Tag Artist"
    assert record.album == "Tag Album"


def test_filename_fills_missing_tags() -> None:
    reconciler = MetadataReconciler(None, tag_extractor=_tags_returning(EMPTY_TAGS))

    record = reconciler.reconcile("A.R.Rahman - Kannalanae (96).mp3", None)

    assert record == TrackMetadata(title="Kannalanae", artist="A.R.Rahman", album="96")


def test_accepts_catalog_candidate_backed_by_evidence(
    static_matcher: Callable[..., Any],
) -> None:
    matcher = static_matcher([_catalog()])
    reconciler = MetadataReconciler(matcher, tag_extractor=_tags_returning(EMPTY_TAGS))

    record = reconciler.reconcile("A.R.Rahman - Kannalanae (96).mp3", None)

    assert record.genre == "Tamil"
    assert record.cover_url == "https://img.example/96.jpg"
    assert matcher.calls == [("Kannalanae", "A.R.Rahman", False)]


def test_rejects_catalog_candidate_without_agreement(static_matcher: Callable[..., Any]) -> None:
    matcher = static_matcher([_catalog(title="Other", artist="Someone", album="Else")])
    reconciler = MetadataReconciler(matcher, tag_extractor=_tags_returning(EMPTY_TAGS))

    record = reconciler.reconcile("A.R.Rahman - Kannalanae (96).mp3", None)

    assert record.title == "Kannalanae"
    assert record.genre is None


def test_threshold_is_strict(static_matcher: Callable[..., Any]) -> None:
    """One agreeing pair scores 1/9 and must exceed the threshold to be accepted."""

    matcher = static_matcher([_catalog(artist="Someone", album="Else")])
    config = PipelineConfig(acceptance_threshold=1 / 9)
    reconciler = MetadataReconciler(matcher, config, tag_extractor=_tags_returning(EMPTY_TAGS))

    record = reconciler.reconcile("track - Kannalanae.mp3", None)

    assert record.genre is None


def test_existing_record_counts_as_evidence(static_matcher: Callable[..., Any]) -> None:
    matcher = static_matcher([_catalog()])
    config = PipelineConfig(acceptance_threshold=1 / 9)
    reconciler = MetadataReconciler(matcher, config, tag_extractor=_tags_returning(EMPTY_TAGS))
    existing = TrackMetadata(title="Kannalanae", artist="A.R.Rahman", genre="Stored Genre")

    without = reconciler.reconcile("track - Kannalanae.mp3", None)
    record = reconciler.reconcile("track - Kannalanae.mp3", None, existing)

    assert without.genre is None
    assert record.genre == "Tamil"
    assert record.artist == "A.R.Rahman"


def test_existing_values_are_not_copied() -> None:
    reconciler = MetadataReconciler(None, tag_extractor=_tags_returning(EMPTY_TAGS))
    existing = TrackMetadata(title="Kannalanae", genre="Stored Genre")

    record = reconciler.reconcile("Anirudh - Kutti Story.mp3", None, existing)

    assert record == TrackMetadata(title="Kutti Story", artist="Anirudh")


def test_complete_evidence_skips_catalog(static_matcher: Callable[..., Any]) -> None:
    tags = MetadataCandidate(title="Kannalanae", artist="A.R.Rahman", album="96", source=CandidateSource.FILE_TAG)
    matcher = static_matcher([_catalog()])
    reconciler = MetadataReconciler(matcher, tag_extractor=_tags_returning(tags))

    _ = reconciler.reconcile("A.R.Rahman - Kannalanae (96).mp3", Path("upload.mp3"))

    assert matcher.calls == []


def test_title_falls_back_to_stem() -> None:
    reconciler = MetadataReconciler(None, tag_extractor=_tags_returning(EMPTY_TAGS))

    record = reconciler.reconcile("[Official Video].mp3", None)

    assert record.title == "[Official Video]"


def test_placeholder_cover_when_enabled() -> None:
    config = PipelineConfig(placeholder_covers=True)
    reconciler = MetadataReconciler(None, config, tag_extractor=_tags_returning(EMPTY_TAGS))

    record = reconciler.reconcile("Anirudh - Kutti Story.mp3", None)

    assert record.cover_url == placeholder_cover_url("Anirudh", "Kutti Story", "")
    assert record.cover_url is not None and "Kutti%20Story" in record.cover_url


def test_tag_text_is_normalized() -> None:
    tags = MetadataCandidate(title="Kutti Story [Official Video]", source=CandidateSource.FILE_TAG)
    reconciler = MetadataReconciler(None, tag_extractor=_tags_returning(tags))

    assert reconciler.reconcile("x.mp3", Path("x.mp3")).title == "Kutti Story"


def test_rank_matches_appends_local_fallbacks(static_matcher: Callable[..., Any]) -> None:
    tags = MetadataCandidate(title="Kannalanae", source=CandidateSource.FILE_TAG)
    matcher = static_matcher([_catalog()])
    reconciler = MetadataReconciler(matcher, tag_extractor=_tags_returning(tags))

    ranked = reconciler.rank_matches("A.R.Rahman - Kannalanae (96).mp3", Path("upload.mp3"))

    assert [c.source for c in ranked] == [
        CandidateSource.FILE_TAG,
        CandidateSource.FILENAME,
        CandidateSource.CATALOG,
    ]
    assert ranked[2].confidence == pytest.approx(4 / 9)
    assert matcher.calls == [("Kannalanae", "A.R.Rahman", True)]


def test_rank_matches_uses_existing_metadata(static_matcher: Callable[..., Any]) -> None:
    matcher = static_matcher([_catalog()])
    reconciler = MetadataReconciler(matcher, tag_extractor=_tags_returning(EMPTY_TAGS))
    existing = TrackMetadata(title="Kannalanae", artist="A.R.Rahman", album="96")

    ranked = reconciler.rank_matches("A.R.Rahman - Kannalanae (96).mp3", None, existing)

    assert ranked[0].source is CandidateSource.CATALOG
    assert ranked[0].confidence == pytest.approx(6 / 9)


def test_rank_matches_skips_local_candidates_without_identity() -> None:
    reconciler = MetadataReconciler(None, tag_extractor=_tags_returning(EMPTY_TAGS))

    ranked = reconciler.rank_matches("track01.mp3", None)

    assert [c.source for c in ranked] == [CandidateSource.FILENAME]
