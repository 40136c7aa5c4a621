"""
Summary: Tests for candidate confidence scoring and ranking.
Why: Acceptance of catalog metadata hinges on these numbers.
"""

from __future__ import annotations

from vaultify.features.metadata.domain.scoring import (
    FILE_TAG_CONFIDENCE,
    FILENAME_CONFIDENCE,
    ConfidenceScorer,
)
from vaultify.shared.track_metadata import CandidateSource, MetadataCandidate, TrackMetadata


def _catalog(title: str = "Kannalanae", artist: str = "A.R.Rahman", album: str = "96") -> MetadataCandidate:
    return MetadataCandidate(title=title, artist=artist, album=album, provider="JioSaavn")


def test_score_counts_agreeing_pairs_over_nine() -> None:
    candidate = _catalog()
    filename = MetadataCandidate(title="kannalanae", artist="A.R.Rahman", source=CandidateSource.FILENAME)
    assert ConfidenceScorer.score(candidate, None, filename, None) == 2 / 9


def test_score_is_one_when_all_evidence_agrees() -> None:
    candidate = _catalog()
    existing = TrackMetadata(title="Kannalanae", artist="A.R.Rahman", album="96")
    local = MetadataCandidate(title="Kannalanae", artist="A.R.Rahman", album="96")
    assert ConfidenceScorer.score(candidate, existing, local, local) == 1.0


def test_missing_evidence_scores_zero() -> None:
    assert ConfidenceScorer.score(_catalog(), None, None, None) == 0.0


def test_empty_fields_never_agree() -> None:
    candidate = MetadataCandidate(title="Kannalanae", artist="", album="")
    tags = MetadataCandidate(title="Other", source=CandidateSource.FILE_TAG)
    assert ConfidenceScorer.score(candidate, None, None, tags) == 0.0


def test_score_grows_as_evidence_agrees() -> None:
    candidate = _catalog()
    weak = MetadataCandidate(title="Kannalanae")
    strong = MetadataCandidate(title="Kannalanae", artist="A.R.Rahman")
    assert ConfidenceScorer.score(candidate, None, strong, None) > ConfidenceScorer.score(
        candidate, None, weak, None
    )


def test_scored_returns_copy() -> None:
    candidate = _catalog()
    scored = ConfidenceScorer.scored(candidate, None, MetadataCandidate(title="Kannalanae"), None)
    assert scored.confidence == 1 / 9
    assert candidate.confidence == 0.0


def test_fallback_confidences() -> None:
    tag = ConfidenceScorer.as_fallback(MetadataCandidate(title="x", source=CandidateSource.FILE_TAG))
    name = ConfidenceScorer.as_fallback(MetadataCandidate(title="x", source=CandidateSource.FILENAME))
    assert tag.confidence == FILE_TAG_CONFIDENCE
    assert name.confidence == FILENAME_CONFIDENCE


def test_rank_orders_by_confidence_then_source() -> None:
    filename = MetadataCandidate(title="a", source=CandidateSource.FILENAME, confidence=0.5)
    tag = MetadataCandidate(title="b", source=CandidateSource.FILE_TAG, confidence=0.5)
    catalog = MetadataCandidate(title="c", confidence=0.5)
    best = MetadataCandidate(title="d", confidence=0.9)

    ranked = ConfidenceScorer.rank([filename, tag, catalog, best])

    assert [c.title for c in ranked] == ["d", "c", "b", "a"]


def test_rank_is_stable_for_equal_keys() -> None:
    first = MetadataCandidate(title="first", confidence=0.2)
    second = MetadataCandidate(title="second", confidence=0.2)
    assert [c.title for c in ConfidenceScorer.rank([first, second])] == ["first", "second"]
