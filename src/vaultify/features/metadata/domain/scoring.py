"""Confidence scoring for metadata candidates.

Where: src/vaultify/features/metadata/domain/scoring.py
What: Count exact field agreements between a candidate and the local evidence.
Why: Catalog results are only trusted as far as the local evidence backs them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import ClassVar, Final, final

from vaultify.shared.track_metadata import (
    MATCH_FIELDS,
    CandidateSource,
    MetadataCandidate,
    TrackMetadata,
)


FILE_TAG_CONFIDENCE: Final[float] = 0.7
FILENAME_CONFIDENCE: Final[float] = 0.5

Evidence = TrackMetadata | MetadataCandidate | None


@final
class ConfidenceScorer:
    """Score and rank candidates against existing, filename and tag evidence."""

    # Three evidence records times three compared fields.
    DENOMINATOR: ClassVar[int] = 9

    FALLBACK_CONFIDENCE: ClassVar[dict[CandidateSource, float]] = {
        CandidateSource.FILE_TAG: FILE_TAG_CONFIDENCE,
        CandidateSource.FILENAME: FILENAME_CONFIDENCE,
    }

    @staticmethod
    def _field(record: Evidence, name: str) -> str:
        if record is None:
            return ""
        return getattr(record, name) or ""

    @classmethod
    def score(
        cls,
        candidate: MetadataCandidate,
        existing: Evidence,
        filename: Evidence,
        tags: Evidence,
    ) -> float:
        """Fraction of (evidence, field) pairs agreeing with ``candidate``.

        A pair counts when the evidence field is non-empty and equals the
        candidate field case-insensitively. Missing evidence counts as no
        agreement, so the result only grows as evidence starts to agree.

        Returns:
            float: Confidence in ``[0, 1]``.
        """
        matches = 0
        for record in (existing, filename, tags):
            for name in MATCH_FIELDS:
                evidence_value = cls._field(record, name)
                candidate_value = cls._field(candidate, name)
                if evidence_value and evidence_value.casefold() == candidate_value.casefold():
                    matches += 1
        return matches / cls.DENOMINATOR

    @classmethod
    def scored(
        cls,
        candidate: MetadataCandidate,
        existing: Evidence,
        filename: Evidence,
        tags: Evidence,
    ) -> MetadataCandidate:
        """Return a copy of ``candidate`` carrying its computed confidence."""

        return replace(candidate, confidence=cls.score(candidate, existing, filename, tags))

    @classmethod
    def as_fallback(cls, candidate: MetadataCandidate) -> MetadataCandidate:
        """Attach the fixed confidence used for local-evidence candidates."""

        confidence = cls.FALLBACK_CONFIDENCE.get(candidate.source, candidate.confidence)
        return replace(candidate, confidence=confidence)

    @staticmethod
    def rank(candidates: Iterable[MetadataCandidate]) -> list[MetadataCandidate]:
        """Sort by confidence, then source priority (catalog, tag, filename).

        ``sorted`` is stable, so equal keys keep their input order.
        """
        return sorted(candidates, key=lambda c: (-c.confidence, c.priority))


__all__ = ["ConfidenceScorer", "FILENAME_CONFIDENCE", "FILE_TAG_CONFIDENCE"]
