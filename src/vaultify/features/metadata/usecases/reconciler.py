"""Metadata reconciliation pipeline.

Where: src/vaultify/features/metadata/usecases/reconciler.py
What: Combine tag, filename and catalog evidence into one track record or a ranked match list.
Why: Uploads and the interactive match picker share the same evidence rules.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final
from urllib.parse import quote

from vaultify.config import PipelineConfig
from vaultify.features.metadata.domain.filename_parser import FilenameParser, strip_extension
from vaultify.features.metadata.domain.normalizer import TextNormalizer
from vaultify.features.metadata.domain.scoring import ConfidenceScorer
from vaultify.platform.logging import logger
from vaultify.shared.events import PipelineEvent
from vaultify.shared.track_metadata import (
    TRACK_FIELDS,
    CandidateSource,
    MetadataCandidate,
    TrackMetadata,
)

from .extraction import TagExtractor
from .ports import CatalogMatcherPort

PLACEHOLDER_COVER_URL: Final[str] = "https://source.unsplash.com/300x300/?{query}"
_PLACEHOLDER_TERMS: Final[tuple[str, ...]] = ("album cover", "music")


@dataclass(frozen=True, slots=True)
class Evidence:
    """Normalized local evidence for one audio payload."""

    tags: MetadataCandidate
    filename: MetadataCandidate

    @property
    def is_complete(self) -> bool:
        return self.tags.is_complete() and self.filename.is_complete()


def _normalized(candidate: MetadataCandidate) -> MetadataCandidate:
    return replace(
        candidate,
        title=TextNormalizer.clean(candidate.title),
        artist=TextNormalizer.clean(candidate.artist),
        album=TextNormalizer.clean(candidate.album),
        genre=TextNormalizer.clean(candidate.genre),
    )


class MetadataReconciler:
    """Reconcile local evidence with catalog candidates.

    Args:
        matcher: Catalog lookup; ``None`` disables catalog matching.
        config: Pipeline tunables (acceptance threshold, placeholder covers, keywords).
        tag_extractor: Tag reader, injectable for tests.
    """

    def __init__(
        self,
        matcher: CatalogMatcherPort | None,
        config: PipelineConfig | None = None,
        *,
        tag_extractor: type[TagExtractor] = TagExtractor,
    ) -> None:
        self._matcher = matcher
        self._config = config or PipelineConfig()
        self._tag_extractor = tag_extractor
        self._filename_parser = FilenameParser(self._config.regional_keywords)

    def gather_evidence(self, file_name: str, file_path: Path | None) -> Evidence:
        """Read tags (when a file is given) and parse the filename, both normalized."""

        if file_path is not None:
            tags = _normalized(self._tag_extractor.extract(file_path))
        else:
            tags = MetadataCandidate(source=CandidateSource.FILE_TAG)
        filename = _normalized(self._filename_parser.parse(file_name))
        return Evidence(tags=tags, filename=filename)

    def reconcile(
        self,
        file_name: str,
        file_path: Path | None,
        existing: TrackMetadata | None = None,
    ) -> TrackMetadata:
        """Derive the metadata persisted for an upload.

        Tag values win over filename values field by field. When either source
        is incomplete the catalog is consulted, and the best catalog candidate
        overrides the base when its confidence exceeds the acceptance threshold.
        ``existing`` only feeds scoring; none of its values are copied into
        the result.

        Returns:
            TrackMetadata: Record with at least a title (the file stem as last resort).
        """
        started = time.perf_counter()
        evidence = self.gather_evidence(file_name, file_path)
        tags, filename = evidence.tags, evidence.filename

        base: dict[str, str] = {
            name: getattr(tags, name) or getattr(filename, name) for name in TRACK_FIELDS
        }
        accepted: MetadataCandidate | None = None
        if not evidence.is_complete and base["title"] and self._matcher is not None:
            candidates = self._matcher.match(base["title"], base["artist"])
            ranked = ConfidenceScorer.rank(
                ConfidenceScorer.scored(candidate, existing, filename, tags) for candidate in candidates
            )
            if ranked and ranked[0].confidence > self._config.acceptance_threshold:
                accepted = ranked[0]
                for name in TRACK_FIELDS:
                    value = getattr(accepted, name)
                    if value:
                        base[name] = value

        if not base["title"]:
            base["title"] = strip_extension(file_name)
        if not base["cover_url"] and self._config.placeholder_covers:
            base["cover_url"] = placeholder_cover_url(base["artist"], base["title"], base["album"])

        record = TrackMetadata(**{name: value or None for name, value in base.items()})
        logger.info(
            "Reconciled %s",
            file_name,
            extra={
                "event": PipelineEvent.RECONCILE_COMPLETE,
                "file_name": file_name,
                "provider": accepted.provider if accepted else "local",
                "duration_ms": (time.perf_counter() - started) * 1000,
            },
        )
        return record

    def rank_matches(
        self,
        file_name: str,
        file_path: Path | None,
        existing: TrackMetadata | None = None,
    ) -> list[MetadataCandidate]:
        """Rank catalog and local candidates for interactive selection.

        Uses widened queries. Local candidates are appended with their fixed
        fallback confidences when they carry a title or an artist.
        """
        evidence = self.gather_evidence(file_name, file_path)
        tags, filename = evidence.tags, evidence.filename

        candidates: list[MetadataCandidate] = []
        if self._matcher is not None:
            title = filename.title or tags.title
            artist = filename.artist or tags.artist
            candidates.extend(
                ConfidenceScorer.scored(candidate, existing, filename, tags)
                for candidate in self._matcher.match(title, artist, widen=True)
            )
        for local in (filename, tags):
            if local.has_identity():
                candidates.append(ConfidenceScorer.as_fallback(local))
        return ConfidenceScorer.rank(candidates)


def placeholder_cover_url(artist: str, title: str, album: str) -> str:
    """Image-search URL used when no cover art is known."""

    terms = [term for term in (artist, title, album, *_PLACEHOLDER_TERMS) if term]
    return PLACEHOLDER_COVER_URL.format(query=quote(",".join(terms), safe=""))


__all__ = ["Evidence", "MetadataReconciler", "PLACEHOLDER_COVER_URL", "placeholder_cover_url"]
