"""Catalog matching across providers.

Where: src/vaultify/features/metadata/usecases/matching.py
What: Build search queries and collect candidates from providers in priority order.
Why: Incomplete local evidence is completed from external catalogs without
     letting a single provider outage fail the upload.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Sequence

from vaultify.features.metadata.domain.normalizer import TextNormalizer
from vaultify.platform.logging import logger
from vaultify.shared.errors import ExternalServiceError
from vaultify.shared.events import PipelineEvent
from vaultify.shared.track_metadata import MetadataCandidate

from .ports import CatalogProviderPort


def build_queries(title: str, artist: str = "", hints: Iterable[str] = (), *, widen: bool = False) -> list[str]:
    """Build search queries for ``title`` and ``artist``.

    Primary queries are ``"<title> <artist>"`` then ``"<title>"``. With
    ``widen`` each hint yields ``"<title> <hint>"``. Every query passes
    through ``TextNormalizer.search_term``; empty and repeated queries are
    dropped while order is kept.
    """
    title = TextNormalizer.clean(title)
    artist = TextNormalizer.clean(artist)
    if not title:
        return []

    raw: list[str] = []
    if artist:
        raw.append(f"{title} {artist}")
    raw.append(title)
    if widen:
        raw.extend(f"{title} {hint}" for hint in hints)

    queries: list[str] = []
    for query in raw:
        term = TextNormalizer.search_term(query)
        if term and term not in queries:
            queries.append(term)
    return queries


def dedupe_candidates(candidates: Iterable[MetadataCandidate]) -> list[MetadataCandidate]:
    """Keep the first candidate for each exact (title, artist, album) triple."""

    seen: set[tuple[str, str, str]] = set()
    unique: list[MetadataCandidate] = []
    for candidate in candidates:
        if candidate.identity in seen:
            continue
        seen.add(candidate.identity)
        unique.append(candidate)
    return unique


class CatalogMatcher:
    """Query providers in priority order until one yields candidates."""

    def __init__(
        self,
        providers: Sequence[CatalogProviderPort],
        *,
        hints: Sequence[str] = (),
        limit: int | None = None,
    ) -> None:
        self._providers = tuple(providers)
        self._hints = tuple(hints)
        self._limit = limit

    def match(self, title: str, artist: str, *, widen: bool = False) -> list[MetadataCandidate]:
        """Return de-duplicated candidates from the first productive provider.

        Provider failures are logged and treated as "no candidates". When every
        provider fails or comes back empty the result is empty.
        """
        queries = build_queries(title, artist, self._hints, widen=widen)
        if not queries:
            return []

        for provider in self._providers:
            candidates = self._search_provider(provider, queries)
            if candidates:
                return dedupe_candidates(candidates)
            logger.info(
                "No candidates from %s",
                provider.name,
                extra={"event": PipelineEvent.PROVIDER_EMPTY, "provider": provider.name},
            )
        return []

    def _search_provider(self, provider: CatalogProviderPort, queries: Sequence[str]) -> list[MetadataCandidate]:
        collected: list[MetadataCandidate] = []
        for query in queries:
            started = time.perf_counter()
            try:
                results = provider.search(query, self._limit)
            except ExternalServiceError as exc:
                logger.warning(
                    "Catalog lookup failed for '%s': %s",
                    query,
                    exc.reason,
                    extra={
                        "event": PipelineEvent.PROVIDER_ERROR,
                        "provider": provider.name,
                        "duration_ms": (time.perf_counter() - started) * 1000,
                    },
                )
                continue
            logger.debug("%s returned %d candidates for '%s'", provider.name, len(results), query)
            collected.extend(results)
        return collected


__all__ = ["CatalogMatcher", "build_queries", "dedupe_candidates"]
