"""
Summary: Ports defining metadata use case dependencies.
Why: Decouple reconciliation from concrete catalog adapters so tests and swaps stay simple.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vaultify.shared.track_metadata import MetadataCandidate


@runtime_checkable
class CatalogProviderPort(Protocol):
    """Port for an external music catalog."""

    name: str

    def search(self, query: str, limit: int | None = None) -> list[MetadataCandidate]:
        """Return catalog candidates for ``query``.

        Implementations raise ``ExternalServiceError`` on any provider failure.
        """
        ...


@runtime_checkable
class CatalogMatcherPort(Protocol):
    """Port for the multi-provider catalog lookup used by the reconciler."""

    def match(self, title: str, artist: str, *, widen: bool = False) -> list[MetadataCandidate]:
        """Return de-duplicated catalog candidates for a title and artist."""
        ...


__all__ = ["CatalogMatcherPort", "CatalogProviderPort"]
