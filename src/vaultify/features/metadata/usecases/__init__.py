"""
Path: src/vaultify/features/metadata/usecases/__init__.py
Summary: Package exports for metadata use cases.
Why: Give the ingest feature and HTTP layer one import surface.
"""

from .extraction import TagExtractor
from .matching import CatalogMatcher, build_queries, dedupe_candidates
from .ports import CatalogMatcherPort, CatalogProviderPort
from .reconciler import Evidence, MetadataReconciler

__all__ = [
    "CatalogMatcher",
    "CatalogMatcherPort",
    "CatalogProviderPort",
    "Evidence",
    "MetadataReconciler",
    "TagExtractor",
    "build_queries",
    "dedupe_candidates",
]
