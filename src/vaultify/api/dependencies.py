"""Service wiring for the HTTP surface.

Where: src/vaultify/api/dependencies.py
What: Build the storage, store, reconciler and upload services from ``AppConfig``.
Why: Endpoints receive explicitly constructed services instead of module globals.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from vaultify.config import AppConfig
from vaultify.features.ingest.usecases.upload_service import UploadService
from vaultify.features.library.usecases.metadata_store import MetadataStoreService
from vaultify.features.library.usecases.ports import ObjectStoragePort
from vaultify.features.metadata.usecases.matching import CatalogMatcher
from vaultify.features.metadata.usecases.ports import CatalogMatcherPort
from vaultify.features.metadata.usecases.reconciler import MetadataReconciler
from vaultify.platform.catalog import build_providers
from vaultify.platform.storage import S3ObjectStorage


@dataclass(slots=True)
class Services:
    """Per-process service container stored on ``app.state``."""

    config: AppConfig
    storage: ObjectStoragePort
    store: MetadataStoreService
    reconciler: MetadataReconciler
    uploads: UploadService


def build_matcher(config: AppConfig) -> CatalogMatcher:
    return CatalogMatcher(
        build_providers(config.catalog),
        hints=config.catalog.query_hints,
        limit=config.catalog.search_limit,
    )


def build_services(
    config: AppConfig,
    *,
    storage: ObjectStoragePort | None = None,
    matcher: CatalogMatcherPort | None = None,
) -> Services:
    """Wire services; ``storage`` and ``matcher`` default to the real adapters."""

    storage = storage if storage is not None else S3ObjectStorage(config.storage)
    matcher = matcher if matcher is not None else build_matcher(config)
    store = MetadataStoreService(storage)
    reconciler = MetadataReconciler(matcher, config.pipeline)
    uploads = UploadService(storage, store, reconciler, config.pipeline)
    return Services(config=config, storage=storage, store=store, reconciler=reconciler, uploads=uploads)


def get_services(request: Request) -> Services:
    return request.app.state.services


__all__ = ["Services", "build_matcher", "build_services", "get_services"]
