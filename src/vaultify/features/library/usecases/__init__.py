"""Use cases for the stored library: the metadata document and storage port."""

from .metadata_store import METADATA_PREFIX, STORE_KEY, MetadataStoreService
from .ports import ObjectStoragePort, StoredObject

__all__ = [
    "METADATA_PREFIX",
    "MetadataStoreService",
    "ObjectStoragePort",
    "STORE_KEY",
    "StoredObject",
]
