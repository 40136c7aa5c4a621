"""
Summary: Ports defining library and ingest storage dependencies.
Why: Keep boto3 out of the use cases so tests run against an in-memory store.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class StoredObject:
    """Listing entry for one object in the bucket."""

    key: str
    size: int = 0
    last_modified: datetime | None = None


@runtime_checkable
class ObjectStoragePort(Protocol):
    """Port for the S3-compatible object store.

    Missing keys raise ``NotFoundError``; other failures raise
    ``ExternalServiceError``.
    """

    def list_objects(self) -> list[StoredObject]:
        """List every object in the bucket."""
        ...

    def get_bytes(self, key: str) -> bytes:
        """Read an object's body."""
        ...

    def put_bytes(self, key: str, body: bytes, content_type: str) -> None:
        """Create or overwrite an object from memory."""
        ...

    def upload_file(self, path: Path, key: str, content_type: str) -> None:
        """Create or overwrite an object from a local file."""
        ...

    def download_file(self, key: str, path: Path) -> None:
        """Copy an object into a local file."""
        ...

    def exists(self, key: str) -> bool:
        """Return True when ``key`` exists."""
        ...

    def delete(self, key: str) -> None:
        """Delete an object; deleting a missing key is not an error."""
        ...

    def presigned_url(self, key: str, expires_in: int | None = None) -> str:
        """Return a time-limited GET URL for ``key``."""
        ...


__all__ = ["ObjectStoragePort", "StoredObject"]
