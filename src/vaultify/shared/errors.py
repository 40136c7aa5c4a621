"""
Summary: Error taxonomy shared by the pipeline, storage and HTTP layers.
Why: Let each layer decide fatality by error kind instead of by message text.
"""

from __future__ import annotations


class VaultifyError(Exception):
    """Base class for service errors carrying a client-facing reason."""

    status_code: int = 500

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason: str = reason


class ValidationError(VaultifyError):
    """Required input is missing or unsupported."""

    status_code = 400


class NotFoundError(VaultifyError):
    """A stored object or metadata record does not exist."""

    status_code = 404


class ExternalServiceError(VaultifyError):
    """A catalog provider or the object store failed."""

    status_code = 500

    def __init__(self, reason: str, *, service: str | None = None, status: int | None = None) -> None:
        super().__init__(reason)
        self.service: str | None = service
        self.status: int | None = status


class DecodeError(VaultifyError):
    """An archive or audio container could not be read."""

    status_code = 500


__all__ = [
    "DecodeError",
    "ExternalServiceError",
    "NotFoundError",
    "ValidationError",
    "VaultifyError",
]
