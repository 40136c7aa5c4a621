# Where: vaultify.shared.__init__
# What: Provide a concise import surface for shared dataclasses and errors.
# Why: Encourage consistent reuse of shared types across features.

"""Shared cross-cutting types exposed at the package level."""

from .errors import DecodeError, ExternalServiceError, NotFoundError, ValidationError, VaultifyError
from .events import PipelineEvent
from .track_metadata import (
    CandidateSource,
    MetadataCandidate,
    MetadataStore,
    PlaylistMetadata,
    TrackMetadata,
)

__all__ = [
    "CandidateSource",
    "DecodeError",
    "ExternalServiceError",
    "MetadataCandidate",
    "MetadataStore",
    "NotFoundError",
    "PipelineEvent",
    "PlaylistMetadata",
    "TrackMetadata",
    "ValidationError",
    "VaultifyError",
]
