# Where: vaultify.shared.track_metadata
# What: Canonical metadata dataclasses shared across features.
# Why: Centralize the track, candidate, playlist and store shapes and their JSON forms.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any, ClassVar


TRACK_FIELDS: tuple[str, ...] = ("title", "artist", "album", "genre", "cover_url")
MATCH_FIELDS: tuple[str, ...] = ("title", "artist", "album")

_JSON_NAMES: dict[str, str] = {"cover_url": "coverUrl"}


def _json_name(name: str) -> str:
    return _JSON_NAMES.get(name, name)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(slots=True)
class TrackMetadata:
    """Metadata for one stored audio object."""

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    genre: str | None = None
    cover_url: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> TrackMetadata:
        """Build from a JSON mapping using ``coverUrl`` naming; unknown keys are ignored."""

        if not data:
            return cls()
        return cls(**{name: _optional_str(data.get(_json_name(name))) for name in TRACK_FIELDS})

    def to_dict(self) -> dict[str, str]:
        """Serialize set fields only; ``None`` means unknown and is omitted."""

        return {
            _json_name(name): value
            for name in TRACK_FIELDS
            if (value := getattr(self, name)) is not None
        }

    def merged_with(self, update: TrackMetadata) -> TrackMetadata:
        """Field-level upsert: values set on ``update`` win, unset ones keep ours."""

        return replace(
            self,
            **{
                name: value
                for name in TRACK_FIELDS
                if (value := getattr(update, name)) is not None
            },
        )


class CandidateSource(StrEnum):
    """Where a metadata candidate came from."""

    CATALOG = "CatalogProvider"
    FILE_TAG = "File Metadata"
    FILENAME = "Filename"


@dataclass(slots=True)
class MetadataCandidate:
    """Ephemeral candidate produced during reconciliation; never persisted directly."""

    title: str = ""
    artist: str = ""
    album: str = ""
    genre: str = ""
    cover_url: str = ""
    source: CandidateSource = CandidateSource.CATALOG
    provider: str | None = None
    confidence: float = 0.0

    SOURCE_PRIORITY: ClassVar[dict[CandidateSource, int]] = {
        CandidateSource.CATALOG: 0,
        CandidateSource.FILE_TAG: 1,
        CandidateSource.FILENAME: 2,
    }

    @property
    def identity(self) -> tuple[str, str, str]:
        """Exact (title, artist, album) triple used for de-duplication."""

        return (self.title, self.artist, self.album)

    @property
    def priority(self) -> int:
        return self.SOURCE_PRIORITY[self.source]

    def has_identity(self) -> bool:
        """True when the candidate carries a title or an artist."""

        return bool(self.title or self.artist)

    def is_complete(self) -> bool:
        return all(getattr(self, name) for name in MATCH_FIELDS)

    def to_track(self) -> TrackMetadata:
        """Project onto the persisted shape; empty strings become unknown."""

        return TrackMetadata(**{name: getattr(self, name) or None for name in TRACK_FIELDS})

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {_json_name(name): getattr(self, name) for name in TRACK_FIELDS}
        payload["source"] = self.provider or str(self.source)
        payload["confidence"] = self.confidence
        return payload


@dataclass(slots=True)
class PlaylistMetadata:
    """Playlist or album grouping with its own lifecycle."""

    id: str
    name: str | None = None
    cover_url: str | None = None

    @classmethod
    def from_dict(cls, playlist_id: str, data: Mapping[str, Any] | None) -> PlaylistMetadata:
        data = data or {}
        return cls(
            id=_optional_str(data.get("id")) or playlist_id,
            name=_optional_str(data.get("name")),
            cover_url=_optional_str(data.get("coverUrl")),
        )

    def to_dict(self) -> dict[str, str]:
        payload: dict[str, str] = {"id": self.id}
        if self.name is not None:
            payload["name"] = self.name
        if self.cover_url is not None:
            payload["coverUrl"] = self.cover_url
        return payload

    def merged_with(self, update: PlaylistMetadata) -> PlaylistMetadata:
        return replace(
            self,
            name=update.name if update.name is not None else self.name,
            cover_url=update.cover_url if update.cover_url is not None else self.cover_url,
        )


@dataclass(slots=True)
class MetadataStore:
    """The single persisted document keyed by storage object key."""

    songs: dict[str, TrackMetadata] = field(default_factory=dict)
    playlists: dict[str, PlaylistMetadata] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> MetadataStore:
        if not isinstance(data, Mapping):
            return cls()
        songs_raw = data.get("songs")
        playlists_raw = data.get("playlists")
        songs = {
            str(key): TrackMetadata.from_dict(value)
            for key, value in (songs_raw.items() if isinstance(songs_raw, Mapping) else [])
            if isinstance(value, Mapping)
        }
        playlists = {
            str(key): PlaylistMetadata.from_dict(str(key), value)
            for key, value in (playlists_raw.items() if isinstance(playlists_raw, Mapping) else [])
            if isinstance(value, Mapping)
        }
        return cls(songs=songs, playlists=playlists)

    def to_dict(self) -> dict[str, dict[str, dict[str, str]]]:
        return {
            "songs": {key: record.to_dict() for key, record in self.songs.items()},
            "playlists": {key: record.to_dict() for key, record in self.playlists.items()},
        }


__all__ = [
    "CandidateSource",
    "MATCH_FIELDS",
    "MetadataCandidate",
    "MetadataStore",
    "PlaylistMetadata",
    "TRACK_FIELDS",
    "TrackMetadata",
]
