"""Request bodies for the HTTP surface.

Every field is optional at the schema level; handlers raise ``ValidationError``
for missing required values so clients get ``{"error": ...}`` with status 400.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from vaultify.shared.track_metadata import PlaylistMetadata, TrackMetadata


class _Body(BaseModel):
    model_config = ConfigDict(extra="ignore")


class UploadFromUrlRequest(_Body):
    url: str | None = None


class UpdateMetadataRequest(_Body):
    fileName: str | None = None
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    genre: str | None = None
    coverUrl: str | None = None

    def to_track(self) -> TrackMetadata:
        return TrackMetadata(
            title=self.title,
            artist=self.artist,
            album=self.album,
            genre=self.genre,
            cover_url=self.coverUrl,
        )


class UpdatePlaylistRequest(_Body):
    id: str | int | None = None
    name: str | None = None
    coverUrl: str | None = None

    def to_playlist(self) -> PlaylistMetadata:
        return PlaylistMetadata(id=str(self.id), name=self.name, cover_url=self.coverUrl)


class FetchMetadataRequest(_Body):
    fileName: str | None = None
    existingMetadata: dict[str, Any] | None = None

    def existing_track(self) -> TrackMetadata | None:
        if not self.existingMetadata:
            return None
        return TrackMetadata.from_dict(self.existingMetadata)


__all__ = [
    "FetchMetadataRequest",
    "UpdateMetadataRequest",
    "UpdatePlaylistRequest",
    "UploadFromUrlRequest",
]
