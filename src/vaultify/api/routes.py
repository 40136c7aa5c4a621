"""HTTP endpoints.

Handlers are plain ``def`` so FastAPI runs each request on its worker thread
pool; the services underneath are synchronous.
"""

from __future__ import annotations

import shutil
from pathlib import Path, PurePath
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import PlainTextResponse

from vaultify.features.library.usecases.metadata_store import METADATA_PREFIX
from vaultify.shared.errors import NotFoundError, ValidationError
from vaultify.shared.track_metadata import MetadataStore

from .dependencies import Services, get_services
from .schemas import (
    FetchMetadataRequest,
    UpdateMetadataRequest,
    UpdatePlaylistRequest,
    UploadFromUrlRequest,
)

router = APIRouter()

ServicesDep = Annotated[Services, Depends(get_services)]

HEALTH_TEXT = "Vaultify backend is running"


def _safe_name(raw: str | None) -> str:
    """Basename of a client-supplied filename; path parts are dropped."""

    name = PurePath((raw or "").replace("\\", "/")).name
    if not name or name in {".", ".."}:
        raise ValidationError("No file uploaded")
    return name


def _save_upload(upload: UploadFile, target: Path) -> None:
    with open(target, "wb") as handle:
        shutil.copyfileobj(upload.file, handle)


@router.get("/", response_class=PlainTextResponse)
def health() -> str:
    return HEALTH_TEXT


@router.get("/audio-urls")
def audio_urls(services: ServicesDep) -> list[dict[str, Any]]:
    """Signed URLs plus stored metadata for every non-metadata object."""

    songs = services.store.load().songs
    entries: list[dict[str, Any]] = []
    for stored in services.storage.list_objects():
        if stored.key.startswith(METADATA_PREFIX):
            continue
        record = songs.get(stored.key)
        entries.append(
            {
                "fileName": stored.key,
                "signedUrl": services.storage.presigned_url(stored.key),
                **(record.to_dict() if record is not None else {}),
            }
        )
    return entries


@router.post("/upload")
def upload(services: ServicesDep, file: Annotated[UploadFile | None, File()] = None) -> dict[str, Any]:
    if file is None:
        raise ValidationError("No file uploaded")
    file_name = _safe_name(file.filename)
    with services.uploads.scratch_dir() as scratch:
        target = scratch / file_name
        _save_upload(file, target)
        return services.uploads.ingest(target, file_name)


@router.post("/upload-from-url")
def upload_from_url(services: ServicesDep, body: UploadFromUrlRequest) -> dict[str, Any]:
    if not body.url:
        raise ValidationError("No URL provided")
    return services.uploads.ingest_from_url(body.url)


@router.post("/update-metadata")
def update_metadata(services: ServicesDep, body: UpdateMetadataRequest) -> dict[str, str]:
    if not body.fileName:
        raise ValidationError("Invalid song data")
    services.store.merge_song(body.fileName, body.to_track())
    return {"message": "Metadata updated successfully"}


@router.post("/update-playlist-metadata")
def update_playlist_metadata(services: ServicesDep, body: UpdatePlaylistRequest) -> dict[str, str]:
    if body.id is None or str(body.id) == "":
        raise ValidationError("Invalid playlist/album data")
    services.store.merge_playlist(str(body.id), body.to_playlist())
    return {"message": "Playlist/Album metadata updated successfully"}


@router.get("/playlist-metadata/{playlist_id}")
def playlist_metadata(services: ServicesDep, playlist_id: str) -> dict[str, str] | None:
    record = services.store.get_playlist(playlist_id)
    return record.to_dict() if record is not None else None


@router.post("/upload-playlist-cover")
def upload_playlist_cover(
    services: ServicesDep,
    cover: Annotated[UploadFile | None, File()] = None,
    playlistId: Annotated[str | None, Form()] = None,
) -> dict[str, Any]:
    if cover is None:
        raise ValidationError("No file uploaded")
    if not playlistId:
        raise ValidationError("No playlist ID provided")
    file_name = _safe_name(cover.filename)
    with services.uploads.scratch_dir() as scratch:
        target = scratch / file_name
        _save_upload(cover, target)
        return services.uploads.upload_playlist_cover(target, file_name, playlistId)


@router.get("/all-metadata")
def all_metadata(services: ServicesDep) -> dict[str, Any]:
    store: MetadataStore = services.store.load()
    return store.to_dict()


@router.post("/fetch-metadata")
def fetch_metadata(services: ServicesDep, body: FetchMetadataRequest) -> dict[str, Any]:
    """Ranked candidates for a stored object; nothing is persisted."""

    if not body.fileName:
        raise ValidationError("No file name provided")
    file_name = body.fileName
    if not services.storage.exists(file_name):
        raise NotFoundError("File not found")
    with services.uploads.scratch_dir() as scratch:
        target = scratch / _safe_name(file_name)
        services.storage.download_file(file_name, target)
        matches = services.reconciler.rank_matches(file_name, target, body.existing_track())
    return {"matches": [match.to_dict() for match in matches]}


@router.delete("/{file_name:path}")
def delete_file(services: ServicesDep, file_name: str) -> dict[str, str]:
    if not file_name or file_name.startswith(METADATA_PREFIX):
        raise ValidationError("Invalid file name")
    services.storage.delete(file_name)
    services.store.remove_song(file_name)
    return {"message": "File deleted successfully"}


__all__ = ["router"]
