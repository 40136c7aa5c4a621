"""Consolidated metadata document persistence.

Where: src/vaultify/features/library/usecases/metadata_store.py
What: Load, upsert and save ``metadata/all.json`` with legacy per-object fallback.
Why: One document keeps listing cheap; the lock keeps concurrent uploads from
     losing each other's writes.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Mapping
from typing import Any, Final

from vaultify.platform.logging import logger
from vaultify.shared.errors import ExternalServiceError, NotFoundError
from vaultify.shared.events import PipelineEvent
from vaultify.shared.track_metadata import MetadataStore, PlaylistMetadata, TrackMetadata

from .ports import ObjectStoragePort

STORE_KEY: Final[str] = "metadata/all.json"
METADATA_PREFIX: Final[str] = "metadata/"
PLAYLIST_NAME_PREFIX: Final[str] = "playlists/"
JSON_CONTENT_TYPE: Final[str] = "application/json"


def legacy_song_key(file_key: str) -> str:
    return f"{METADATA_PREFIX}songs/{file_key}.json"


def legacy_playlist_key(playlist_id: str) -> str:
    return f"{METADATA_PREFIX}playlists/{playlist_id}.json"


def playlist_id_from_name(name: str) -> str | None:
    """Return ``42`` for ``playlists/42.json``; ``None`` for song names."""

    if not name.startswith(PLAYLIST_NAME_PREFIX):
        return None
    playlist_id = name[len(PLAYLIST_NAME_PREFIX) :]
    if playlist_id.endswith(".json"):
        playlist_id = playlist_id[: -len(".json")]
    return playlist_id


class MetadataStoreService:
    """Read-modify-write access to the consolidated metadata document.

    All writes go through one lock per instance; one process hosts one
    instance, so concurrent requests cannot interleave a load and a save.
    """

    def __init__(self, storage: ObjectStoragePort) -> None:
        self._storage = storage
        self._lock = threading.Lock()

    def load(self) -> MetadataStore:
        """Read the document; a missing or unparseable document is empty.

        Raises:
            ExternalServiceError: If the store itself cannot be reached.
        """
        try:
            raw = self._storage.get_bytes(STORE_KEY)
        except NotFoundError:
            return MetadataStore()
        try:
            return MetadataStore.from_dict(json.loads(raw.decode("utf-8")))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Metadata store %s is unreadable, starting fresh: %s", STORE_KEY, exc)
            return MetadataStore()

    def _save(self, store: MetadataStore) -> None:
        body = json.dumps(store.to_dict(), indent=2, ensure_ascii=False).encode("utf-8")
        self._storage.put_bytes(STORE_KEY, body, JSON_CONTENT_TYPE)
        logger.info(
            "Saved %s (%d songs, %d playlists)",
            STORE_KEY,
            len(store.songs),
            len(store.playlists),
            extra={"event": PipelineEvent.STORE_WRITE},
        )

    def _delete_legacy(self, key: str) -> None:
        try:
            self._storage.delete(key)
        except (NotFoundError, ExternalServiceError) as exc:
            logger.debug("Legacy metadata %s not removed: %s", key, exc)
            return
        logger.debug("Removed legacy metadata %s", key, extra={"event": PipelineEvent.STORE_LEGACY_CLEANUP})

    def merge_song(self, key: str, payload: TrackMetadata, replace: bool = False) -> TrackMetadata:
        """Upsert the record for ``key``.

        Fields left as ``None`` keep their stored value and ``""`` clears one.
        A record still held only in the legacy per-object file is merged too.
        With ``replace`` the stored record is swapped wholesale.

        Returns:
            TrackMetadata: The record as persisted.
        """
        with self._lock:
            store = self.load()
            current = store.songs.get(key)
            if current is None and not replace:
                legacy = self._read_legacy(legacy_song_key(key))
                current = TrackMetadata.from_dict(legacy) if legacy is not None else None
            if replace or current is None:
                merged = payload
            else:
                merged = current.merged_with(payload)
            store.songs[key] = merged
            self._save(store)
        self._delete_legacy(legacy_song_key(key))
        return merged

    def merge_playlist(self, playlist_id: str, payload: PlaylistMetadata) -> PlaylistMetadata:
        """Upsert playlist fields; ``None`` keeps the stored value."""

        with self._lock:
            store = self.load()
            current = store.playlists.get(playlist_id)
            if current is None:
                legacy = self._read_legacy(legacy_playlist_key(playlist_id))
                current = PlaylistMetadata.from_dict(playlist_id, legacy) if legacy is not None else None
            update = PlaylistMetadata(id=playlist_id, name=payload.name, cover_url=payload.cover_url)
            merged = current.merged_with(update) if current is not None else update
            store.playlists[playlist_id] = merged
            self._save(store)
        self._delete_legacy(legacy_playlist_key(playlist_id))
        return merged

    def store_metadata(self, name: str, payload: Mapping[str, Any]) -> TrackMetadata | PlaylistMetadata:
        """Route ``playlists/<id>.json`` names to playlists and anything else to songs."""

        playlist_id = playlist_id_from_name(name)
        if playlist_id is not None:
            return self.merge_playlist(playlist_id, PlaylistMetadata.from_dict(playlist_id, payload))
        return self.merge_song(name, TrackMetadata.from_dict(payload))

    def remove_song(self, key: str) -> bool:
        """Prune a song entry; returns False when there was none."""

        with self._lock:
            store = self.load()
            if store.songs.pop(key, None) is None:
                return False
            self._save(store)
        return True

    def _read_legacy(self, key: str) -> Mapping[str, Any] | None:
        try:
            data = json.loads(self._storage.get_bytes(key).decode("utf-8"))
        except NotFoundError:
            return None
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Legacy metadata %s is unreadable: %s", key, exc)
            return None
        return data if isinstance(data, Mapping) else None

    def get_song(self, key: str) -> TrackMetadata | None:
        record = self.load().songs.get(key)
        if record is not None:
            return record
        legacy = self._read_legacy(legacy_song_key(key))
        return TrackMetadata.from_dict(legacy) if legacy is not None else None

    def get_playlist(self, playlist_id: str) -> PlaylistMetadata | None:
        record = self.load().playlists.get(playlist_id)
        if record is not None:
            return record
        legacy = self._read_legacy(legacy_playlist_key(playlist_id))
        return PlaylistMetadata.from_dict(playlist_id, legacy) if legacy is not None else None


__all__ = [
    "METADATA_PREFIX",
    "MetadataStoreService",
    "STORE_KEY",
    "legacy_playlist_key",
    "legacy_song_key",
    "playlist_id_from_name",
]
