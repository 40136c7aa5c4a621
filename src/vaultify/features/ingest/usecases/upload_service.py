"""Upload ingest use case.

Where: src/vaultify/features/ingest/usecases/upload_service.py
What: Turn one uploaded payload (audio file, archive or URL) into stored objects plus metadata.
Why: The HTTP layer only moves bytes; this is where an upload becomes library state.
"""

from __future__ import annotations

import tempfile
import time
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from pathlib import Path, PurePosixPath
from typing import Any, Final
from urllib.parse import unquote, urlparse

import requests

from vaultify.config import PipelineConfig
from vaultify.features.library.usecases.metadata_store import MetadataStoreService
from vaultify.features.library.usecases.ports import ObjectStoragePort
from vaultify.features.metadata.usecases.reconciler import MetadataReconciler
from vaultify.platform.logging import logger
from vaultify.shared.errors import ExternalServiceError, ValidationError, VaultifyError
from vaultify.shared.events import PipelineEvent
from vaultify.shared.media_types import content_type_for, extension_of, is_archive, is_audio
from vaultify.shared.track_metadata import PlaylistMetadata

from .archive_expander import ArchiveExpander

ARCHIVE_SUCCESS_MESSAGE: Final[str] = "Archive processed successfully"
COVER_PREFIX: Final[str] = "covers/"
_DOWNLOAD_CHUNK_SIZE: Final[int] = 1024 * 256


def file_name_from_url(url: str) -> str:
    """Last path segment of ``url``, percent-decoded."""

    return PurePosixPath(unquote(urlparse(url).path)).name


class UploadService:
    """Ingest uploads: reconcile metadata, store the object, merge the record.

    Args:
        storage: Object store receiving audio and cover objects.
        store: Metadata document service.
        reconciler: Metadata pipeline.
        config: Worker count, download timeout and scratch root.
        session: ``requests`` session used for URL downloads.
    """

    def __init__(
        self,
        storage: ObjectStoragePort,
        store: MetadataStoreService,
        reconciler: MetadataReconciler,
        config: PipelineConfig | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self._storage = storage
        self._store = store
        self._reconciler = reconciler
        self._config = config or PipelineConfig()
        self._expander = ArchiveExpander(self._config.scratch_dir)
        self._session = session or requests.Session()

    @contextmanager
    def scratch_dir(self) -> Iterator[Path]:
        """Request-scoped scratch directory, removed on exit."""

        root = self._config.scratch_dir
        root.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(prefix="vaultify-upload-", dir=root) as scratch:
            yield Path(scratch)

    def ingest(self, local_path: Path, file_name: str) -> dict[str, Any]:
        """Ingest one uploaded payload.

        Returns:
            dict: ``{fileName, signedUrl, **metadata}`` for audio, or
            ``{message, files}`` for archives.

        Raises:
            ValidationError: If the extension is neither audio nor archive.
            DecodeError: If an archive cannot be extracted.
        """
        if is_audio(file_name):
            return self.ingest_audio(local_path, file_name)
        if is_archive(file_name):
            return self.ingest_archive(local_path, file_name)
        raise ValidationError("Unsupported file type")

    def ingest_audio(self, local_path: Path, file_name: str) -> dict[str, Any]:
        """Reconcile, upload and record one audio file keyed by ``file_name``.

        The stored record for the key, if any, is scoring evidence; the new
        record then replaces it.
        """

        started = time.perf_counter()
        logger.info(
            "Uploading %s",
            file_name,
            extra={"event": PipelineEvent.UPLOAD_START, "file_name": file_name},
        )
        existing = self._store.get_song(file_name)
        metadata = self._reconciler.reconcile(file_name, local_path, existing)
        self._storage.upload_file(local_path, file_name, content_type_for(file_name))
        signed_url = self._storage.presigned_url(file_name)
        stored = self._store.merge_song(file_name, metadata, replace=True)
        logger.info(
            "Uploaded %s",
            file_name,
            extra={
                "event": PipelineEvent.UPLOAD_COMPLETE,
                "file_name": file_name,
                "duration_ms": (time.perf_counter() - started) * 1000,
            },
        )
        return {"fileName": file_name, "signedUrl": signed_url, **stored.to_dict()}

    def ingest_archive(self, local_path: Path, file_name: str) -> dict[str, Any]:
        """Expand an archive and ingest every audio member.

        Members run on a bounded thread pool. A failing member is reported as
        ``{fileName, error}`` and does not abort the others.
        """
        with self._expander.expand(local_path) as members:
            if not members:
                return {"message": ARCHIVE_SUCCESS_MESSAGE, "files": []}
            workers = max(1, min(self._config.archive_workers, len(members)))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="vaultify-archive") as pool:
                files = list(pool.map(self._ingest_member, members))
        return {"message": ARCHIVE_SUCCESS_MESSAGE, "files": files}

    def _ingest_member(self, member: Path) -> dict[str, Any]:
        try:
            return self.ingest_audio(member, member.name)
        except VaultifyError as exc:
            reason = exc.reason
        except Exception as exc:
            logger.exception("Unexpected failure ingesting %s", member.name)
            reason = str(exc) or exc.__class__.__name__
        logger.error(
            "Failed to ingest %s: %s",
            member.name,
            reason,
            extra={"event": PipelineEvent.ARCHIVE_MEMBER_ERROR, "file_name": member.name},
        )
        return {"fileName": member.name, "error": reason}

    def ingest_from_url(self, url: str) -> dict[str, Any]:
        """Download ``url`` into scratch space, then ingest it like an upload.

        Raises:
            ValidationError: If the URL is empty or names no usable file.
            ExternalServiceError: If the download fails.
        """
        if not url or not url.strip():
            raise ValidationError("No URL provided")
        file_name = file_name_from_url(url.strip())
        if not file_name or not (is_audio(file_name) or is_archive(file_name)):
            raise ValidationError("Unsupported file type")

        with self.scratch_dir() as scratch:
            target = scratch / file_name
            self._download(url.strip(), target)
            return self.ingest(target, file_name)

    def _download(self, url: str, target: Path) -> None:
        try:
            with self._session.get(url, stream=True, timeout=self._config.download_timeout) as response:
                response.raise_for_status()
                with open(target, "wb") as handle:
                    for chunk in response.iter_content(chunk_size=_DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            handle.write(chunk)
        except requests.RequestException as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.error(
                "Download failed for %s: %s",
                url,
                exc,
                extra={"event": PipelineEvent.UPLOAD_ERROR, "file_name": target.name},
            )
            raise ExternalServiceError("Download failed", service="download", status=status) from exc

    def upload_playlist_cover(self, local_path: Path, file_name: str, playlist_id: str) -> dict[str, Any]:
        """Store a cover under ``covers/<id><ext>`` and point the playlist at it."""

        if not playlist_id:
            raise ValidationError("No playlist ID provided")
        key = f"{COVER_PREFIX}{playlist_id}{extension_of(file_name)}"
        self._storage.upload_file(local_path, key, content_type_for(file_name))
        signed_url = self._storage.presigned_url(key)
        self._store.merge_playlist(playlist_id, PlaylistMetadata(id=playlist_id, cover_url=signed_url))
        return {"fileName": key, "signedUrl": signed_url}


__all__ = ["ARCHIVE_SUCCESS_MESSAGE", "COVER_PREFIX", "UploadService", "file_name_from_url"]
