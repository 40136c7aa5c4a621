"""Archive expansion for batch uploads.

Where: src/vaultify/features/ingest/usecases/archive_expander.py
What: Extract .zip/.7z/.rar archives into a scratch directory and list the audio inside.
Why: Batch uploads are processed member by member like single uploads.
"""

from __future__ import annotations

import tempfile
import zipfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import ClassVar

import py7zr
import rarfile
from py7zr.exceptions import ArchiveError as SevenZipArchiveError
from py7zr.exceptions import Bad7zFile

from vaultify.platform.logging import logger
from vaultify.shared.errors import DecodeError
from vaultify.shared.events import PipelineEvent
from vaultify.shared.media_types import extension_of, is_audio

# Exceptions that mean "this archive cannot be read" for any supported format.
_ARCHIVE_ERRORS: tuple[type[BaseException], ...] = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    Bad7zFile,
    SevenZipArchiveError,
    rarfile.Error,
    EOFError,
    OSError,
)


def _extract_zip(archive_path: Path, destination: Path) -> None:
    with zipfile.ZipFile(archive_path) as archive:
        archive.extractall(destination)


def _extract_7z(archive_path: Path, destination: Path) -> None:
    with py7zr.SevenZipFile(archive_path, mode="r") as archive:
        archive.extractall(path=destination)


def _extract_rar(archive_path: Path, destination: Path) -> None:
    with rarfile.RarFile(archive_path) as archive:
        archive.extractall(path=destination)


def _is_resource_fork(path: Path, root: Path) -> bool:
    # macOS zips carry "__MACOSX/" copies and "._name" AppleDouble files.
    relative = path.relative_to(root)
    return "__MACOSX" in relative.parts or path.name.startswith("._")


class ArchiveExpander:
    """Expand supported archives into request-scoped scratch directories."""

    _extractors: ClassVar[dict[str, Callable[[Path, Path], None]]] = {
        ".zip": _extract_zip,
        ".7z": _extract_7z,
        ".rar": _extract_rar,
    }

    def __init__(self, scratch_root: Path | None = None) -> None:
        self._scratch_root = scratch_root

    @classmethod
    def supports(cls, file_name: str) -> bool:
        return extension_of(file_name) in cls._extractors

    @contextmanager
    def expand(self, archive_path: Path) -> Iterator[list[Path]]:
        """Extract ``archive_path`` and yield its audio files, sorted.

        The scratch directory is removed when the context exits, whether the
        body succeeded or raised.

        Raises:
            DecodeError: If the archive is corrupt or of an unsupported kind.
        """
        ext = extension_of(archive_path.name)
        extractor = self._extractors.get(ext)
        if extractor is None:
            raise DecodeError(f"Unsupported archive type: {ext or archive_path.name}")

        if self._scratch_root is not None:
            self._scratch_root.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(prefix="vaultify-archive-", dir=self._scratch_root) as scratch:
            root = Path(scratch)
            try:
                extractor(archive_path, root)
            except _ARCHIVE_ERRORS as exc:
                raise DecodeError(f"Cannot extract {archive_path.name}: {exc}") from exc

            members = sorted(
                path
                for path in root.rglob("*")
                if path.is_file() and is_audio(path.name) and not _is_resource_fork(path, root)
            )
            logger.info(
                "Expanded %s: %d audio files",
                archive_path.name,
                len(members),
                extra={"event": PipelineEvent.ARCHIVE_EXPAND, "file_name": archive_path.name},
            )
            yield members


__all__ = ["ArchiveExpander"]
