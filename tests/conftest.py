"""
Summary: Shared fixtures with in-memory fakes for storage and catalog ports.
Why: Exercise the use cases and HTTP layer without a bucket or network access.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from vaultify.config import AppConfig, PipelineConfig
from vaultify.features.library.usecases.ports import StoredObject
from vaultify.shared.errors import ExternalServiceError, NotFoundError
from vaultify.shared.track_metadata import MetadataCandidate


class InMemoryStorage:
    """Dict-backed ObjectStoragePort."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.deleted: list[str] = []
        self.fail_reads: bool = False
        self._lock = threading.Lock()

    def list_objects(self) -> list[StoredObject]:
        with self._lock:
            return [StoredObject(key=key, size=len(body)) for key, body in sorted(self.objects.items())]

    def get_bytes(self, key: str) -> bytes:
        if self.fail_reads:
            raise ExternalServiceError("Storage read failed", service="object storage")
        with self._lock:
            if key not in self.objects:
                raise NotFoundError(f"Object not found: {key}")
            return self.objects[key]

    def put_bytes(self, key: str, body: bytes, content_type: str) -> None:
        with self._lock:
            self.objects[key] = body
            self.content_types[key] = content_type

    def upload_file(self, path: Path, key: str, content_type: str) -> None:
        self.put_bytes(key, path.read_bytes(), content_type)

    def download_file(self, key: str, path: Path) -> None:
        _ = path.write_bytes(self.get_bytes(key))

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self.objects

    def delete(self, key: str) -> None:
        with self._lock:
            self.deleted.append(key)
            _ = self.objects.pop(key, None)
            _ = self.content_types.pop(key, None)

    def presigned_url(self, key: str, expires_in: int | None = None) -> str:
        return f"https://signed.example/{key}?ttl={expires_in or 3600}"


class StaticMatcher:
    """CatalogMatcherPort returning fixed candidates and recording calls."""

    def __init__(self, candidates: Sequence[MetadataCandidate] = ()) -> None:
        self.candidates: list[MetadataCandidate] = list(candidates)
        self.calls: list[tuple[str, str, bool]] = []

    def match(self, title: str, artist: str, *, widen: bool = False) -> list[MetadataCandidate]:
        self.calls.append((title, artist, widen))
        return list(self.candidates)


class FakeProvider:
    """CatalogProviderPort with scripted results per call."""

    def __init__(self, name: str, results: Sequence[list[MetadataCandidate] | Exception] = ()) -> None:
        self.name = name
        self._results = list(results)
        self.queries: list[str] = []

    def search(self, query: str, limit: int | None = None) -> list[MetadataCandidate]:
        self.queries.append(query)
        outcome = self._results.pop(0) if self._results else []
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def static_matcher() -> Callable[..., StaticMatcher]:
    """Factory building a matcher that always returns the given candidates."""

    return StaticMatcher


@pytest.fixture
def fake_provider() -> Callable[..., FakeProvider]:
    """Factory building a provider from a script of results or exceptions."""

    return FakeProvider


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def pipeline_config(scratch_root: Path) -> PipelineConfig:
    return PipelineConfig(scratch_dir=scratch_root, archive_workers=2)


@pytest.fixture
def app_config(pipeline_config: PipelineConfig) -> AppConfig:
    return AppConfig(pipeline=pipeline_config)


@pytest.fixture
def audio_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Factory writing an untagged payload under a given name."""

    def _make(name: str, body: bytes = b"not really audio") -> Path:
        path = tmp_path / "uploads" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_bytes(body)
        return path

    return _make

