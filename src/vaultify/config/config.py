"""Configuration management for Vaultify.

Where: src/vaultify/config/config.py
What: Build the immutable ``AppConfig`` from an optional TOML file plus environment variables.
Why: Components receive configuration explicitly at startup instead of reading globals.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Final, TypeVar

from dotenv import load_dotenv

from vaultify.config.paths import default_config_path, default_scratch_dir
from vaultify.features.metadata.domain.filename_parser import DEFAULT_REGIONAL_KEYWORDS
from vaultify.platform.logging import logger


T = TypeVar("T")

DEFAULT_QUERY_HINTS: Final[tuple[str, ...]] = ("tamil song", "movie song", "A.R.Rahman")


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """S3-compatible object storage settings (Backblaze B2 by default)."""

    region: str | None = None
    endpoint: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    bucket_name: str | None = None
    signed_url_ttl_seconds: int = 3600

    @property
    def is_configured(self) -> bool:
        return bool(self.bucket_name and self.access_key_id and self.secret_access_key)


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """External catalog provider settings."""

    spotify_client_id: str | None = None
    spotify_client_secret: str | None = None
    jiosaavn_base_url: str = "https://saavn.dev/api"
    jiosaavn_enabled: bool = True
    search_limit: int = 5
    connect_timeout: float = 5.0
    read_timeout: float = 10.0
    max_attempts: int = 2
    min_request_interval: float = 0.0
    query_hints: tuple[str, ...] = DEFAULT_QUERY_HINTS

    @property
    def spotify_enabled(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Reconciliation and ingest tunables."""

    regional_keywords: tuple[str, ...] = DEFAULT_REGIONAL_KEYWORDS
    acceptance_threshold: float = 0.0
    archive_workers: int = 4
    download_timeout: float = 60.0
    placeholder_covers: bool = False
    scratch_dir: Path = field(default_factory=default_scratch_dir)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    log_file: Path | None = None
    loaded_from: Path | None = None

    @classmethod
    def load(
        cls,
        path: Path | str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> AppConfig:
        """Load configuration from TOML and environment.

        Args:
            path: Explicit TOML path. Defaults to ``default_config_path()``.
            env: Environment mapping. Defaults to ``os.environ`` after loading ``.env``.

        Returns:
            AppConfig: Configuration where environment values override file values.
        """
        if env is None:
            _ = load_dotenv()
            env = os.environ

        config_file = Path(path).expanduser().resolve() if path is not None else default_config_path(env)
        config = cls()
        if config_file.exists():
            try:
                with open(config_file, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.error("Failed to load configuration from %s: %s", config_file, e)
                raise
            config = cls.from_mapping(data, loaded_from=config_file)
            logger.info("Configuration loaded from %s", config_file)
        elif path is not None:
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        return config.with_env(env)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, loaded_from: Path | None = None) -> AppConfig:
        """Build a configuration from parsed TOML tables."""

        storage = _build_section(StorageConfig, data.get("storage"))
        catalog = _build_section(CatalogConfig, data.get("catalog"))
        pipeline = _build_section(PipelineConfig, data.get("pipeline"))
        logging_table = data.get("logging") or {}
        log_file = logging_table.get("file") if isinstance(logging_table, Mapping) else None
        return cls(
            storage=storage,
            catalog=catalog,
            pipeline=pipeline,
            log_file=Path(log_file).expanduser() if log_file else None,
            loaded_from=loaded_from,
        )

    def with_env(self, env: Mapping[str, str]) -> AppConfig:
        """Return a copy with credentials and endpoints taken from ``env``."""

        def pick(name: str, current: str | None) -> str | None:
            value = (env.get(name) or "").strip()
            return value or current

        storage = replace(
            self.storage,
            region=pick("B2_REGION", self.storage.region),
            endpoint=pick("B2_ENDPOINT", self.storage.endpoint),
            access_key_id=pick("B2_ACCESS_KEY_ID", self.storage.access_key_id),
            secret_access_key=pick("B2_SECRET_ACCESS_KEY", self.storage.secret_access_key),
            bucket_name=pick("B2_BUCKET_NAME", self.storage.bucket_name),
        )
        catalog = replace(
            self.catalog,
            spotify_client_id=pick("SPOTIFY_CLIENT_ID", self.catalog.spotify_client_id),
            spotify_client_secret=pick("SPOTIFY_CLIENT_SECRET", self.catalog.spotify_client_secret),
            jiosaavn_base_url=pick("JIOSAAVN_BASE_URL", self.catalog.jiosaavn_base_url),
        )
        log_file = pick("VAULTIFY_LOG_FILE", str(self.log_file) if self.log_file else None)
        return replace(
            self,
            storage=storage,
            catalog=catalog,
            log_file=Path(log_file).expanduser() if log_file else None,
        )


def _build_section(section_type: type[T], table: object) -> T:
    """Instantiate ``section_type`` from a TOML table, ignoring unknown keys."""

    if not isinstance(table, Mapping):
        return section_type()

    known = set(getattr(section_type, "__dataclass_fields__", {}))
    values: dict[str, Any] = {}
    for key, value in table.items():
        if key not in known:
            logger.warning("Ignoring unknown configuration key '%s' for %s", key, section_type.__name__)
            continue
        if isinstance(value, list):
            value = tuple(str(item) for item in value)
        elif key.endswith("_dir") and isinstance(value, str):
            value = Path(value).expanduser()
        values[key] = value
    return section_type(**values)


__all__ = [
    "AppConfig",
    "CatalogConfig",
    "PipelineConfig",
    "StorageConfig",
    "DEFAULT_QUERY_HINTS",
    "DEFAULT_REGIONAL_KEYWORDS",
]
