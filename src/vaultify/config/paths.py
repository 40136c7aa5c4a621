"""Default locations for the config file and upload scratch space.

- Config: ``<repo_root>/config/config.toml``; ``VAULTIFY_CONFIG`` points elsewhere.
- Scratch: the system temp directory; ``VAULTIFY_SCRATCH_DIR`` points elsewhere.

Blank environment values count as unset.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Final


ENV_CONFIG_PATH: Final[str] = "VAULTIFY_CONFIG"
ENV_SCRATCH_DIR: Final[str] = "VAULTIFY_SCRATCH_DIR"

_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def _env_path(env: Mapping[str, str] | None, name: str) -> Path | None:
    value = (os.environ if env is None else env).get(name, "").strip()
    return Path(value).expanduser().resolve() if value else None


def _detect_repo_root(start: Path | None = None) -> Path:
    """Nearest ancestor holding a root marker, else the working directory."""

    origin = (start or Path(__file__).resolve()).parent
    return next(
        (folder for folder in (origin, *origin.parents) if any((folder / marker).exists() for marker in _ROOT_MARKERS)),
        Path.cwd(),
    )


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    override = _env_path(env, ENV_CONFIG_PATH)
    if override is not None:
        return override
    return (_detect_repo_root() / "config" / "config.toml").resolve()


def default_scratch_dir(env: Mapping[str, str] | None = None) -> Path:
    """Root under which each request creates its own temporary folder."""

    return _env_path(env, ENV_SCRATCH_DIR) or Path(tempfile.gettempdir()).resolve()


__all__ = [
    "ENV_CONFIG_PATH",
    "ENV_SCRATCH_DIR",
    "default_config_path",
    "default_scratch_dir",
]
