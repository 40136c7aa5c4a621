"""
Summary: Architecture checks keeping domain and use case layers free of adapters.
Why: Prevent regressions where pure logic starts importing boto3, requests or the HTTP layer.
"""

from __future__ import annotations

from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
FEATURES_DIR = REPO_ROOT / "src" / "vaultify" / "features"


def _offenders(directory: Path, needles: tuple[str, ...]) -> list[Path]:
    offending_files: list[Path] = []
    for path in directory.rglob("*.py"):
        contents = path.read_text(encoding="utf-8")
        if any(needle in contents for needle in needles):
            offending_files.append(path)
    return offending_files


def test_domain_modules_import_only_shared_code() -> None:
    """Domain modules must not reach into config, platform, or API packages."""

    domain_dir = FEATURES_DIR / "metadata" / "domain"
    offending_files = _offenders(domain_dir, ("vaultify.config", "vaultify.platform", "vaultify.api", "import requests"))
    assert offending_files == [], (
        "Domain modules must stay pure; found adapter imports in: "
        f"{', '.join(str(path.relative_to(REPO_ROOT)) for path in offending_files)}"
    )


@pytest.mark.parametrize("feature", ["metadata", "library", "ingest"])
def test_usecases_do_not_import_storage_or_http_layers(feature: str) -> None:
    """Use cases reach storage and catalogs through ports only."""

    usecases_dir = FEATURES_DIR / feature / "usecases"
    offending_files = _offenders(
        usecases_dir,
        ("vaultify.platform.storage", "vaultify.platform.catalog", "vaultify.api", "import boto3"),
    )
    assert offending_files == [], (
        "Use case modules must depend on ports; found adapter imports in: "
        f"{', '.join(str(path.relative_to(REPO_ROOT)) for path in offending_files)}"
    )
