"""
Summary: Structured event identifiers for pipeline logging.
Why: Keep log ``extra`` keys consistent with the Rich event handler styles.
"""

from __future__ import annotations

from enum import StrEnum


class PipelineEvent(StrEnum):
    """Structured event identifiers attached to log records via ``extra``."""

    UPLOAD_START = "upload.start"
    UPLOAD_COMPLETE = "upload.complete"
    UPLOAD_ERROR = "upload.error"
    ARCHIVE_EXPAND = "archive.expand"
    ARCHIVE_MEMBER_ERROR = "archive.member.error"
    RECONCILE_COMPLETE = "reconcile.complete"
    PROVIDER_ERROR = "catalog.provider.error"
    PROVIDER_EMPTY = "catalog.provider.empty"
    STORE_WRITE = "store.write"
    STORE_LEGACY_CLEANUP = "store.legacy.cleanup"


__all__ = ["PipelineEvent"]
