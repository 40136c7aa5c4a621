"""Use cases for ingesting uploads and archives."""

from .archive_expander import ArchiveExpander
from .upload_service import UploadService, file_name_from_url

__all__ = ["ArchiveExpander", "UploadService", "file_name_from_url"]
