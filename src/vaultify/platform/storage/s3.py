"""Where: src/vaultify/platform/storage/s3.py
What: boto3 adapter for S3-compatible object storage (Backblaze B2 by default).
Why: Translate botocore failures into the service error taxonomy at one seam.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Final

import boto3
from boto3.exceptions import Boto3Error
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from vaultify.config import StorageConfig
from vaultify.features.library.usecases.ports import StoredObject
from vaultify.platform.logging import logger
from vaultify.shared.errors import ExternalServiceError, NotFoundError

SERVICE_NAME: Final[str] = "object storage"
_MISSING_CODES: Final[frozenset[str]] = frozenset({"404", "NoSuchKey", "NotFound"})

# B2 rejects the flexible-checksum headers newer botocore sends by default,
# and only supports path-style bucket addressing on custom endpoints.
_BOTO_CONFIG: Final[BotoConfig] = BotoConfig(
    signature_version="s3v4",
    s3={"addressing_style": "path"},
    request_checksum_calculation="when_required",
    response_checksum_validation="when_required",
)


class S3ObjectStorage:
    """Object storage backed by a boto3 S3 client.

    The client is created on first use, so a process without storage settings
    can still start and serve the endpoints that do not touch the bucket.
    """

    def __init__(self, config: StorageConfig, client: Any | None = None) -> None:
        self._config = config
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def bucket(self) -> str:
        if not self._config.bucket_name:
            raise ExternalServiceError(
                "Object storage is not configured (set B2_BUCKET_NAME and credentials)",
                service=SERVICE_NAME,
            )
        return self._config.bucket_name

    @property
    def client(self) -> Any:
        with self._client_lock:
            if self._client is None:
                if not self._config.is_configured:
                    raise ExternalServiceError(
                        "Object storage is not configured (set B2_BUCKET_NAME, B2_ACCESS_KEY_ID "
                        "and B2_SECRET_ACCESS_KEY)",
                        service=SERVICE_NAME,
                    )
                self._client = boto3.client(
                    "s3",
                    region_name=self._config.region,
                    endpoint_url=self._config.endpoint,
                    aws_access_key_id=self._config.access_key_id,
                    aws_secret_access_key=self._config.secret_access_key,
                    config=_BOTO_CONFIG,
                )
            return self._client

    @contextmanager
    def _translate_errors(self, action: str, key: str | None = None) -> Iterator[None]:
        try:
            yield
        except ClientError as exc:
            error = exc.response.get("Error", {})
            code = str(error.get("Code", ""))
            if code in _MISSING_CODES:
                raise NotFoundError(f"Object not found: {key}") from exc
            status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            logger.error("Storage %s failed for %s: %s", action, key or self._config.bucket_name, exc)
            raise ExternalServiceError(f"Storage {action} failed", service=SERVICE_NAME, status=status) from exc
        except (BotoCoreError, Boto3Error) as exc:
            logger.error("Storage %s failed for %s: %s", action, key or self._config.bucket_name, exc)
            raise ExternalServiceError(f"Storage {action} failed", service=SERVICE_NAME) from exc

    def list_objects(self) -> list[StoredObject]:
        objects: list[StoredObject] = []
        with self._translate_errors("list"):
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket):
                for item in page.get("Contents", []):
                    objects.append(
                        StoredObject(
                            key=item["Key"],
                            size=int(item.get("Size", 0)),
                            last_modified=item.get("LastModified"),
                        )
                    )
        return objects

    def get_bytes(self, key: str) -> bytes:
        with self._translate_errors("read", key):
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read()

    def put_bytes(self, key: str, body: bytes, content_type: str) -> None:
        with self._translate_errors("write", key):
            self.client.put_object(Bucket=self.bucket, Key=key, Body=body, ContentType=content_type)

    def upload_file(self, path: Path, key: str, content_type: str) -> None:
        with self._translate_errors("upload", key):
            self.client.upload_file(
                str(path),
                self.bucket,
                key,
                ExtraArgs={"ContentType": content_type},
            )

    def download_file(self, key: str, path: Path) -> None:
        with self._translate_errors("download", key):
            self.client.download_file(self.bucket, key, str(path))

    def exists(self, key: str) -> bool:
        try:
            with self._translate_errors("head", key):
                self.client.head_object(Bucket=self.bucket, Key=key)
        except NotFoundError:
            return False
        return True

    def delete(self, key: str) -> None:
        with self._translate_errors("delete", key):
            self.client.delete_object(Bucket=self.bucket, Key=key)

    def presigned_url(self, key: str, expires_in: int | None = None) -> str:
        with self._translate_errors("sign", key):
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in or self._config.signed_url_ttl_seconds,
            )


__all__ = ["S3ObjectStorage"]
