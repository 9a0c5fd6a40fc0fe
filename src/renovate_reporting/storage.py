"""S3 object storage for the ``s3`` report sink."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlsplit

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import StorageError


@dataclass(frozen=True)
class S3Location:
    bucket: str
    key: str


def parse_s3_url(url: Optional[str]) -> Optional[S3Location]:
    """Split ``s3://bucket/key`` into its parts; None for anything else."""
    if not url:
        return None
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if parts.scheme != "s3" or not parts.netloc:
        return None
    return S3Location(bucket=parts.netloc, key=parts.path[1:])


class S3Client:
    """Thin wrapper exposing the single upload call the exporter needs."""

    def __init__(self, client: Any):
        self._client = client

    def put(self, bucket: str, key: str, body: str, content_type: str) -> None:
        try:
            self._client.put_object(
                Bucket=bucket,
                Key=key,
                Body=body.encode("utf-8"),
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(bucket, key, f"{type(exc).__name__}: {exc}")


def get_s3_client(endpoint: Optional[str] = None, path_style: bool = False) -> S3Client:
    """Build an S3 client for the configured endpoint and addressing style."""
    config = Config(s3={"addressing_style": "path"}) if path_style else None
    client = boto3.client("s3", endpoint_url=endpoint, config=config)
    return S3Client(client)
