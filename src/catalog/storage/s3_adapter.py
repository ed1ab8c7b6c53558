"""AWS S3 storage adapter."""

import boto3
from botocore.config import Config

from catalog.domain import logger
from catalog.storage.port import PRESIGNED_URL_LIFETIME_SECONDS, StorageClient

TIMEOUT_SECONDS = 10


class S3StorageClient(StorageClient):
    def __init__(
        self,
        bucket: str,
        region: str,
        endpoint_url: str | None = None,
        expires_in: int = PRESIGNED_URL_LIFETIME_SECONDS,
        client=None,
    ) -> None:
        self.bucket = bucket
        self.expires_in = expires_in
        self._client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            config=Config(
                signature_version="s3v4",
                connect_timeout=TIMEOUT_SECONDS,
                read_timeout=TIMEOUT_SECONDS,
            ),
        )

    def _presign(self, operation: str, key: str) -> str:
        logger.debug("Presigning object", operation=operation, key=key)
        return self._client.generate_presigned_url(
            operation,
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=self.expires_in,
        )

    def generate_get_presigned_url(self, key: str) -> str:
        return self._presign("get_object", key)

    def generate_put_presigned_url(self, key: str) -> str:
        return self._presign("put_object", key)
