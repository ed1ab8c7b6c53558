"""Storage client factory.

Provides get_storage() / set_storage() to swap implementations:
- FakeStorageClient when ENV=test
- S3StorageClient otherwise
"""

from catalog.storage.port import StorageClient
from shared.config import get_settings

_current_storage: StorageClient | None = None


def get_storage() -> StorageClient:
    global _current_storage
    if _current_storage is None:
        settings = get_settings()
        if settings.testing:
            from catalog.storage.fake_adapter import FakeStorageClient

            _current_storage = FakeStorageClient(bucket=settings.aws_s3_bucket)
        else:
            from catalog.storage.s3_adapter import S3StorageClient

            _current_storage = S3StorageClient(
                bucket=settings.aws_s3_bucket,
                region=settings.aws_region,
                endpoint_url=settings.aws_s3_endpoint,
            )
    return _current_storage


def set_storage(storage: StorageClient) -> None:
    global _current_storage
    _current_storage = storage


def reset_storage() -> None:
    global _current_storage
    _current_storage = None
