"""Object storage port.

The service never proxies book bytes: clients upload and download through
short-lived presigned URLs issued here.
"""

from abc import ABC, abstractmethod

PRESIGNED_URL_LIFETIME_SECONDS = 15 * 60


class StorageClient(ABC):
    @abstractmethod
    def generate_get_presigned_url(self, key: str) -> str:
        """Return a URL that downloads ``key`` without credentials."""
        ...

    @abstractmethod
    def generate_put_presigned_url(self, key: str) -> str:
        """Return a URL that uploads bytes to ``key`` without credentials."""
        ...
