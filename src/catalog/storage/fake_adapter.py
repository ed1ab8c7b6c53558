"""In-memory storage adapter with deterministic URLs."""

from catalog.storage.port import StorageClient


class FakeStorageClient(StorageClient):
    def __init__(self, bucket: str = "ebookstore") -> None:
        self.bucket = bucket
        self.should_fail: bool = False
        self.calls: list[dict] = []

    def configure(self, should_fail: bool) -> None:
        self.should_fail = should_fail

    def _url(self, method: str, key: str) -> str:
        self.calls.append({"method": method, "key": key})
        if self.should_fail:
            raise ConnectionError("object storage is unavailable")
        return f"memory://{self.bucket}/{key}?method={method}"

    def generate_get_presigned_url(self, key: str) -> str:
        return self._url("GET", key)

    def generate_put_presigned_url(self, key: str) -> str:
        return self._url("PUT", key)
