from __future__ import annotations
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, Union

from .result import Err, Ok, Result
from .transport import HttpClient, envelope, error_from_response

FileContent = Union[bytes, bytearray, memoryview, BinaryIO]


class StorageClient:
    """Entry point for file storage; operations live on a bucket."""

    def __init__(self, client: HttpClient):
        self._client = client

    def from_(self, bucket: str) -> "StorageBucket":
        return StorageBucket(self._client, bucket)


class StorageBucket:
    def __init__(self, client: HttpClient, bucket: str):
        self._client = client
        self.bucket = bucket

    @property
    def _base_path(self) -> str:
        return self._client.project_path("storage", self.bucket)

    async def upload(
        self,
        path: str,
        file: FileContent,
        *,
        upsert: bool = False,
    ) -> Result[Dict[str, Any]]:
        """
        Upload a file to the bucket.

        Args:
            path: Destination path inside the bucket
            file: Raw bytes or a binary file object
            upsert: Overwrite an existing object at ``path``

        Returns:
            The stored file's record (id, path, size, url, ...)

        """
        content = file.read() if hasattr(file, "read") else bytes(file)  # type: ignore[arg-type]
        filename = path.rsplit("/", 1)[-1] or "file"
        form: Dict[str, str] = {"path": path}
        if upsert:
            form["upsert"] = "true"

        sent = await self._client.fetch(
            f"{self._base_path}/upload",
            method="POST",
            files={"file": (filename, content)},
            data=form,
        )
        if isinstance(sent, Err):
            return sent
        result = envelope(sent.data, fallback_message="Upload failed")
        if isinstance(result, Err):
            return result
        payload = result.data
        # Stored record is wrapped as {"data": {...}}
        if isinstance(payload, dict) and "data" in payload:
            return Ok(payload["data"])
        return Ok(payload)

    async def download(self, path: str) -> Result[bytes]:
        """Download a file's raw bytes."""
        sent = await self._client.fetch(f"{self._base_path}/{path}")
        if isinstance(sent, Err):
            return sent
        response = sent.data
        if not response.is_success:
            return Err(error_from_response(response, None, fallback_message="Download failed"))
        return Ok(response.content)

    async def remove(self, paths: Sequence[str]) -> Result[Dict[str, List[str]]]:
        """Delete several files in one request; the result lists deleted paths and errors."""
        return await self._client.request(self._base_path, method="DELETE", body={"paths": list(paths)})

    async def list(self, prefix: Optional[str] = None, *, limit: Optional[int] = None) -> Result[List[Dict[str, Any]]]:
        return await self._client.request(self._base_path, params={"prefix": prefix, "limit": limit})

    def get_public_url(self, path: str) -> Result[str]:
        """Public URL of a file. No request is made."""
        return Ok(f"{self._client.base_url}{self._base_path}/{path}")

    async def create_bucket(self) -> Result[Dict[str, Any]]:
        """Create the bucket if it does not exist."""
        return await self._client.request(f"{self._base_path}/create", method="POST")
