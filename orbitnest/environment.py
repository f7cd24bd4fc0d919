from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .result import Result
from .transport import HttpClient, drop_none
from .types import NewVariable


class EnvironmentClient:
    """CRUD for a project's environment variables."""

    def __init__(self, client: HttpClient):
        self._client = client

    @property
    def _base_path(self) -> str:
        return self._client.project_path("environment-variables")

    async def list(self) -> Result[List[Dict[str, Any]]]:
        return await self._client.request(self._base_path)

    async def get(self, name: str) -> Result[Dict[str, Any]]:
        return await self._client.request(f"{self._base_path}/{name}")

    async def set(
        self,
        name: str,
        value: str,
        description: Optional[str] = None,
        is_secret: Optional[bool] = None,
    ) -> Result[Dict[str, Any]]:
        """Create or update a variable."""
        return await self._client.request(
            f"{self._base_path}/{name}",
            method="PUT",
            body=drop_none({"value": value, "description": description, "is_secret": is_secret}),
        )

    async def create(
        self,
        name: str,
        value: str,
        description: Optional[str] = None,
        is_secret: Optional[bool] = None,
    ) -> Result[Dict[str, Any]]:
        """Create a new variable; the service rejects existing names."""
        return await self._client.request(
            self._base_path,
            method="POST",
            body=drop_none({"name": name, "value": value, "description": description, "is_secret": is_secret}),
        )

    async def bulk_create(
        self, variables: Iterable[Union[NewVariable, Mapping[str, Any]]]
    ) -> Result[List[Dict[str, Any]]]:
        items = [v.to_dict() if isinstance(v, NewVariable) else dict(v) for v in variables]
        return await self._client.request(
            f"{self._base_path}/bulk",
            method="POST",
            body={"variables": items},
        )

    async def delete(self, name: str) -> Result[Dict[str, Any]]:
        return await self._client.request(f"{self._base_path}/{name}", method="DELETE")
