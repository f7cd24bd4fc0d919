"""
Read access to a project's platform logs.

Each endpoint honours a different subset of filters; only those are sent.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .result import Result
from .transport import HttpClient
from .types import LogLevel


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


class LogsClient:
    def __init__(self, client: HttpClient):
        self._client = client

    @property
    def _base_path(self) -> str:
        return self._client.project_path("logs")

    async def _get(self, path: str, params: Dict[str, Any]) -> Result[List[Dict[str, Any]]]:
        return await self._client.request(f"{self._base_path}{path}", params=params)

    async def get_logs(
        self,
        *,
        level: Optional[Union[LogLevel, str]] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        source: Optional[str] = None,
    ) -> Result[List[Dict[str, Any]]]:
        """Get application logs, newest first."""
        return await self._get(
            "",
            {
                "level": level.value if isinstance(level, LogLevel) else level,
                "since": _iso(since),
                "until": _iso(until),
                "limit": limit,
                "offset": offset,
                "source": source,
            },
        )

    async def get_database_logs(
        self, *, limit: Optional[int] = None, since: Optional[datetime] = None
    ) -> Result[List[Dict[str, Any]]]:
        return await self._get("/database", {"limit": limit, "since": _iso(since)})

    async def get_slow_query_logs(self, *, limit: Optional[int] = None) -> Result[List[Dict[str, Any]]]:
        return await self._get("/database/slow", {"limit": limit})

    async def get_auth_logs(
        self, *, limit: Optional[int] = None, since: Optional[datetime] = None
    ) -> Result[List[Dict[str, Any]]]:
        return await self._get("/auth", {"limit": limit, "since": _iso(since)})

    async def get_auth_failures(self, *, limit: Optional[int] = None) -> Result[List[Dict[str, Any]]]:
        return await self._get("/auth/failures", {"limit": limit})

    async def get_edge_function_logs(
        self,
        function_name: Optional[str] = None,
        *,
        limit: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> Result[List[Dict[str, Any]]]:
        """Get edge function logs, for one function or all of them."""
        path = f"/edge-functions/{function_name}" if function_name else "/edge-functions"
        return await self._get(path, {"limit": limit, "since": _iso(since)})
