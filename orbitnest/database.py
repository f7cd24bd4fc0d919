"""
Database operations: raw SQL, table rows and row level security.

Row writes (single and bulk) need a service-role key on the remote side; the
client sends whatever credential it was built with.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Union

from .query import TableQueryBuilder
from .result import Result, map as map_result
from .transport import HttpClient, drop_none
from .types import PaginationOptions, QueryResult, RlsPolicy

RowId = Union[str, int]


class DatabaseClient:
    def __init__(self, client: HttpClient):
        self._client = client

    @property
    def _base_path(self) -> str:
        return self._client.project_path("database")

    def _table_path(self, table_name: str, *segments: Any) -> str:
        suffix = "".join(f"/{segment}" for segment in segments)
        return f"{self._base_path}/tables/{table_name}{suffix}"

    # =========================================================================
    # SQL and metadata
    # =========================================================================

    async def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> Result[QueryResult]:
        """
        Execute a raw SQL statement.

        Args:
            sql: Statement text, sent verbatim
            params: Positional parameters for the statement

        Returns:
            QueryResult with rows, affected row count and column descriptions

        """
        result = await self._client.request(
            f"{self._base_path}/sql",
            method="POST",
            body=drop_none({"sql": sql, "params": list(params) if params is not None else None}),
        )
        return map_result(result, QueryResult.from_payload)

    async def list_tables(self) -> Result[List[str]]:
        return await self._client.request(f"{self._base_path}/tables/list")

    async def get_table_metadata(self, table_name: str) -> Result[Dict[str, Any]]:
        """Get column definitions for a table."""
        return await self._client.request(f"{self._base_path}/tables", params={"table": table_name})

    async def get_table_data(
        self,
        table_name: str,
        options: Optional[PaginationOptions] = None,
    ) -> Result[Dict[str, Any]]:
        """Get one page of rows as ``{"rows": [...], "total": n}``."""
        options = options or PaginationOptions()
        return await self._client.request(self._table_path(table_name, "data"), params=options.to_params())

    # =========================================================================
    # Rows
    # =========================================================================

    async def insert(self, table_name: str, data: Dict[str, Any]) -> Result[Any]:
        return await self._client.request(self._table_path(table_name, "rows"), method="POST", body=data)

    async def update(self, table_name: str, row_id: RowId, data: Dict[str, Any]) -> Result[Any]:
        return await self._client.request(self._table_path(table_name, "rows", row_id), method="PUT", body=data)

    async def delete(self, table_name: str, row_id: RowId) -> Result[Dict[str, Any]]:
        return await self._client.request(self._table_path(table_name, "rows", row_id), method="DELETE")

    # Bulk writes send the whole list in one request; whether the service
    # applies it atomically is up to the service.

    async def bulk_insert(self, table_name: str, rows: Sequence[Dict[str, Any]]) -> Result[List[Any]]:
        return await self._client.request(
            self._table_path(table_name, "rows", "bulk"), method="POST", body=list(rows)
        )

    async def bulk_update(self, table_name: str, updates: Sequence[Dict[str, Any]]) -> Result[List[Any]]:
        """Apply ``{"where": {...}, "data": {...}}`` updates."""
        return await self._client.request(
            self._table_path(table_name, "rows", "bulk"), method="PUT", body=list(updates)
        )

    async def bulk_delete(self, table_name: str, conditions: Sequence[Dict[str, Any]]) -> Result[Dict[str, Any]]:
        return await self._client.request(
            self._table_path(table_name, "rows", "bulk"), method="DELETE", body=list(conditions)
        )

    # =========================================================================
    # Row level security
    # =========================================================================

    async def enable_rls(self, table_name: str) -> Result[Dict[str, Any]]:
        return await self._client.request(self._table_path(table_name, "rls", "enable"), method="POST")

    async def disable_rls(self, table_name: str) -> Result[Dict[str, Any]]:
        return await self._client.request(self._table_path(table_name, "rls", "disable"), method="POST")

    async def create_policy(self, table_name: str, policy: RlsPolicy) -> Result[Dict[str, Any]]:
        return await self._client.request(
            self._table_path(table_name, "policies"), method="POST", body=policy.to_dict()
        )

    async def list_policies(self, table_name: str) -> Result[List[Dict[str, Any]]]:
        return await self._client.request(self._table_path(table_name, "policies"))

    async def delete_policy(self, table_name: str, policy_name: str) -> Result[Dict[str, Any]]:
        return await self._client.request(self._table_path(table_name, "policies", policy_name), method="DELETE")

    # =========================================================================
    # Query builder
    # =========================================================================

    def from_(self, table_name: str) -> TableQueryBuilder:
        """Start a fluent query against a table."""
        return TableQueryBuilder(self, table_name)

    table = from_
