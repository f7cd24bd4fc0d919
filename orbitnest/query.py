from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Union

from .result import Result
from .types import PaginationOptions, SortOrder

if TYPE_CHECKING:
    from .database import DatabaseClient


class TableQueryBuilder:
    """
    Fluent reads against one table.

    ``page``, ``limit`` and ``order_by`` overwrite their value and return the
    builder; nothing is sent until ``select()``. Writes go straight to the
    database client. Builders are meant to be used once.

    Example:
        result = await client.db.from_("todos").order_by("created_at", SortOrder.DESC).limit(20).select()
    """

    def __init__(self, db: "DatabaseClient", table_name: str):
        self._db = db
        self._table_name = table_name
        self._pagination = PaginationOptions()

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def pagination(self) -> PaginationOptions:
        return self._pagination

    def page(self, num: int) -> "TableQueryBuilder":
        self._pagination.page = num
        return self

    def limit(self, num: int) -> "TableQueryBuilder":
        self._pagination.limit = num
        return self

    def order_by(self, column: str, order: SortOrder = SortOrder.ASC) -> "TableQueryBuilder":
        self._pagination.sort_by = column
        self._pagination.sort_order = order
        return self

    async def select(self) -> Result[Dict[str, Any]]:
        return await self._db.get_table_data(self._table_name, self._pagination)

    async def insert(self, data: Dict[str, Any]) -> Result[Any]:
        return await self._db.insert(self._table_name, data)

    async def update(self, row_id: Union[str, int], data: Dict[str, Any]) -> Result[Any]:
        return await self._db.update(self._table_name, row_id, data)

    async def delete(self, row_id: Union[str, int]) -> Result[Dict[str, Any]]:
        return await self._db.delete(self._table_name, row_id)
