"""
Types for OrbitNest API payloads.

Session and user payloads are validated with pydantic and keep any extra fields
the service sends. Shapes built on the client side are plain dataclasses.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .transport import drop_none

# =============================================================================
# Auth
# =============================================================================


class User(BaseModel):
    """An authenticated user.

    Custom profile data stays under its wire name ``user_metadata``; the
    ``metadata`` arguments of ``sign_up`` and ``update_user`` end up here.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    email: str
    email_confirmed_at: Optional[str] = None
    created_at: str
    updated_at: str
    user_metadata: Optional[Dict[str, Any]] = None


class Session(BaseModel):
    """Access/refresh token pair plus the user they were issued for."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str
    user: User


# =============================================================================
# Database
# =============================================================================


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass
class PaginationOptions:
    """Read parameters accumulated by a query builder."""

    page: Optional[int] = None
    limit: Optional[int] = None
    sort_by: Optional[str] = None
    sort_order: Optional[SortOrder] = None

    def to_params(self) -> Dict[str, Any]:
        order = self.sort_order
        return drop_none(
            {
                "page": self.page,
                "limit": self.limit,
                "sortBy": self.sort_by,
                "sortOrder": order.value if isinstance(order, SortOrder) else order,
            }
        )


@dataclass
class ColumnField:
    name: str
    data_type: str


@dataclass
class QueryResult:
    """Rows returned by a raw SQL query."""

    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    fields: Optional[List[ColumnField]] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "QueryResult":
        """Reshape the ``{data, rows_affected, columns}`` SQL endpoint response."""
        data = payload if isinstance(payload, dict) else {}
        columns = data.get("columns")
        fields = None
        if columns is not None:
            fields = [ColumnField(name=col.get("name", ""), data_type=col.get("type", "")) for col in columns]
        return cls(
            rows=data.get("data") or [],
            row_count=data.get("rows_affected") or 0,
            fields=fields,
        )


PolicyCommand = Literal["SELECT", "INSERT", "UPDATE", "DELETE", "ALL"]


@dataclass
class RlsPolicy:
    """A row level security policy."""

    name: str
    command: PolicyCommand
    definition: str
    check: Optional[str] = None
    roles: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return drop_none(
            {
                "name": self.name,
                "command": self.command,
                "definition": self.definition,
                "check": self.check,
                "roles": self.roles,
            }
        )


# =============================================================================
# Functions
# =============================================================================


@dataclass
class FunctionResponse:
    """Payload of an invoked function with the response status and headers."""

    data: Any
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


# =============================================================================
# Logs
# =============================================================================


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


# =============================================================================
# Environment
# =============================================================================


@dataclass
class NewVariable:
    """An environment variable to create in bulk."""

    name: str
    value: str
    description: Optional[str] = None
    is_secret: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return drop_none(
            {
                "name": self.name,
                "value": self.value,
                "description": self.description,
                "is_secret": self.is_secret,
            }
        )
