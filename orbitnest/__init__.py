"""OrbitNest client (async, result-first)

Public surface:
- create_client, OrbitNestClient
- Result, Ok, Err, ApiError
- resource clients: DatabaseClient, AuthClient, FunctionsClient, LogsClient, EnvironmentClient, StorageClient
- TableQueryBuilder for fluent table reads

Logging goes through loguru and is disabled by default; turn it on with
``logger.enable("orbitnest")``.
"""

from loguru import logger

from .result import Result, Ok, Err
from .errors import (
    ApiError,
    OrbitNestException,
    ConfigurationException,
    MissingConfigurationError,
    InvalidConfigurationError,
    InvalidSessionError,
    TIMEOUT,
    NETWORK_ERROR,
    NO_SESSION,
    INVALID_RESPONSE,
)
from .config import ClientSettings
from .transport import HttpClient
from .types import (
    Session,
    User,
    SortOrder,
    PaginationOptions,
    QueryResult,
    ColumnField,
    RlsPolicy,
    FunctionResponse,
    LogLevel,
    NewVariable,
)
from .auth import AuthClient, SessionHolder
from .query import TableQueryBuilder
from .database import DatabaseClient
from .functions import FunctionsClient
from .logs import LogsClient
from .environment import EnvironmentClient
from .storage import StorageClient, StorageBucket
from .client import OrbitNestClient, create_client

logger.disable("orbitnest")

__version__ = "0.1.0"
__all__ = [
    "create_client",
    "OrbitNestClient",
    "Result",
    "Ok",
    "Err",
    "ApiError",
    "OrbitNestException",
    "ConfigurationException",
    "MissingConfigurationError",
    "InvalidConfigurationError",
    "InvalidSessionError",
    "TIMEOUT",
    "NETWORK_ERROR",
    "NO_SESSION",
    "INVALID_RESPONSE",
    "ClientSettings",
    "HttpClient",
    "Session",
    "User",
    "SortOrder",
    "PaginationOptions",
    "QueryResult",
    "ColumnField",
    "RlsPolicy",
    "FunctionResponse",
    "LogLevel",
    "NewVariable",
    "AuthClient",
    "SessionHolder",
    "TableQueryBuilder",
    "DatabaseClient",
    "FunctionsClient",
    "LogsClient",
    "EnvironmentClient",
    "StorageClient",
    "StorageBucket",
]
