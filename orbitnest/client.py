"""
Client facade: one transport shared by every resource client.
"""

from __future__ import annotations
from typing import Optional

import httpx

from .auth import AuthClient
from .config import ClientSettings, load_settings
from .database import DatabaseClient
from .environment import EnvironmentClient
from .functions import FunctionsClient
from .logs import LogsClient
from .storage import StorageClient
from .transport import HttpClient


class OrbitNestClient:
    """
    OrbitNest API client.

    Example:
        client = create_client("my-project", "anon-key")

        result = await client.auth.sign_in("a@b.com", "secret")
        if result.error:
            print(result.error.message)

        rows = await client.db.from_("todos").limit(10).select()

    """

    def __init__(self, settings: ClientSettings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.http = HttpClient(settings, transport=transport)

        self.db = DatabaseClient(self.http)
        self.functions = FunctionsClient(self.http)
        self.auth = AuthClient(self.http)
        self.logs = LogsClient(self.http)
        self.env = EnvironmentClient(self.http)
        self.storage = StorageClient(self.http)

    @property
    def project_slug(self) -> str:
        return self.http.project_slug


def create_client(
    project_slug: Optional[str] = None,
    api_key: Optional[str] = None,
    *,
    base_url: Optional[str] = None,
    timeout_ms: Optional[int] = None,
    settings: Optional[ClientSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> OrbitNestClient:
    """
    Create an OrbitNest client.

    Arguments left as ``None`` are read from ``ORBITNEST_*`` environment
    variables (or ``.env``). A prebuilt ``settings`` object is used as-is.

    Raises:
        MissingConfigurationError: project slug or API key is missing
        InvalidConfigurationError: a value failed validation

    """
    if settings is None:
        settings = load_settings(
            project_slug=project_slug,
            api_key=api_key,
            base_url=base_url,
            timeout_ms=timeout_ms,
        )
    return OrbitNestClient(settings.require(), transport=transport)
