"""
Configuration for the OrbitNest client.

Values come from keyword arguments, ``ORBITNEST_*`` environment variables or a
``.env`` file, in that order of precedence. Settings are frozen once built.
"""

from typing import Any, Dict, Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidConfigurationError, MissingConfigurationError

DEFAULT_BASE_URL = "https://api.orbitnest.io"
DEFAULT_TIMEOUT_MS = 30000


class ClientSettings(BaseSettings):
    """Connection settings shared read-only by every resource client."""

    model_config = SettingsConfigDict(
        env_prefix="ORBITNEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    project_slug: Optional[str] = None
    api_key: Optional[SecretStr] = None
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def require(self) -> "ClientSettings":
        """Fail fast when the project slug or API key is absent."""
        if not self.project_slug:
            raise MissingConfigurationError("project_slug")
        if self.api_key is None or not self.api_key.get_secret_value():
            raise MissingConfigurationError("api_key")
        return self

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def get_config_summary(self) -> Dict[str, Any]:
        """Get a summary of configuration (without secrets)."""
        return {
            "project_slug": self.project_slug,
            "base_url": self.base_url,
            "timeout_ms": self.timeout_ms,
            "api_key_set": self.api_key is not None,
        }


def load_settings(**overrides: Any) -> ClientSettings:
    """Build validated settings; ``None`` overrides fall back to the environment."""
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        settings = ClientSettings(**values)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or "general"
        raise InvalidConfigurationError(key, first.get("input"), first.get("msg", str(e))) from e
    return settings.require()
