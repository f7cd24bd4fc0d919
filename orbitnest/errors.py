from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Codes synthesized locally; anything else comes from the remote service.
TIMEOUT = "TIMEOUT"
NETWORK_ERROR = "NETWORK_ERROR"
NO_SESSION = "NO_SESSION"
INVALID_RESPONSE = "INVALID_RESPONSE"


@dataclass(frozen=True)
class ApiError:
    """Error descriptor carried by ``Err`` results."""

    message: str
    code: Optional[str] = None
    status: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"message": self.message}
        if self.code is not None:
            out["code"] = self.code
        if self.status is not None:
            out["status"] = self.status
        return out

    def __str__(self) -> str:  # pragma: no cover
        return f"ApiError(code={self.code}, status={self.status}, message={self.message})"


class OrbitNestException(Exception):
    """Base exception for errors raised (not returned) by the client."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


class ConfigurationException(OrbitNestException):
    """Base class for configuration-related errors."""
    pass


class MissingConfigurationError(ConfigurationException):
    """Raised when required configuration is missing."""

    def __init__(self, config_key: str):
        super().__init__(
            f"OrbitNest: {config_key} is required",
            error_code="MISSING_CONFIGURATION",
            context={"config_key": config_key},
        )


class InvalidConfigurationError(ConfigurationException):
    """Raised when a configuration value is rejected."""

    def __init__(self, config_key: str, config_value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for '{config_key}': {reason}",
            error_code="INVALID_CONFIGURATION",
            context={
                "config_key": config_key,
                "config_value": str(config_value),
                "reason": reason,
            },
        )


class InvalidSessionError(OrbitNestException):
    """Raised when a session handed to ``set_session`` does not validate."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid session: {reason}",
            error_code=INVALID_RESPONSE,
            context={"reason": reason},
        )
