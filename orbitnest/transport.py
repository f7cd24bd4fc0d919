"""
Transport for the OrbitNest REST API.

Every call opens its own ``httpx.AsyncClient``, runs under a single deadline and
comes back as a ``Result``: nothing here raises for network, timeout or HTTP
status failures.
"""

from __future__ import annotations
import asyncio
import time
from typing import Any, Dict, Mapping, Optional

import httpx
import orjson
from loguru import logger

from .config import ClientSettings
from .errors import ApiError, NETWORK_ERROR, TIMEOUT
from .result import Err, Ok, Result


def drop_none(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Omit unset fields from a body or query mapping."""
    return {k: v for k, v in values.items() if v is not None}


def parse_json(response: httpx.Response) -> Any:
    """Parsed body, or ``None`` when the body is empty or not JSON."""
    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return None


def error_from_response(
    response: httpx.Response,
    payload: Any,
    fallback_message: Optional[str] = None,
) -> ApiError:
    message: Optional[str] = None
    code: Optional[str] = None
    if isinstance(payload, dict):
        message = payload.get("message") or None
        if not message:
            # Handle both {"error": "message"} and {"error": {"message": "..."}}
            error_field = payload.get("error")
            if isinstance(error_field, str):
                message = error_field or None
            elif isinstance(error_field, dict):
                message = error_field.get("message") or None
        if payload.get("code"):
            code = str(payload["code"])
        elif payload.get("statusCode") is not None:
            code = str(payload["statusCode"])
    if not message:
        message = fallback_message or f"Request failed with status {response.status_code}"
    return ApiError(message=str(message), code=code, status=response.status_code)


def envelope(response: httpx.Response, fallback_message: Optional[str] = None) -> Result[Any]:
    """Normalize a received response into ``Ok(body)`` or ``Err(ApiError)``."""
    payload = parse_json(response)
    if not response.is_success:
        return Err(error_from_response(response, payload, fallback_message))
    return Ok(payload)


class HttpClient:
    """Issues single requests against one project's API."""

    def __init__(
        self,
        settings: ClientSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings.require()
        self._transport = transport

    @property
    def project_slug(self) -> str:
        return self.settings.project_slug or ""

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def project_path(self, *segments: Any) -> str:
        """Path under the project prefix, e.g. ``/api/projects/<slug>/auth``."""
        suffix = "".join(f"/{segment}" for segment in segments)
        return f"/api/projects/{self.project_slug}{suffix}"

    def _headers(self, extra: Optional[Mapping[str, str]], json_body: bool) -> httpx.Headers:
        h = httpx.Headers()
        if json_body:
            h["Content-Type"] = "application/json"
        h["Authorization"] = f"Bearer {self.settings.api_key.get_secret_value()}"  # type: ignore[union-attr]
        if extra:
            # Case-insensitive: "authorization" replaces the default
            h.update(extra)
        return h

    async def fetch(
        self,
        path: str,
        *,
        method: str = "GET",
        content: Optional[bytes] = None,
        files: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        timeout_ms: Optional[int] = None,
    ) -> Result[httpx.Response]:
        """Send one request and return the raw response, whatever its status.

        Only transport-level failures come back as ``Err``: ``TIMEOUT`` when the
        deadline fires (the in-flight request is cancelled) and
        ``NETWORK_ERROR`` for everything else that prevents a response.
        """
        url = f"{self.base_url}{path}"
        deadline = (timeout_ms if timeout_ms is not None else self.settings.timeout_ms) / 1000.0
        query = drop_none(params) if params else None

        started = time.monotonic()
        logger.debug("Request", method=method, path=path)
        try:
            request_headers = self._headers(headers, json_body=files is None)
            async with httpx.AsyncClient(transport=self._transport, timeout=deadline) as client:
                response = await asyncio.wait_for(
                    client.request(
                        method,
                        url,
                        content=content,
                        files=files,
                        data=data,
                        headers=request_headers,
                        params=query,
                    ),
                    timeout=deadline,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning("Request timed out", method=method, path=path, timeout_ms=int(deadline * 1000))
            return Err(ApiError(message="Request timeout", code=TIMEOUT))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Request failed", method=method, path=path, error=str(e))
            return Err(ApiError(message=str(e) or "Unknown error", code=NETWORK_ERROR))
        except Exception as e:
            # e.g. header values httpx cannot encode
            logger.warning("Request could not be sent", method=method, path=path, error=str(e))
            return Err(ApiError(message=str(e) or "Unknown error", code=NETWORK_ERROR))

        logger.debug(
            "Response",
            method=method,
            path=path,
            status=response.status_code,
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
        )
        return Ok(response)

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        timeout_ms: Optional[int] = None,
    ) -> Result[Any]:
        """Send a JSON request and return the parsed body as a ``Result``."""
        try:
            content = orjson.dumps(body) if body is not None else None
        except orjson.JSONEncodeError as e:
            logger.warning("Request body not serializable", method=method, path=path, error=str(e))
            return Err(ApiError(message=str(e) or "Unknown error", code=NETWORK_ERROR))
        sent = await self.fetch(
            path,
            method=method,
            content=content,
            headers=headers,
            params=params,
            timeout_ms=timeout_ms,
        )
        if isinstance(sent, Err):
            return sent
        return envelope(sent.data)
