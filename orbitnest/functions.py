from __future__ import annotations
from typing import Any, Mapping, Optional

import orjson

from .result import Err, Ok, Result
from .transport import HttpClient, envelope
from .types import FunctionResponse


class FunctionsClient:
    """Invokes a project's edge functions."""

    def __init__(self, client: HttpClient):
        self._client = client

    async def invoke(
        self,
        function_name: str,
        *,
        method: str = "POST",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Result[FunctionResponse]:
        """
        Invoke an edge function.

        Args:
            function_name: Deployed function name
            method: HTTP method used for the invocation
            body: JSON-serializable payload handed to the function
            headers: Extra request headers

        Returns:
            FunctionResponse with the function's payload, status and headers

        """
        sent = await self._client.fetch(
            self._client.project_path("functions", "v1", function_name),
            method=method,
            content=orjson.dumps(body) if body is not None else None,
            headers=headers,
        )
        if isinstance(sent, Err):
            return sent
        response = sent.data
        result = envelope(response)
        if isinstance(result, Err):
            return result
        return Ok(
            FunctionResponse(
                data=result.data,
                status=response.status_code,
                headers=dict(response.headers),
            )
        )
