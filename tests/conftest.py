"""Pytest configuration - stub OrbitNest service on httpx.MockTransport."""

from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import orjson
import pytest

from orbitnest import create_client

PROJECT = "demo"
API_KEY = "key123"
BASE_URL = "https://api.test"

Handler = Callable[[httpx.Request], Any]


class StubService:
    """Records every request and answers from registered routes."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Handler] = {}
        self.transport = httpx.MockTransport(self._dispatch)

    def route(self, method: str, path: str, handler: Handler) -> None:
        self._routes[(method, path)] = handler

    def reply(self, method: str, path: str, status: int = 200, json: Any = None, **kwargs: Any) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if json is not None:
                return httpx.Response(status, json=json, **kwargs)
            return httpx.Response(status, **kwargs)

        self.route(method, path, handler)

    async def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": f"no route for {request.method} {request.url.path}"})
        response = handler(request)
        if hasattr(response, "__await__"):
            response = await response
        return response

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return orjson.loads(self.last.content)


def project_path(*segments: str) -> str:
    return "/api/projects/" + PROJECT + "".join(f"/{s}" for s in segments)


def make_user(**overrides: Any) -> Dict[str, Any]:
    user = {
        "id": "u1",
        "email": "a@b.com",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }
    user.update(overrides)
    return user


def make_session(access: str = "t1", refresh: str = "r1", **user: Any) -> Dict[str, Any]:
    return {
        "access_token": access,
        "refresh_token": refresh,
        "expires_in": 900,
        "token_type": "bearer",
        "user": make_user(**user),
    }


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep ORBITNEST_* variables and stray .env files out of the tests."""
    for key in ("ORBITNEST_PROJECT_SLUG", "ORBITNEST_API_KEY", "ORBITNEST_BASE_URL", "ORBITNEST_TIMEOUT_MS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def service() -> StubService:
    return StubService()


@pytest.fixture
def make_client(service):
    def _make(timeout_ms: Optional[int] = None):
        return create_client(
            PROJECT,
            API_KEY,
            base_url=BASE_URL,
            timeout_ms=timeout_ms,
            transport=service.transport,
        )

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
