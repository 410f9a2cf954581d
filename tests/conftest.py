import json
from typing import Any, Callable

import httpx
import pytest

from roomdesk.clients import BackendClient, resolve
from roomdesk.config import configure_logging
from roomdesk.config.settings import BackendSettings
from roomdesk.storage import MemoryKeyValueStore

BASE_URL = "https://api.example.test"


class FakeBackend:
    """Routes requests to canned responses and records what was sent."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status_code: int = 200, body: Any = None, raw: bytes = None):
        def respond(request: httpx.Request) -> httpx.Response:
            if raw is not None:
                return httpx.Response(status_code, content=raw)
            if body is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=body)

        self.routes[(method, path)] = respond

    def fail(self, method: str, path: str, exc_type: type = httpx.ConnectError):
        def respond(request: httpx.Request) -> httpx.Response:
            raise exc_type("connection refused", request=request)

        self.routes[(method, path)] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.raw_path.decode()))
        if route is None:
            return httpx.Response(404, json={"message": "no route"})
        return route(request)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.raw_path.decode() == path
        ]

    def json_body(self, request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture(autouse=True, scope="session")
def structured_logging():
    """Route structlog through stdlib logging so stdout stays clean."""
    configure_logging()


@pytest.fixture
def backend():
    """Fake backend reachable through an httpx.MockTransport."""
    return FakeBackend()


@pytest.fixture
def transport(backend):
    return httpx.MockTransport(backend.handler)


@pytest.fixture
def client(transport):
    """BackendClient pointed at the fake backend."""
    return BackendClient(resolve(BASE_URL + "/"), timeout=5, transport=transport)


@pytest.fixture
def backend_settings():
    return BackendSettings(base_url=BASE_URL)


@pytest.fixture
def memory_store():
    return MemoryKeyValueStore()
