"""Pytest configuration and fixtures."""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from restcall.client.config import RestCallConfig
from restcall.codecs import CodecRegistry
from restcall.contract import ContractRegistry, MethodDescription, ParamDescription, ParamPlace

BASE_URL = "http://api.test/v1"


class StubTransport:
    """Transport double that records requests and replays canned responses."""

    def __init__(self, status_code: int = 200, json_body=None, content: bytes | None = None,
                 headers: dict | None = None):
        self.requests: list[httpx.Request] = []
        self.closed = False
        self.status_code = status_code
        self.headers = dict(headers or {})
        if json_body is not None:
            self.content = json.dumps(json_body).encode()
            self.headers.setdefault("content-type", "application/json")
        else:
            self.content = content or b""

    async def send(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status_code,
            content=self.content,
            headers=self.headers,
            request=request,
        )

    async def aclose(self) -> None:
        self.closed = True

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config():
    """Create a test config."""
    return RestCallConfig(
        base_url=BASE_URL,
        timeout=30.0,
    )


@pytest.fixture
def codecs():
    """Codec registry without plugin discovery."""
    return CodecRegistry(load_plugins=False)


@pytest.fixture
def stub_transport():
    """Transport answering 200 with a JSON body."""
    return StubTransport(json_body={"id": 42, "name": "Ada"})


@pytest.fixture
def mock_transport():
    """Mock transport answering every request with 200 and a JSON body."""
    transport = MagicMock()
    transport.send = AsyncMock(
        side_effect=lambda request: httpx.Response(200, json={"id": 42, "name": "Ada"}, request=request)
    )
    transport.aclose = AsyncMock()
    return transport


@pytest.fixture
def get_user():
    """GET users/{user_id} with a query and a header parameter."""
    return MethodDescription(
        operation_id="get_user",
        http_method="GET",
        url="users/{user_id}",
        params=[
            ParamDescription(name="user_id", place=ParamPlace.PATH, source_type="int"),
            ParamDescription(name="expand", place=ParamPlace.QUERY),
            ParamDescription(name="trace_id", alias="X-Trace-Id", place=ParamPlace.HEADER),
        ],
        expected_codes=[200, 404],
    )


@pytest.fixture
def create_user():
    """POST users with a JSON body."""
    return MethodDescription(
        operation_id="create_user",
        http_method="POST",
        url="users",
        params=[ParamDescription(name="user", place=ParamPlace.BODY, source_type="json")],
        expected_codes=[201],
    )


@pytest.fixture
def registry(get_user, create_user):
    """Registry with a few declared operations."""
    registry = ContractRegistry(base_url=BASE_URL)
    registry.register("get_user", get_user)
    registry.register("create_user", create_user)
    registry.register("health", MethodDescription(http_method="GET", url="health"))
    return registry


@pytest.fixture
def contracts_file(tmp_path):
    """Contracts file on disk."""
    path = tmp_path / "contracts.json"
    path.write_text(json.dumps({
        "base_url": BASE_URL,
        "operations": {
            "get_user": {
                "method": "get",
                "url": "users/{user_id}",
                "params": [
                    {"name": "user_id", "place": "path", "source_type": "int"},
                    {"name": "verbose", "place": "query", "source_type": "bool"},
                ],
                "expected_codes": [200, 404],
            },
            "create_user": {
                "method": "POST",
                "url": "users",
                "params": [{"name": "user", "place": "body", "source_type": "json"}],
                "expected_codes": [201],
            },
        },
    }))
    return path
