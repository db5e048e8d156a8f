"""Pytest fixtures: an in-memory key-value backend behind httpx.MockTransport."""

import json
from typing import Any, Optional

import httpx
import pytest
import pytest_asyncio

from cloudkv import AsyncKVClient

APP_ID = "test-app"
APP_KEY = "test-key"
USER = "alice"


class FakeKVServer:
    """Stores PUT envelopes per (user, key) and serves them back on GET."""

    def __init__(self) -> None:
        self.store: dict[tuple[str, str], dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail: Optional[Exception] = None
        self.status_override: Optional[int] = None
        self.raw_override: Optional[bytes] = None
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail is not None:
            raise self.fail
        if self.status_override is not None:
            return httpx.Response(self.status_override, text="server says no")
        if request.url.path != "/data/manageData":
            return httpx.Response(404, text="no such endpoint")
        if request.headers.get("X-AppId") != APP_ID or request.headers.get("X-AppKey") != APP_KEY:
            return httpx.Response(401, text="bad credentials")

        if request.method == "GET":
            if self.raw_override is not None:
                return httpx.Response(200, content=self.raw_override)
            ident = (request.url.params["user"], request.url.params["key"])
            if ident not in self.store:
                return httpx.Response(404, text="KeyDoesNotExist")
            return httpx.Response(200, json=self.store[ident])
        if request.method == "PUT":
            body = json.loads(request.content)
            self.store[(body["userIdentifier"], body["keyIdentifier"])] = body
            return httpx.Response(200)
        if request.method == "DELETE":
            self.store.pop((request.url.params["user"], request.url.params["key"]), None)
            return httpx.Response(200)
        return httpx.Response(405)

    def put_raw(self, key: str, envelope: dict[str, Any], user: str = USER) -> None:
        self.store[(user, key)] = envelope


@pytest.fixture
def server() -> FakeKVServer:
    return FakeKVServer()


@pytest_asyncio.fixture
async def client(server: FakeKVServer):
    c = AsyncKVClient(app_id=APP_ID, app_key=APP_KEY, user_name=USER, transport=server.transport)
    yield c
    await c.close()
