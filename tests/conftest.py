"""Shared fixtures: a fake HackMD API behind httpx.MockTransport"""

import json

import httpx
import pytest

from hackmd_mcp.client import HackMDClient
from hackmd_mcp.mcp.server import create_server
from hackmd_mcp.settings import HackMDConfig


class FakeHackMD:
    """Route table of canned responses that records every request it sees."""

    def __init__(self):
        self.routes: dict[tuple[str, str], httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status_code: int = 200, json_body=None):
        if json_body is None:
            self.routes[(method, path)] = httpx.Response(status_code)
        else:
            self.routes[(method, path)] = httpx.Response(status_code, json=json_body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.raw_path.decode())
        if key in self.routes:
            return self.routes[key]
        return httpx.Response(404, json={"message": "Not Found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_api() -> FakeHackMD:
    return FakeHackMD()


@pytest.fixture
def config() -> HackMDConfig:
    return HackMDConfig(api_token="test-token")


@pytest.fixture
async def hackmd_client(config, fake_api):
    async with HackMDClient(config, transport=fake_api.transport) as client:
        yield client


@pytest.fixture
def mcp_server(hackmd_client):
    return create_server(hackmd_client)
