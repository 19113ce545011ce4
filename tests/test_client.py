"""Tests for hackmd_mcp.client module"""

import httpx
import pytest

from hackmd_mcp.client import HackMDAPIError, HackMDClient
from hackmd_mcp.settings import HackMDConfig


class TestRequests:
    async def test_sends_bearer_token(self, hackmd_client, fake_api):
        fake_api.add("GET", "/v1/me", json_body={"name": "Ada"})
        assert await hackmd_client.get_me() == {"name": "Ada"}
        request = fake_api.requests[-1]
        assert request.headers["Authorization"] == "Bearer test-token"
        assert str(request.url) == "https://api.hackmd.io/v1/me"

    async def test_custom_base_url(self, fake_api):
        fake_api.add("GET", "/api/v1/teams", json_body=[])
        config = HackMDConfig(api_token="t", api_url="https://hackmd.example.com/api/v1")
        async with HackMDClient(config, transport=fake_api.transport) as client:
            assert await client.get_teams() == []
        assert fake_api.requests[-1].url.host == "hackmd.example.com"

    @pytest.mark.parametrize(
        "method_name, args, http_method, path",
        [
            ("get_history", (), "GET", "/v1/history"),
            ("get_note_list", (), "GET", "/v1/notes"),
            ("get_note", ("n1",), "GET", "/v1/notes/n1"),
            ("delete_note", ("n1",), "DELETE", "/v1/notes/n1"),
            ("get_team_notes", ("crew",), "GET", "/v1/teams/crew/notes"),
            ("delete_team_note", ("crew", "n1"), "DELETE", "/v1/teams/crew/notes/n1"),
        ],
    )
    async def test_endpoint_mapping(
        self, hackmd_client, fake_api, method_name, args, http_method, path
    ):
        fake_api.add(http_method, path, json_body={"ok": True})
        await getattr(hackmd_client, method_name)(*args)
        assert len(fake_api.requests) == 1
        assert fake_api.requests[0].method == http_method
        assert fake_api.requests[0].url.raw_path.decode() == path

    async def test_create_note_posts_payload_unchanged(self, hackmd_client, fake_api):
        fake_api.add("POST", "/v1/notes", 201, json_body={"id": "n1", "title": "T"})
        payload = {"title": "T", "content": "C", "readPermission": "guest"}
        note = await hackmd_client.create_note(payload)
        assert note == {"id": "n1", "title": "T"}
        assert fake_api.last_json() == payload

    async def test_update_team_note_patches(self, hackmd_client, fake_api):
        fake_api.add("PATCH", "/v1/teams/crew/notes/n1", 202)
        result = await hackmd_client.update_team_note("crew", "n1", {"content": "new"})
        assert result is None
        assert fake_api.last_json() == {"content": "new"}

    async def test_path_segments_are_encoded(self, hackmd_client, fake_api):
        fake_api.add("GET", "/v1/notes/..%2Fme", json_body={"id": "../me"})
        note = await hackmd_client.get_note("../me")
        assert note == {"id": "../me"}
        assert fake_api.requests[-1].url.raw_path.decode() == "/v1/notes/..%2Fme"


class TestErrors:
    async def test_error_response_raises(self, hackmd_client, fake_api):
        with pytest.raises(HackMDAPIError) as exc:
            await hackmd_client.get_note("missing")
        assert exc.value.status_code == 404
        assert str(exc.value) == (
            "Received an error response (404 Not Found) from HackMD: Not Found"
        )

    async def test_error_without_body(self, hackmd_client, fake_api):
        fake_api.add("GET", "/v1/me", 401)
        with pytest.raises(HackMDAPIError) as exc:
            await hackmd_client.get_me()
        assert exc.value.status_code == 401
        assert str(exc.value) == "Received an error response (401 Unauthorized) from HackMD"

    async def test_network_error_propagates(self, config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with HackMDClient(config, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get_me()
