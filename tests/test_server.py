"""Tests for the server entry point and transport selection"""

import logging
from unittest.mock import MagicMock, patch

import pytest

import hackmd_mcp.mcp.server as server_module
from hackmd_mcp.client import HackMDClient
from hackmd_mcp.mcp.server import HackMDServer, create_server, main, run
from hackmd_mcp.settings import ConfigError, HackMDConfig


@pytest.fixture(autouse=True)
def no_dotenv():
    with patch.object(server_module, "load_dotenv"):
        yield


class TestCreateServer:
    async def test_server_owns_its_client(self, hackmd_client):
        server = create_server(hackmd_client)
        assert isinstance(server, HackMDServer)
        assert server.hackmd_client is hackmd_client
        assert server.name == "hackmd-mcp"

    async def test_each_server_is_independent(self, config):
        async with HackMDClient(config) as a, HackMDClient(HackMDConfig(api_token="other")) as b:
            server_a, server_b = create_server(a), create_server(b)
        assert server_a is not server_b
        assert server_a.hackmd_client is not server_b.hackmd_client


class TestRun:
    def test_stdio_requires_token_before_transport(self):
        with patch.object(server_module, "anyio") as anyio_mock:
            with pytest.raises(ConfigError):
                run("stdio", environ={})
        anyio_mock.run.assert_not_called()

    def test_stdio_runs_with_env_config(self):
        with patch.object(server_module, "anyio") as anyio_mock:
            run("stdio", environ={"HACKMD_API_TOKEN": "tok"})
        fn, config = anyio_mock.run.call_args.args
        assert fn is server_module.run_stdio
        assert config == HackMDConfig(api_token="tok")

    def test_unknown_transport_falls_back_to_stdio(self, caplog):
        with patch.object(server_module, "anyio") as anyio_mock:
            with caplog.at_level(logging.WARNING, logger="hackmd_mcp.mcp"):
                run("sse", environ={"HACKMD_API_TOKEN": "tok"})
        assert 'Unknown TRANSPORT "sse"' in caplog.text
        anyio_mock.run.assert_called_once()

    def test_http_mode_does_not_need_token(self):
        with patch.object(server_module, "run_http") as run_http:
            run("http", "127.0.0.1", 9000, environ={})
        run_http.assert_called_once_with("127.0.0.1", 9000)


class TestMain:
    def test_missing_token_exits_with_code_1(self, monkeypatch, capsys):
        monkeypatch.delenv("HACKMD_API_TOKEN", raising=False)
        monkeypatch.delenv("TRANSPORT", raising=False)
        run_stdio = MagicMock()
        with patch.object(server_module, "run_stdio", run_stdio):
            with pytest.raises(SystemExit) as exc:
                main([])
        assert exc.value.code == 1
        assert "Error: HACKMD_API_TOKEN is required" in capsys.readouterr().err
        run_stdio.assert_not_called()

    def test_port_and_transport_from_environment(self, monkeypatch):
        monkeypatch.setenv("TRANSPORT", "http")
        monkeypatch.setenv("PORT", "9123")
        monkeypatch.delenv("HOST", raising=False)
        with patch.object(server_module, "run_http") as run_http:
            main([])
        run_http.assert_called_once_with("0.0.0.0", 9123)

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("TRANSPORT", "stdio")
        with patch.object(server_module, "run_http") as run_http:
            main(["--transport", "http", "--host", "127.0.0.1", "--port", "8000"])
        run_http.assert_called_once_with("127.0.0.1", 8000)
