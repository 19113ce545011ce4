"""Stateless streamable-HTTP endpoint.

Every ``POST /mcp`` resolves its own credentials and gets a fresh HackMD
client, MCP server and transport, all closed when the request finishes or the
client disconnects. Nothing is shared between requests, so there is no session
to resume: ``GET`` (SSE stream) and ``DELETE`` (session termination) are
rejected with 405.
"""

import logging
import os
from typing import Mapping, Optional

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.types import Message, Receive, Scope, Send

from hackmd_mcp.client import HackMDClient
from hackmd_mcp.config import (
    ENV_CORS_ORIGIN,
    HACKMD_API_TOKEN_HEADER,
    HACKMD_API_URL_HEADER,
    JSONRPC_INTERNAL_ERROR,
    JSONRPC_SERVER_ERROR,
    MCP_ENDPOINT_PATH,
)
from hackmd_mcp.mcp.server import create_server
from hackmd_mcp.settings import ConfigError, HackMDConfig, resolve_config

logger = logging.getLogger(__name__)


def jsonrpc_error(code: int, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        {
            "jsonrpc": "2.0",
            "error": {"code": code, "message": message},
            "id": None,
        },
        status_code=status_code,
    )


async def handle_stateless_request(
    config: HackMDConfig, scope: Scope, receive: Receive, send: Send
) -> None:
    """Serve one MCP request with its own client, server and transport."""
    async with HackMDClient(config) as client:
        server = create_server(client)
        session_manager = StreamableHTTPSessionManager(
            app=server._mcp_server,
            json_response=False,
            stateless=True,
        )
        async with session_manager.run():
            await session_manager.handle_request(scope, receive, send)
    logger.debug("MCP request closed; transport and server torn down")


class MCPEndpoint:
    """ASGI app mounted at ``/mcp``."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        if request.method != "POST":
            response = jsonrpc_error(JSONRPC_SERVER_ERROR, "Method not allowed.", 405)
            await response(scope, receive, send)
            return

        try:
            config = resolve_config(request.headers, request.query_params, self.environ)
        except ConfigError as e:
            logger.info(f"Rejected MCP request: {e.message}")
            response = jsonrpc_error(e.code, e.message, 400)
            await response(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await handle_stateless_request(config, scope, receive, send_wrapper)
        except Exception:
            logger.exception("Error handling MCP request")
            if not response_started:
                response = jsonrpc_error(
                    JSONRPC_INTERNAL_ERROR, "Internal server error", 500
                )
                await response(scope, receive, send)


def _cors_origins(environ: Mapping[str, str]) -> list[str]:
    raw = environ.get(ENV_CORS_ORIGIN, "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def create_app(environ: Optional[Mapping[str, str]] = None) -> Starlette:
    """Build the ASGI application served in HTTP mode."""
    environ = os.environ if environ is None else environ
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=_cors_origins(environ),
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=[
                "Content-Type",
                "mcp-session-id",
                "mcp-protocol-version",
                HACKMD_API_TOKEN_HEADER,
                HACKMD_API_URL_HEADER,
            ],
            expose_headers=[
                "Mcp-Session-Id",
                HACKMD_API_TOKEN_HEADER,
                HACKMD_API_URL_HEADER,
            ],
        )
    ]
    return Starlette(
        routes=[Route(MCP_ENDPOINT_PATH, endpoint=MCPEndpoint(environ))],
        middleware=middleware,
    )
