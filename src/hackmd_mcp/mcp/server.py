"""HackMD MCP Server.

This server exposes the HackMD API as MCP tools, over stdio (one long-lived
session) or stateless streamable HTTP (a fresh server per request).
"""

import argparse
import logging
import os
import sys
from typing import Mapping, Optional

import anyio
from dotenv import load_dotenv
from fastmcp import FastMCP

from hackmd_mcp import __version__
from hackmd_mcp.client import HackMDClient
from hackmd_mcp.config import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TRANSPORT,
    ENV_DEBUG,
    ENV_HOST,
    ENV_PORT,
    ENV_TRANSPORT,
)
from hackmd_mcp.settings import ConfigError, HackMDConfig, load_env_config

SERVER_NAME = "hackmd-mcp"

INSTRUCTIONS = """HackMD MCP - Read and manage HackMD notes.

Tools available:
- get_user_info(): Profile of the authenticated user.
- list_teams(): Teams the user belongs to.
- get_history(): Notes the user read recently.
- list_user_notes() / get_note(noteId): Browse notes in the user's workspace.
- create_note(payload) / update_note(noteId, payload) / delete_note(noteId)
- list_team_notes(teamPath) / create_team_note(teamPath, payload)
- update_team_note(teamPath, noteId, payload) / delete_team_note(teamPath, noteId)

Team tools take the team's path (see list_teams), not its display name.
"""

mcp_logger = logging.getLogger("hackmd_mcp.mcp")


class HackMDServer(FastMCP):
    """FastMCP server bound to one HackMD API client."""

    def __init__(self, client: HackMDClient, **kwargs):
        super().__init__(**kwargs)
        self.hackmd_client = client


def create_server(client: HackMDClient) -> HackMDServer:
    """Build a server with every HackMD tool registered against ``client``."""
    from hackmd_mcp.mcp.tools._utils import register_all_tools

    server = HackMDServer(
        client,
        name=SERVER_NAME,
        instructions=INSTRUCTIONS,
        on_duplicate_tools="error",
    )
    register_all_tools(server)
    return server


async def run_stdio(config: HackMDConfig) -> None:
    """Serve one session over stdin/stdout until the process ends."""
    async with HackMDClient(config) as client:
        server = create_server(client)
        mcp_logger.info("MCP Server running in stdio mode")
        await server.run_async(transport="stdio", show_banner=False)


def run_http(host: str, port: int) -> None:
    import uvicorn

    from hackmd_mcp.mcp.http_app import create_app

    mcp_logger.info(f"MCP HTTP Server listening on port {port}")
    uvicorn.run(create_app(), host=host, port=port)


def run(
    transport: str,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """Start the server in the requested mode.

    Raises:
        ConfigError: stdio mode without HACKMD_API_TOKEN. Raised before any
            transport is constructed.
    """
    if transport == "http":
        run_http(host, port)
        return

    if transport != "stdio":
        mcp_logger.warning(
            f'Unknown TRANSPORT "{transport}", defaulting to "stdio" mode.'
        )

    config = load_env_config(environ)
    anyio.run(run_stdio, config)


def main(argv: Optional[list[str]] = None) -> None:
    """Run the MCP server."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="hackmd-mcp",
        description="HackMD MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--transport", "-t",
        default=os.environ.get(ENV_TRANSPORT, DEFAULT_TRANSPORT),
        help="Transport protocol: stdio or http (default: stdio)"
    )
    parser.add_argument(
        "--host", "-H",
        default=os.environ.get(ENV_HOST, DEFAULT_HOST),
        help=f"Host to bind for HTTP (default: {DEFAULT_HOST})"
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=int(os.environ.get(ENV_PORT, DEFAULT_PORT)),
        help=f"Port for HTTP transport (default: {DEFAULT_PORT})"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=os.environ.get(ENV_DEBUG, "").lower() == "true",
        help="Enable debug logging"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    # stdout carries the stdio protocol; logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        run(args.transport, args.host, args.port)
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
