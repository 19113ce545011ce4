"""CLI entry point — typer + rich operator commands"""

import logging
import sys
from typing import Optional

import anyio
import typer
from rich.console import Console
from rich.table import Table

from hackmd_mcp import __version__
from hackmd_mcp.client import HackMDClient
from hackmd_mcp.config import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TRANSPORT,
    ENV_API_TOKEN,
    ENV_API_URL,
    ENV_HOST,
    ENV_PORT,
    ENV_TRANSPORT,
)
from hackmd_mcp.settings import ConfigError, load_env_config

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(
    name="hackmd",
    help="📝 HackMD MCP — expose HackMD notes to MCP clients",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ========================================================================
# serve command
# ========================================================================


@app.command()
def serve(
    transport: str = typer.Option(
        DEFAULT_TRANSPORT, "--transport", "-t",
        envvar=ENV_TRANSPORT,
        help="stdio (one client over stdin/stdout) or http (stateless, POST /mcp)",
    ),
    host: str = typer.Option(
        DEFAULT_HOST, "--host", "-H",
        envvar=ENV_HOST,
        help="Host to bind in http mode",
    ),
    port: int = typer.Option(
        DEFAULT_PORT, "--port", "-p",
        envvar=ENV_PORT,
        help="Port to listen on in http mode",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """🚀 Run the MCP server"""
    from hackmd_mcp.mcp.server import run

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    try:
        run(transport, host, port)
    except ConfigError as e:
        err_console.print(f"[red]✗[/red] Error: {e.message}")
        raise typer.Exit(1)


# ========================================================================
# tools command
# ========================================================================


def _hint(value: Optional[bool]) -> str:
    if value is None:
        return "[dim]-[/dim]"
    return "[green]✓[/green]" if value else "[red]✗[/red]"


@app.command()
def tools() -> None:
    """🧰 List the MCP tools this server exposes"""
    from hackmd_mcp.mcp.tools._utils import iter_tool_specs

    specs = list(iter_tool_specs())
    table = Table(title=f"HackMD MCP tools ({len(specs)})")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Read-only", justify="center")
    table.add_column("Destructive", justify="center")
    table.add_column("Idempotent", justify="center")

    for spec in specs:
        ann = spec.annotations
        table.add_row(
            spec.name,
            ann.title or "",
            _hint(ann.readOnlyHint),
            _hint(ann.destructiveHint),
            _hint(ann.idempotentHint),
        )
    console.print(table)


# ========================================================================
# whoami command
# ========================================================================


@app.command()
def whoami(
    token: Optional[str] = typer.Option(
        None, "--token", "-t",
        envvar=ENV_API_TOKEN,
        help="HackMD API token",
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url",
        envvar=ENV_API_URL,
        help="HackMD API base URL",
    ),
) -> None:
    """🔐 Check a token by fetching the authenticated user"""
    try:
        config = load_env_config({ENV_API_TOKEN: token or "", ENV_API_URL: api_url or ""})
    except ConfigError as e:
        console.print(f"\n[red]✗[/red] {e.message}")
        console.print("[dim]Pass --token or set HACKMD_API_TOKEN.[/dim]")
        raise typer.Exit(1)

    async def fetch_me():
        async with HackMDClient(config) as client:
            return await client.get_me()

    try:
        me = anyio.run(fetch_me)
    except Exception as e:
        console.print(f"\n[red]✗[/red] Request failed: {e}")
        raise typer.Exit(1)

    if not isinstance(me, dict):
        console.print("\n[red]✗[/red] Request failed: unexpected response from HackMD")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Authenticated against {config.api_url}")
    console.print(f"  Name: {me.get('name', '')}")
    console.print(f"  Email: {me.get('email') or '-'}")
    console.print(f"  User path: {me.get('userPath', '')}")
    teams = me.get("teams") or []
    if teams:
        console.print(f"  Teams: {', '.join(t.get('path', '') for t in teams)}")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Show version",
    ),
) -> None:
    if version:
        console.print(f"hackmd-mcp v{__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def main():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    main()
