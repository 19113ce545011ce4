"""MCP tools for HackMD teams."""

from fastmcp import Context

from hackmd_mcp.mcp.tools._utils import get_client, read_only, to_text

__all__ = ["list_teams"]

TOOL_ANNOTATIONS = {
    "list_teams": read_only("Get a list of the teams to which the user has permission"),
}


async def list_teams(ctx: Context) -> str:
    """List all teams accessible to the user"""
    teams = await get_client(ctx).get_teams()
    return to_text(teams)
