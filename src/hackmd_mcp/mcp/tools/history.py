"""MCP tools for the user's read history."""

from fastmcp import Context

from hackmd_mcp.mcp.tools._utils import get_client, read_only, to_text

__all__ = ["get_history"]

TOOL_ANNOTATIONS = {
    "get_history": read_only("Get a history of read notes"),
}


async def get_history(ctx: Context) -> str:
    """Get user's reading history"""
    history = await get_client(ctx).get_history()
    return to_text(history)
