"""MCP tools for the authenticated HackMD user."""

from fastmcp import Context

from hackmd_mcp.mcp.tools._utils import get_client, read_only, to_text

__all__ = ["get_user_info"]

TOOL_ANNOTATIONS = {
    "get_user_info": read_only("Get user information"),
}


async def get_user_info(ctx: Context) -> str:
    """Get information about the authenticated user"""
    user = await get_client(ctx).get_me()
    return to_text(user)
