import functools
import inspect
import json
import logging
from typing import Any, Iterator, NamedTuple

from fastmcp import Context
from fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations

from hackmd_mcp.client import HackMDClient

logger = logging.getLogger("hackmd_mcp.mcp.tools")


# ------------------------------------------------------------------
# Annotations
# ------------------------------------------------------------------


def read_only(title: str) -> ToolAnnotations:
    return ToolAnnotations(title=title, readOnlyHint=True, openWorldHint=True)


def mutating(title: str, *, destructive: bool, idempotent: bool) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        readOnlyHint=False,
        destructiveHint=destructive,
        idempotentHint=idempotent,
        openWorldHint=True,
    )


# ------------------------------------------------------------------
# Result helpers
# ------------------------------------------------------------------


def get_client(ctx: Context) -> HackMDClient:
    """Return the HackMD client owned by the server handling this call."""
    return ctx.fastmcp.hackmd_client


def to_text(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def wrap_api_errors(func):
    """Report any failure of a tool as an error result instead of raising.

    FastMCP turns a ToolError into a ``CallToolResult`` with ``isError`` set
    and the message as its only text block.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except ToolError:
            raise
        except Exception as e:
            logger.warning(f"Tool {func.__name__} failed: {e}")
            raise ToolError(f"Error: {e}") from e

    return wrapper


# ------------------------------------------------------------------
# Registry
# ------------------------------------------------------------------


class ToolSpec(NamedTuple):
    name: str
    func: Any
    annotations: ToolAnnotations


def _tool_modules():
    import hackmd_mcp.mcp.tools.history as history_tools
    import hackmd_mcp.mcp.tools.notes as notes_tools
    import hackmd_mcp.mcp.tools.profile as profile_tools
    import hackmd_mcp.mcp.tools.team_notes as team_notes_tools
    import hackmd_mcp.mcp.tools.teams as teams_tools

    return [profile_tools, teams_tools, history_tools, notes_tools, team_notes_tools]


def iter_tool_specs() -> Iterator[ToolSpec]:
    """Yield every tool declared by the tool modules, in registration order."""
    for mod in _tool_modules():
        if not hasattr(mod, "__all__"):
            logger.warning(f"Module {mod.__name__} has no __all__ defined.")
            continue

        for func_name in mod.__all__:
            func = getattr(mod, func_name, None)
            if inspect.iscoroutinefunction(func):
                yield ToolSpec(func_name, func, mod.TOOL_ANNOTATIONS[func_name])


def register_all_tools(mcp_server) -> int:
    """Register all exported tool functions on ``mcp_server``.

    The server must be created with ``on_duplicate_tools="error"`` so a name
    clash fails construction instead of replacing a tool.
    """
    registered_count = 0
    for spec in iter_tool_specs():
        logger.debug(f"Registering tool: {spec.name}")
        mcp_server.tool(
            wrap_api_errors(spec.func),
            name=spec.name,
            annotations=spec.annotations,
            output_schema=None,
        )
        registered_count += 1

    logger.debug(f"Registered {registered_count} tools.")
    return registered_count
