"""MCP tools for notes in a team workspace."""

from typing import Annotated

from fastmcp import Context
from pydantic import Field

from hackmd_mcp.mcp.tools._utils import get_client, mutating, read_only, to_text
from hackmd_mcp.schemas import CreateNoteOptions, UpdateNoteOptions

__all__ = ["list_team_notes", "create_team_note", "update_team_note", "delete_team_note"]

TOOL_ANNOTATIONS = {
    "list_team_notes": read_only("Get a list of notes in a Team's workspace"),
    "create_team_note": mutating(
        "Create a note in a Team workspace", destructive=False, idempotent=False
    ),
    "update_team_note": mutating(
        "Update a note in a Team's workspace", destructive=True, idempotent=False
    ),
    "delete_team_note": mutating(
        "Delete a note in a Team's workspace", destructive=True, idempotent=True
    ),
}

TeamPath = Annotated[str, Field(description="Team path")]
NoteId = Annotated[str, Field(description="Note ID")]


async def list_team_notes(teamPath: TeamPath, ctx: Context) -> str:
    """List all notes in a team"""
    notes = await get_client(ctx).get_team_notes(teamPath)
    return to_text(notes)


async def create_team_note(
    teamPath: TeamPath,
    payload: Annotated[CreateNoteOptions, Field(description="Create note options")],
    ctx: Context,
) -> str:
    """Create a new note in a team"""
    note = await get_client(ctx).create_team_note(teamPath, payload.to_payload())
    return f"Team note created successfully:\n{to_text(note)}"


async def update_team_note(
    teamPath: TeamPath,
    noteId: NoteId,
    payload: Annotated[UpdateNoteOptions, Field(description="Update note options")],
    ctx: Context,
) -> str:
    """Update an existing note in a team"""
    await get_client(ctx).update_team_note(teamPath, noteId, payload.to_payload())
    return f"Team note {noteId} updated successfully"


async def delete_team_note(teamPath: TeamPath, noteId: NoteId, ctx: Context) -> str:
    """Delete a note in a team"""
    await get_client(ctx).delete_team_note(teamPath, noteId)
    return f"Team note {noteId} deleted successfully"
