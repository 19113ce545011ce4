"""MCP tools for notes in the user's own workspace.

Argument names (``noteId``, ``payload``) are the names MCP clients send.
"""

from typing import Annotated

from fastmcp import Context
from pydantic import Field

from hackmd_mcp.mcp.tools._utils import get_client, mutating, read_only, to_text
from hackmd_mcp.schemas import CreateNoteOptions, UpdateNoteOptions

__all__ = ["list_user_notes", "get_note", "create_note", "update_note", "delete_note"]

TOOL_ANNOTATIONS = {
    "list_user_notes": read_only("Get a list of notes in the user's workspace"),
    "get_note": read_only("Get a note"),
    "create_note": mutating("Create a note", destructive=False, idempotent=False),
    "update_note": mutating("Update a note", destructive=True, idempotent=False),
    "delete_note": mutating("Delete a note", destructive=True, idempotent=True),
}

NoteId = Annotated[str, Field(description="Note ID")]


async def list_user_notes(ctx: Context) -> str:
    """List all notes owned by the user"""
    notes = await get_client(ctx).get_note_list()
    return to_text(notes)


async def get_note(noteId: NoteId, ctx: Context) -> str:
    """Get a note by its ID"""
    note = await get_client(ctx).get_note(noteId)
    return to_text(note)


async def create_note(
    payload: Annotated[CreateNoteOptions, Field(description="Create note options")],
    ctx: Context,
) -> str:
    """Create a new note"""
    note = await get_client(ctx).create_note(payload.to_payload())
    return f"Note created successfully:\n{to_text(note)}"


async def update_note(
    noteId: NoteId,
    payload: Annotated[UpdateNoteOptions, Field(description="Update note options")],
    ctx: Context,
) -> str:
    """Update an existing note"""
    await get_client(ctx).update_note(noteId, payload.to_payload())
    return f"Note {noteId} updated successfully"


async def delete_note(noteId: NoteId, ctx: Context) -> str:
    """Delete a note"""
    await get_client(ctx).delete_note(noteId)
    return f"Note {noteId} deleted successfully"
