"""Request bodies for note creation and update.

Field names match the HackMD API request bodies so a validated payload can be
forwarded as-is.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

NotePermissionRole = Literal["owner", "signed_in", "guest"]

CommentPermissionType = Literal[
    "disabled",
    "forbidden",
    "owners",
    "signed_in_users",
    "everyone",
]


class _NoteOptions(BaseModel):
    def to_payload(self) -> dict[str, Any]:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_none=True)


class CreateNoteOptions(_NoteOptions):
    """Create note options"""

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")
    readPermission: Optional[NotePermissionRole] = Field(
        default=None, description="Read permission"
    )
    writePermission: Optional[NotePermissionRole] = Field(
        default=None, description="Write permission"
    )
    commentPermission: Optional[CommentPermissionType] = Field(
        default=None, description="Comment permission"
    )
    permalink: Optional[str] = Field(default=None, description="Custom permalink")


class UpdateNoteOptions(_NoteOptions):
    """Update note options"""

    content: Optional[str] = Field(default=None, description="New note content")
    readPermission: Optional[NotePermissionRole] = Field(
        default=None, description="Read permission"
    )
    writePermission: Optional[NotePermissionRole] = Field(
        default=None, description="Write permission"
    )
    permalink: Optional[str] = Field(default=None, description="Custom permalink")
