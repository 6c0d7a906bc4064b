"""
Pydantic schemas for the video annotation service.

Defines the comment and action-history documents stored on a video record,
and all request/response models of the HTTP surface. Field names are
snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Stored documents
# =============================================================================

class ActionType(str, Enum):
    """Kinds of mutation recorded in a video's action history."""

    TITLE_CHANGE = "TITLE_CHANGE"
    COMMENT_ADD = "COMMENT_ADD"
    COMMENT_DELETE = "COMMENT_DELETE"


class Comment(CamelModel):
    """A visitor comment on a video."""

    id: str = Field(..., description="Server-assigned comment identifier")
    text: str = Field(..., min_length=1, description="Comment body")
    username: str = Field(..., description="Free-text author name")
    timestamp: datetime = Field(..., description="Creation time (UTC)")


class ActionEntry(CamelModel):
    """
    One entry of a video's append-only action history.

    ``data`` depends on ``type``:
    - TITLE_CHANGE: {previousTitle, newTitle}
    - COMMENT_ADD: {commentId, text}
    - COMMENT_DELETE: {commentId, text, username}
    """

    id: str = Field(..., description="Server-assigned entry identifier")
    type: ActionType
    timestamp: datetime = Field(..., description="Append time (UTC)")
    user: str = Field(..., description="Username the action is attributed to")
    data: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Request schemas
# =============================================================================

# Fields are optional so that missing input reaches the service layer and
# is reported as a 400 with the service's own message.

class AddCommentRequest(CamelModel):
    """Request body for POST /video/comment."""

    video_id: Optional[str] = Field(default=None, examples=["dQw4w9WgXcQ"])
    text: Optional[str] = Field(default=None, examples=["Great video!"])
    username: Optional[str] = Field(default=None, examples=["Bob"])


class UpdateTitleRequest(CamelModel):
    """Request body for PUT /video/title."""

    video_id: Optional[str] = Field(default=None, examples=["dQw4w9WgXcQ"])
    new_title: Optional[str] = Field(default=None, examples=["A better title"])


# =============================================================================
# Response schemas
# =============================================================================

class AddCommentResponse(CamelModel):
    success: bool = True
    comment: Comment
    action_history: list[ActionEntry]


class DeleteCommentResponse(CamelModel):
    success: bool = True
    message: str = "Comment deleted successfully"
    action_history: list[ActionEntry]


class UpdateTitleResponse(CamelModel):
    success: bool = True
    message: str = "Title updated successfully"
    current_title: str
    action_history: list[ActionEntry]


class HistoryResponse(CamelModel):
    success: bool = True
    action_history: list[ActionEntry]


class VideoViewResponse(CamelModel):
    """
    Response schema for GET /youtube.

    YouTube metadata merged with the stored state: ``title`` is the edited
    title, ``original_title`` the title fetched when the record was created.
    """

    id: str
    title: str
    original_title: str
    description: Optional[str] = None
    published_at: Optional[str] = None
    thumbnails: dict[str, Any] = Field(default_factory=dict)
    channel_id: Optional[str] = None
    channel_title: Optional[str] = None
    channel_thumbnail: Optional[str] = None
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    duration: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    action_history: list[ActionEntry] = Field(default_factory=list)


class ErrorResponse(CamelModel):
    """Structured error body returned by every endpoint on failure."""

    success: bool = False
    message: str
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Response schema for the /health endpoint."""

    status: str = Field(..., examples=["healthy"])
    version: str = Field(..., examples=["1.0.0"])
