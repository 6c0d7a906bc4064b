"""
Comment service — add and delete visitor comments on a video.

Each operation resolves the video record (creating it from YouTube
metadata if needed), applies the change together with its action-history
entry, and saves the record once.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Union

from config import config
from errors import NotFoundError, ValidationError
from schemas import ActionEntry, ActionType, Comment
from services.mutation_log import (
    action_history,
    append_action,
    comment_add_data,
    comment_delete_data,
    comments,
    utcnow,
)
from store.video_store import VideoRecordStore

logger = logging.getLogger(__name__)


@dataclass
class CommentAdded:
    comment: Comment
    action_history: list[ActionEntry]


@dataclass
class CommentDeleted:
    comment: Comment
    action_history: list[ActionEntry]


def _canonical_comment_id(comment_id: Union[str, uuid.UUID]) -> str:
    """
    Normalize a comment ID to the form it is stored in.

    Accepts a UUID, or any string form of one (hyphenated or bare hex,
    any case). Strings that are not UUIDs are compared as given.
    """
    if isinstance(comment_id, uuid.UUID):
        return str(comment_id)
    try:
        return str(uuid.UUID(comment_id.strip()))
    except ValueError:
        return comment_id


class CommentService:
    """Add/delete operations on a video's comment list."""

    def __init__(
        self,
        store: VideoRecordStore,
        default_username: Optional[str] = None,
    ) -> None:
        self.store = store
        self.default_username = default_username or config.app.default_username

    def add(
        self,
        video_id: Optional[str],
        text: Optional[str],
        username: Optional[str] = None,
    ) -> CommentAdded:
        """
        Add a comment to a video.

        Args:
            video_id: YouTube video ID.
            text: Comment body. Must not be empty.
            username: Author name. Blank means the default username.

        Returns:
            CommentAdded with the new comment and the updated history.

        Raises:
            ValidationError: If video_id or text is missing.
            NotFoundError: If the video is not stored and not on YouTube.
        """
        if not video_id or not text or not text.strip():
            raise ValidationError("Video ID and comment text are required")

        username = (username or "").strip() or self.default_username
        record = self.store.get_or_create(video_id)

        comment = Comment(
            id=str(uuid.uuid4()),
            text=text,
            username=username,
            timestamp=utcnow(),
        )
        record.comments = [*(record.comments or []), comment.model_dump(mode="json")]
        append_action(record, ActionType.COMMENT_ADD, comment_add_data(comment), username)

        self.store.save(record)
        logger.info(f"Comment {comment.id} added to video {video_id} by {username!r}")

        return CommentAdded(comment=comment, action_history=action_history(record))

    def delete(
        self,
        video_id: Optional[str],
        comment_id: Optional[Union[str, uuid.UUID]],
    ) -> CommentDeleted:
        """
        Delete a comment from a video.

        The comment's id, text and username are recorded in the
        COMMENT_DELETE entry before it is removed.

        Args:
            video_id: YouTube video ID.
            comment_id: ID of the comment, as a UUID or string.

        Returns:
            CommentDeleted with the removed comment and the updated history.

        Raises:
            ValidationError: If either argument is missing.
            NotFoundError: If the video or the comment does not exist.
        """
        if not video_id or not comment_id:
            raise ValidationError("Video ID and comment ID are required")

        record = self.store.get_or_create(video_id)

        wanted = _canonical_comment_id(comment_id)
        existing = comments(record)
        index = next(
            (i for i, comment in enumerate(existing)
             if _canonical_comment_id(comment.id) == wanted),
            None,
        )
        if index is None:
            raise NotFoundError("Comment not found")

        comment = existing[index]
        delete_data = comment_delete_data(comment)

        remaining = list(record.comments)
        del remaining[index]
        record.comments = remaining
        append_action(
            record, ActionType.COMMENT_DELETE, delete_data, self.default_username)

        self.store.save(record)
        logger.info(f"Comment {comment.id} deleted from video {video_id}")

        return CommentDeleted(comment=comment, action_history=action_history(record))
