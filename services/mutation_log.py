"""
Mutation log for video records.

Every title or comment change appends exactly one ActionEntry to the
record's action history. The entry is appended to the same in-memory
record as the change itself, so both become durable in the same save
or not at all.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from db.models.video import VideoRecord
from schemas import ActionEntry, ActionType, Comment


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def append_action(
    record: VideoRecord,
    action_type: ActionType,
    data: dict[str, Any],
    user: str,
) -> ActionEntry:
    """
    Append one action entry to a record's history in memory.

    Args:
        record: The record being mutated.
        action_type: Kind of mutation.
        data: Payload describing the change.
        user: Username the action is attributed to.

    Returns:
        The appended ActionEntry.
    """
    entry = ActionEntry(
        id=str(uuid.uuid4()),
        type=action_type,
        timestamp=utcnow(),
        user=user,
        data=data,
    )
    # Reassign rather than append in place so the JSON column is flagged dirty
    record.action_history = [
        *(record.action_history or []),
        entry.model_dump(mode="json"),
    ]
    return entry


def title_change_data(previous_title: str, new_title: str) -> dict[str, Any]:
    return {"previousTitle": previous_title, "newTitle": new_title}


def comment_add_data(comment: Comment) -> dict[str, Any]:
    return {"commentId": comment.id, "text": comment.text}


def comment_delete_data(comment: Comment) -> dict[str, Any]:
    # Copied before removal; the comment no longer exists afterwards
    return {
        "commentId": comment.id,
        "text": comment.text,
        "username": comment.username,
    }


def action_history(record: VideoRecord) -> list[ActionEntry]:
    """Return a record's action history as ActionEntry models, oldest first."""
    return [ActionEntry.model_validate(entry) for entry in record.action_history or []]


def comments(record: VideoRecord) -> list[Comment]:
    """Return a record's comments as Comment models, in insertion order."""
    return [Comment.model_validate(comment) for comment in record.comments or []]
