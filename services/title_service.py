"""
Title service — edit the displayed title of a video.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from config import config
from errors import ValidationError
from schemas import ActionEntry, ActionType
from services.mutation_log import action_history, append_action, title_change_data
from store.video_store import VideoRecordStore

logger = logging.getLogger(__name__)


@dataclass
class TitleUpdated:
    current_title: str
    action_history: list[ActionEntry]


class TitleService:
    """Update operation on a video's current title."""

    def __init__(
        self,
        store: VideoRecordStore,
        default_username: Optional[str] = None,
    ) -> None:
        self.store = store
        self.default_username = default_username or config.app.default_username

    def update(self, video_id: Optional[str], new_title: Optional[str]) -> TitleUpdated:
        """
        Replace a video's current title. The original title is kept.

        Raises:
            ValidationError: If video_id or new_title is missing.
            NotFoundError: If the video is not stored and not on YouTube.
        """
        if not video_id or not new_title or not new_title.strip():
            raise ValidationError("Video ID and new title are required")

        record = self.store.get_or_create(video_id)
        previous_title = record.current_title

        append_action(
            record,
            ActionType.TITLE_CHANGE,
            title_change_data(previous_title, new_title),
            self.default_username,
        )
        record.current_title = new_title

        self.store.save(record)
        logger.info(f"Title of video {video_id} changed from {previous_title!r} to {new_title!r}")

        return TitleUpdated(
            current_title=record.current_title,
            action_history=action_history(record),
        )
