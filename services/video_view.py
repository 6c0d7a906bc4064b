"""
Video view service — the combined read behind GET /youtube.

Fetches full metadata from YouTube first, then merges in the stored
state of the video (edited title, comments, action history), creating
the record on first sight without a second metadata fetch.
"""

import logging
from typing import Optional

from errors import NotFoundError, ValidationError
from schemas import ActionEntry, VideoViewResponse
from services.mutation_log import action_history, comments
from store.video_store import VideoRecordStore

logger = logging.getLogger(__name__)


class VideoViewService:
    """Builds the merged metadata + stored-state view of a video."""

    def __init__(self, store: VideoRecordStore) -> None:
        self.store = store

    def get_video_view(self, video_id: Optional[str]) -> VideoViewResponse:
        """
        Build the combined view of a video.

        Args:
            video_id: YouTube video ID.

        Returns:
            VideoViewResponse whose ``title`` is the stored current title.

        Raises:
            ValidationError: If video_id is missing.
            NotFoundError: If YouTube has no video with this ID.
            ConfigurationError: If the YouTube API key is not configured.
            UpstreamError: If either metadata request fails.
        """
        if not video_id:
            raise ValidationError("Video ID is required")

        metadata = self.store.fetch_metadata(video_id)
        record = self.store.get_or_create(video_id, metadata=metadata)

        logger.debug(
            f"Video view for {video_id}: {len(record.comments or [])} comments, "
            f"{len(record.action_history or [])} history entries"
        )

        fields = metadata.to_dict()
        fields["id"] = fields.pop("video_id")
        fields.update(
            title=record.current_title,
            original_title=record.original_title,
            comments=comments(record),
            action_history=action_history(record),
        )
        return VideoViewResponse(**fields)

    def get_history(self, video_id: Optional[str]) -> list[ActionEntry]:
        """
        Return the action history of a stored video.

        Read-only: an unknown video is not fetched or created.

        Raises:
            ValidationError: If video_id is missing.
            NotFoundError: If the video has never been stored.
        """
        if not video_id:
            raise ValidationError("Video ID is required")

        record = self.store.find(video_id)
        if record is None:
            raise NotFoundError("Video not found")
        return action_history(record)
