"""
YouTube Data API Client.

Fetches public video and channel metadata with an API key. Used to
snapshot a video's title and channel when its record is first created,
and to serve the combined metadata read.
"""

import logging
import threading
from dataclasses import asdict, dataclass, field
from typing import Any, Optional, Protocol

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from errors import ConfigurationError, NotFoundError, UpstreamError

logger = logging.getLogger(__name__)


class MetadataProvider(Protocol):
    """Source of video metadata for the record store and the combined read."""

    def fetch_video(self, video_id: str) -> "VideoMetadata": ...

    def fetch(self, video_id: str) -> "VideoMetadata": ...


@dataclass
class VideoMetadata:
    """Public metadata of one YouTube video, flattened from the API response."""

    video_id: str
    title: str
    description: Optional[str] = None
    published_at: Optional[str] = None
    thumbnails: dict[str, Any] = field(default_factory=dict)
    channel_id: Optional[str] = None
    channel_title: Optional[str] = None
    channel_thumbnail: Optional[str] = None
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    duration: Optional[str] = None
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_video_item(cls, item: dict[str, Any]) -> "VideoMetadata":
        """Build metadata from one item of a videos.list response."""
        snippet = item.get("snippet", {})
        statistics = item.get("statistics", {})
        content_details = item.get("contentDetails", {})
        return cls(
            video_id=item["id"],
            title=snippet.get("title", ""),
            description=snippet.get("description"),
            published_at=snippet.get("publishedAt"),
            thumbnails=snippet.get("thumbnails", {}),
            channel_id=snippet.get("channelId"),
            channel_title=snippet.get("channelTitle"),
            view_count=_to_int(statistics.get("viewCount")),
            like_count=_to_int(statistics.get("likeCount")),
            comment_count=_to_int(statistics.get("commentCount")),
            duration=content_details.get("duration"),
            tags=snippet.get("tags", []),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _to_int(value: Any) -> int:
    """Parse a statistics counter. The API returns counts as strings."""
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _http_error_message(error: HttpError) -> str:
    """Extract the API's own error message from an HttpError."""
    return getattr(error, "reason", None) or str(error)


class YouTubeMetadataProvider:
    """
    YouTube Data API v3 client using an API key.

    The API service is built lazily on first request and reused. A missing
    API key is reported when a lookup is attempted, not at construction,
    so the application can start without one.
    """

    API_SERVICE_NAME = "youtube"
    API_VERSION = "v3"

    VIDEO_PARTS = "snippet,statistics,contentDetails"
    CHANNEL_PARTS = "snippet"

    def __init__(self, api_key: Optional[str] = None) -> None:
        """
        Initialize the YouTube Data API client.

        Args:
            api_key: YouTube Data API key (YOUTUBE_API_KEY).
        """
        self.api_key = api_key
        # httplib2.Http is not thread-safe; each thread builds its own service
        self._local = threading.local()

    def _get_service(self) -> Any:
        """
        Get or create the YouTube Data API service for the calling thread.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not self.api_key:
            raise ConfigurationError(
                "YouTube API key is not configured",
                "YOUTUBE_API_KEY environment variable is required",
            )
        service = getattr(self._local, "service", None)
        if service is None:
            service = build(
                self.API_SERVICE_NAME,
                self.API_VERSION,
                developerKey=self.api_key,
                cache_discovery=False
            )
            self._local.service = service
            logger.debug(
                f"YouTube Data API service built for thread {threading.current_thread().name}")
        return service

    def _execute(self, request: Any, resource: str) -> dict[str, Any]:
        """Execute an API request, mapping failures onto service errors."""
        try:
            return request.execute()
        except HttpError as e:
            if e.resp.status == 404:
                raise NotFoundError(
                    f"{resource.capitalize()} not found on YouTube",
                    _http_error_message(e),
                ) from e
            logger.error(f"YouTube Data API error on {resource} lookup: {e}")
            raise UpstreamError(
                "Error fetching YouTube data", _http_error_message(e)
            ) from e
        except Exception as e:
            logger.error(f"YouTube Data API request failed on {resource} lookup: {e}")
            raise UpstreamError("Error fetching YouTube data", str(e)) from e

    def fetch_video(self, video_id: str) -> VideoMetadata:
        """
        Fetch metadata for a single video.

        Args:
            video_id: YouTube video ID (e.g., dQw4w9WgXcQ).

        Returns:
            VideoMetadata without the channel thumbnail.

        Raises:
            NotFoundError: If YouTube has no video with this ID.
            ConfigurationError: If no API key is configured.
            UpstreamError: If the API request fails.
        """
        service = self._get_service()
        logger.info(f"Calling YouTube Data API: videos.list id={video_id}")

        response = self._execute(
            service.videos().list(part=self.VIDEO_PARTS, id=video_id),
            "video",
        )
        items = response.get("items", [])
        if not items:
            raise NotFoundError("Video not found on YouTube")

        return VideoMetadata.from_video_item(items[0])

    def fetch_channel(self, channel_id: str) -> dict[str, Any]:
        """
        Fetch the snippet of a channel.

        A missing channel is an upstream failure: it is only ever looked
        up by the channel ID YouTube itself returned for a video.

        Raises:
            UpstreamError: If the channel is missing or the request fails.
        """
        service = self._get_service()
        logger.info(f"Calling YouTube Data API: channels.list id={channel_id}")

        try:
            response = self._execute(
                service.channels().list(part=self.CHANNEL_PARTS, id=channel_id),
                "channel",
            )
        except NotFoundError as e:
            raise UpstreamError("Channel not found on YouTube", e.detail) from e

        items = response.get("items", [])
        if not items:
            raise UpstreamError(
                "Channel not found on YouTube",
                f"No channel with id {channel_id}",
            )
        return items[0].get("snippet", {})

    def fetch(self, video_id: str) -> VideoMetadata:
        """
        Fetch full metadata for a video, including the channel thumbnail.

        Two-step lookup: the video first, then its channel by the channel
        ID from the video snippet.

        Raises:
            NotFoundError: If YouTube has no video with this ID.
            ConfigurationError: If no API key is configured.
            UpstreamError: If either request fails or the channel is missing.
        """
        metadata = self.fetch_video(video_id)
        if not metadata.channel_id:
            raise UpstreamError(
                "Error fetching YouTube data",
                f"Video {video_id} has no channel ID",
            )

        channel_snippet = self.fetch_channel(metadata.channel_id)
        thumbnails = channel_snippet.get("thumbnails", {})
        metadata.channel_thumbnail = thumbnails.get("default", {}).get("url")

        logger.debug(
            f"YouTube metadata fetched: video={video_id}, "
            f"channel={metadata.channel_id}, views={metadata.view_count}"
        )
        return metadata
