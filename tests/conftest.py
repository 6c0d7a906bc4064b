"""
Shared pytest fixtures for the video annotation test suite.

Provides reusable fixtures for:
- An in-memory SQLite database client
- A fake metadata provider that counts YouTube lookups
- The video record store and services
- A TestClient over a fully wired application
"""

import pytest
from fastapi.testclient import TestClient

from clients.youtube_data import VideoMetadata
from db.session import DatabaseClient
from errors import NotFoundError
from server import create_app
from services import CommentService, TitleService, VideoViewService
from store.video_store import VideoRecordStore


# =============================================================================
# Metadata Provider Fixtures
# =============================================================================

KNOWN_VIDEOS = {
    "vid1": VideoMetadata(
        video_id="vid1",
        title="Mihir ki masti #play",
        description="Weekend fun",
        published_at="2025-02-10T08:00:00Z",
        thumbnails={"default": {"url": "https://i.ytimg.com/vi/vid1/default.jpg"}},
        channel_id="UC_test_channel",
        channel_title="Aarti Kanojia",
        view_count=1802,
        like_count=45,
        comment_count=3,
        duration="PT58S",
        tags=["family", "vlog"],
    ),
    "vid2": VideoMetadata(
        video_id="vid2",
        title="Valentine Day Vlog",
        channel_id="UC_test_channel",
        channel_title="Aarti Kanojia",
        view_count=950,
    ),
}


class FakeMetadataProvider:
    """In-memory stand-in for YouTubeMetadataProvider."""

    CHANNEL_THUMBNAIL = "https://yt3.ggpht.com/test-channel.jpg"

    def __init__(self, videos=None):
        self.videos = dict(KNOWN_VIDEOS if videos is None else videos)
        self.video_calls: list[str] = []
        self.full_calls: list[str] = []
        self.error = None

    def _lookup(self, video_id: str) -> VideoMetadata:
        if self.error is not None:
            raise self.error
        if video_id not in self.videos:
            raise NotFoundError("Video not found on YouTube")
        known = self.videos[video_id]
        return VideoMetadata(**known.to_dict())

    def fetch_video(self, video_id: str) -> VideoMetadata:
        self.video_calls.append(video_id)
        return self._lookup(video_id)

    def fetch(self, video_id: str) -> VideoMetadata:
        self.full_calls.append(video_id)
        metadata = self._lookup(video_id)
        metadata.channel_thumbnail = self.CHANNEL_THUMBNAIL
        return metadata


@pytest.fixture
def metadata_provider():
    """Fake provider knowing vid1 and vid2."""
    return FakeMetadataProvider()


# =============================================================================
# Database / Store Fixtures
# =============================================================================

@pytest.fixture
def database():
    """Fresh in-memory SQLite database with all tables created."""
    client = DatabaseClient("sqlite://")
    client.create_all()
    yield client
    client.dispose()


@pytest.fixture
def store(database, metadata_provider):
    return VideoRecordStore(database, metadata_provider)


@pytest.fixture
def comment_service(store):
    return CommentService(store, default_username="Anonymous")


@pytest.fixture
def title_service(store):
    return TitleService(store, default_username="Anonymous")


@pytest.fixture
def video_view_service(store):
    return VideoViewService(store)


# =============================================================================
# HTTP Fixtures
# =============================================================================

@pytest.fixture
def app(database, metadata_provider):
    return create_app(database=database, metadata_provider=metadata_provider)


@pytest.fixture
def client(app):
    """Synchronous test client over the wired application."""
    return TestClient(app)
