"""
Unit tests for the YouTube Data API client.

The googleapiclient service is replaced with a MagicMock; no network
calls are made.
"""

import threading
from unittest.mock import MagicMock, patch

import pytest

from googleapiclient.errors import HttpError

from clients.youtube_data import VideoMetadata, YouTubeMetadataProvider
from errors import ConfigurationError, NotFoundError, UpstreamError


# =============================================================================
# Fixtures
# =============================================================================

VIDEO_ITEM = {
    "id": "37wyGQMw9Q4",
    "snippet": {
        "title": "Mihir ki masti #play",
        "description": "Weekend fun",
        "publishedAt": "2025-02-10T08:00:00Z",
        "thumbnails": {"default": {"url": "https://i.ytimg.com/vi/37wyGQMw9Q4/default.jpg"}},
        "channelId": "UC_test_channel",
        "channelTitle": "Aarti Kanojia",
        "tags": ["family"],
    },
    "statistics": {"viewCount": "1802", "likeCount": "45", "commentCount": "3"},
    "contentDetails": {"duration": "PT58S"},
}

CHANNEL_ITEM = {
    "id": "UC_test_channel",
    "snippet": {
        "title": "Aarti Kanojia",
        "thumbnails": {"default": {"url": "https://yt3.ggpht.com/channel.jpg"}},
    },
}


def _http_error(status: int, message: str) -> HttpError:
    content = ('{"error": {"message": "%s"}}' % message).encode("utf-8")
    return HttpError(resp=MagicMock(status=status, reason=message), content=content)


@pytest.fixture
def service():
    """Mock YouTube Data API service returning one video and its channel."""
    mock = MagicMock()
    mock.videos.return_value.list.return_value.execute.return_value = {"items": [VIDEO_ITEM]}
    mock.channels.return_value.list.return_value.execute.return_value = {"items": [CHANNEL_ITEM]}
    return mock


@pytest.fixture
def provider(service):
    with patch("clients.youtube_data.build", return_value=service) as mock_build:
        yield YouTubeMetadataProvider(api_key="test-key")
        assert mock_build.call_count <= 1


# =============================================================================
# Metadata parsing
# =============================================================================

class TestVideoMetadata:

    def test_from_video_item_parses_counts(self):
        metadata = VideoMetadata.from_video_item(VIDEO_ITEM)

        assert metadata.video_id == "37wyGQMw9Q4"
        assert metadata.title == "Mihir ki masti #play"
        assert metadata.view_count == 1802
        assert metadata.like_count == 45
        assert metadata.comment_count == 3
        assert metadata.duration == "PT58S"
        assert metadata.tags == ["family"]

    def test_missing_statistics_default_to_zero(self):
        metadata = VideoMetadata.from_video_item(
            {"id": "x", "snippet": {"title": "t"}})

        assert metadata.view_count == 0
        assert metadata.like_count == 0
        assert metadata.tags == []


# =============================================================================
# Lookups
# =============================================================================

class TestFetchVideo:

    def test_fetch_video_requests_all_parts(self, provider, service):
        metadata = provider.fetch_video("37wyGQMw9Q4")

        service.videos.return_value.list.assert_called_with(
            part="snippet,statistics,contentDetails", id="37wyGQMw9Q4")
        assert metadata.title == "Mihir ki masti #play"
        assert metadata.channel_thumbnail is None
        service.channels.assert_not_called()

    def test_empty_items_raises_not_found(self, provider, service):
        service.videos.return_value.list.return_value.execute.return_value = {"items": []}

        with pytest.raises(NotFoundError, match="Video not found on YouTube"):
            provider.fetch_video("missing")

    def test_http_404_raises_not_found(self, provider, service):
        service.videos.return_value.list.return_value.execute.side_effect = (
            _http_error(404, "Not Found"))

        with pytest.raises(NotFoundError):
            provider.fetch_video("missing")

    def test_http_error_raises_upstream_error(self, provider, service):
        service.videos.return_value.list.return_value.execute.side_effect = (
            _http_error(403, "quotaExceeded"))

        with pytest.raises(UpstreamError) as exc_info:
            provider.fetch_video("37wyGQMw9Q4")
        assert exc_info.value.detail == "quotaExceeded"

    def test_transport_error_raises_upstream_error(self, provider, service):
        service.videos.return_value.list.return_value.execute.side_effect = (
            TimeoutError("timed out"))

        with pytest.raises(UpstreamError):
            provider.fetch_video("37wyGQMw9Q4")


class TestFetch:

    def test_fetch_adds_channel_thumbnail(self, provider, service):
        metadata = provider.fetch("37wyGQMw9Q4")

        service.channels.return_value.list.assert_called_with(
            part="snippet", id="UC_test_channel")
        assert metadata.channel_thumbnail == "https://yt3.ggpht.com/channel.jpg"

    def test_missing_channel_is_fatal(self, provider, service):
        service.channels.return_value.list.return_value.execute.return_value = {"items": []}

        with pytest.raises(UpstreamError, match="Channel not found"):
            provider.fetch("37wyGQMw9Q4")

    def test_channel_404_is_upstream_error(self, provider, service):
        service.channels.return_value.list.return_value.execute.side_effect = (
            _http_error(404, "Not Found"))

        with pytest.raises(UpstreamError):
            provider.fetch("37wyGQMw9Q4")


class TestConfiguration:

    def test_missing_api_key_raises_configuration_error(self):
        provider = YouTubeMetadataProvider(api_key=None)

        with patch("clients.youtube_data.build") as mock_build:
            with pytest.raises(ConfigurationError):
                provider.fetch_video("37wyGQMw9Q4")
            mock_build.assert_not_called()

    def test_service_is_built_once(self, service):
        with patch("clients.youtube_data.build", return_value=service) as mock_build:
            provider = YouTubeMetadataProvider(api_key="test-key")
            provider.fetch_video("37wyGQMw9Q4")
            provider.fetch("37wyGQMw9Q4")

        mock_build.assert_called_once_with(
            "youtube", "v3", developerKey="test-key", cache_discovery=False)

    def test_each_thread_gets_its_own_service(self):
        with patch("clients.youtube_data.build", side_effect=lambda *a, **kw: MagicMock()) as mock_build:
            provider = YouTubeMetadataProvider(api_key="test-key")
            main_service = provider._get_service()
            assert provider._get_service() is main_service

            services = []
            worker = threading.Thread(target=lambda: services.append(provider._get_service()))
            worker.start()
            worker.join()

        assert mock_build.call_count == 2
        assert services[0] is not main_service
