"""
YouTube API Clients.

Provides API-key access to public YouTube video and channel metadata.
"""

from .youtube_data import MetadataProvider, VideoMetadata, YouTubeMetadataProvider

__all__ = ["MetadataProvider", "VideoMetadata", "YouTubeMetadataProvider"]
