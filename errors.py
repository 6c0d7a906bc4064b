"""
Error taxonomy for the video annotation service.

Each error carries the HTTP status the request boundary maps it to.
Services raise these; server.py turns them into structured responses.
"""

from typing import Optional


class VideoServiceError(Exception):
    """Base class for all service errors."""

    status_code: int = 500

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(VideoServiceError):
    """A required input is missing or empty."""

    status_code = 400


class NotFoundError(VideoServiceError):
    """Unknown video, unknown comment, or video absent from YouTube."""

    status_code = 404


class ConfigurationError(VideoServiceError):
    """Missing credential or connection string. A server-side fault."""

    status_code = 500


class UpstreamError(VideoServiceError):
    """The metadata provider failed unexpectedly."""

    status_code = 500


class PersistenceError(VideoServiceError):
    """The record store failed to read or write."""

    status_code = 500
