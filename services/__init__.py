"""
Services module initialization.

Provides the comment, title and combined-read operations on video records.
"""

from services.comment_service import CommentService, CommentAdded, CommentDeleted
from services.title_service import TitleService, TitleUpdated
from services.video_view import VideoViewService

__all__ = [
    "CommentService",
    "CommentAdded",
    "CommentDeleted",
    "TitleService",
    "TitleUpdated",
    "VideoViewService",
]
