"""
SQLAlchemy models for the video annotation service.

Models:
- VideoRecord: Edited title, comments and action history of one video
"""

from db.models.video import VideoRecord

__all__ = ["VideoRecord"]
