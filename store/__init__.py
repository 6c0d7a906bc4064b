"""
Store module initialization.

Provides persistent storage for video records.
"""

from store.video_store import VideoRecordStore

__all__ = ["VideoRecordStore"]
