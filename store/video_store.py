"""
Video record store.

Persistence for VideoRecord rows keyed by YouTube video ID. Owns the
get-or-create semantics: a record is created lazily, from YouTube
metadata, the first time an unknown video ID is referenced.

This is the only component that calls the metadata provider or writes
to the database.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from clients.youtube_data import MetadataProvider, VideoMetadata
from db.models.video import VideoRecord
from db.session import DatabaseClient
from errors import PersistenceError

logger = logging.getLogger(__name__)


class VideoRecordStore:
    """
    Read and write access to stored video records.

    Records returned by the store are detached from any session: callers
    mutate them in memory and hand them back to save(), which persists the
    whole record in a single commit.
    """

    def __init__(
        self,
        database: DatabaseClient,
        metadata_provider: MetadataProvider,
    ) -> None:
        """
        Initialize the video record store.

        Args:
            database: Database client the store reads from and writes to.
            metadata_provider: Source of metadata for newly seen videos.
        """
        self.database = database
        self.metadata_provider = metadata_provider

    def _get_session(self) -> Session:
        """Create a new database session."""
        return self.database.session()

    # -------------------------------------------------------------------------
    # READ METHODS
    # -------------------------------------------------------------------------

    def find(self, video_id: str) -> Optional[VideoRecord]:
        """
        Retrieve a video record by its YouTube video ID.

        Args:
            video_id: The YouTube video ID string.

        Returns:
            The VideoRecord, or None if this video has never been stored.

        Raises:
            PersistenceError: If the database query fails.
        """
        session = self._get_session()
        try:
            return (
                session.query(VideoRecord)
                .filter(VideoRecord.video_id == video_id)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error fetching video record {video_id}: {e}")
            raise PersistenceError("Error reading video record", str(e)) from e
        finally:
            session.close()

    def get_or_create(
        self,
        video_id: str,
        metadata: Optional[VideoMetadata] = None,
    ) -> VideoRecord:
        """
        Retrieve a video record, creating it from YouTube metadata if absent.

        Metadata is only fetched when the record does not exist yet and the
        caller did not already fetch it. Nothing is written unless the fetch
        succeeds, so a failed lookup never leaves a partial record behind.

        Args:
            video_id: The YouTube video ID string.
            metadata: Metadata the caller already fetched for this video.

        Returns:
            The existing or newly created VideoRecord.

        Raises:
            NotFoundError: If YouTube has no video with this ID.
            ConfigurationError: If the YouTube API key is not configured.
            UpstreamError: If the metadata request fails.
            PersistenceError: If the database read or insert fails.
        """
        record = self.find(video_id)
        if record is not None:
            return record

        if metadata is None:
            logger.info(f"Video {video_id} not stored yet, fetching metadata")
            metadata = self.metadata_provider.fetch_video(video_id)

        return self._create(video_id, metadata)

    def fetch_metadata(self, video_id: str) -> VideoMetadata:
        """
        Fetch full YouTube metadata for a video, including its channel.

        Used by the combined read, which always shows live metadata. The
        result can be passed to get_or_create() to avoid a second fetch.

        Raises:
            NotFoundError: If YouTube has no video with this ID.
            ConfigurationError: If the YouTube API key is not configured.
            UpstreamError: If either metadata request fails.
        """
        return self.metadata_provider.fetch(video_id)

    # -------------------------------------------------------------------------
    # WRITE METHODS
    # -------------------------------------------------------------------------

    def _create(self, video_id: str, metadata: VideoMetadata) -> VideoRecord:
        """Insert a new record built from metadata."""
        record = VideoRecord(
            video_id=video_id,
            original_title=metadata.title,
            current_title=metadata.title,
            channel_title=metadata.channel_title,
            view_count=metadata.view_count,
            comments=[],
            action_history=[],
        )

        session = self._get_session()
        try:
            session.add(record)
            session.commit()
            logger.info(f"Created video record for {video_id}: {metadata.title!r}")
            return record
        except IntegrityError:
            # Another request created the same video between find and insert
            session.rollback()
            logger.info(f"Video record {video_id} created concurrently, reloading")
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error creating video record {video_id}: {e}")
            raise PersistenceError("Error creating video record", str(e)) from e
        finally:
            session.close()

        existing = self.find(video_id)
        if existing is None:
            raise PersistenceError(
                "Error creating video record",
                f"Unique conflict on {video_id} but no record found",
            )
        return existing

    def save(self, record: VideoRecord) -> VideoRecord:
        """
        Persist the full current state of a record in one commit.

        Either every pending change on the record (comments, history,
        title) becomes durable, or none does.

        Args:
            record: A record previously returned by this store.

        Returns:
            The saved record, with its version incremented.

        Raises:
            PersistenceError: If the write fails, or the record was changed
                by another request since it was read.
        """
        video_id = record.video_id
        session = self._get_session()
        try:
            session.add(record)
            session.commit()
            logger.debug(f"Saved video record {video_id} at version {record.version}")
            return record
        except StaleDataError as e:
            session.rollback()
            logger.warning(f"Concurrent update on video record {video_id}: {e}")
            raise PersistenceError(
                "Video record was modified by another request", str(e)
            ) from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error saving video record {video_id}: {e}")
            raise PersistenceError("Error saving video record", str(e)) from e
        finally:
            session.close()
