import uuid
from typing import Any

from sqlalchemy import JSON, BigInteger, Integer, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
DocumentList = JSON().with_variant(JSONB(), "postgresql")


class VideoRecord(Base, TimestampMixin):
    """Stored state of one YouTube video.

    Holds the title as edited by visitors, the visitor comments and the
    append-only action history. Comments and history entries are nested
    JSON documents, each with its own server-assigned id and timestamp.

    The metadata snapshot (original title, channel title, view count) is
    taken once, when the record is lazily created from the YouTube API.

    ``version`` is SQLAlchemy's version counter: an UPDATE based on a
    stale read matches no row and raises StaleDataError.
    """

    __tablename__ = "video_records"
    __repr_columns__ = ("id", "video_id", "current_title", "version")

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4)
    video_id: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True)
    original_title: Mapped[str] = mapped_column(Text, nullable=False)
    current_title: Mapped[str] = mapped_column(Text, nullable=False)
    channel_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    view_count: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    comments: Mapped[list[dict[str, Any]]] = mapped_column(
        DocumentList, nullable=False, default=list)
    action_history: Mapped[list[dict[str, Any]]] = mapped_column(
        DocumentList, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version, "eager_defaults": True}
