"""
Database client for the video record store.

Wraps the SQLAlchemy engine and session factory behind an explicitly
constructed object that is handed to the store at startup. Connecting
is lazy and idempotent: the engine is created on first use and reused.
"""

import logging
import threading
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from db.base import Base
from errors import ConfigurationError

logger = logging.getLogger(__name__)


class DatabaseClient:
    """
    Owns one SQLAlchemy engine and its session factory.

    Usage:
        database = DatabaseClient(config.database.url)
        database.create_all()
        with database.session() as session:
            ...
    """

    def __init__(self, url: Optional[str], echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> Engine:
        """
        Create the engine on first call and return it on every call.

        Safe to call from several threads at once: only one engine is ever
        created per client.

        Raises:
            ConfigurationError: If no connection URL was configured.
        """
        if self._engine is not None:
            return self._engine

        if not self.url:
            raise ConfigurationError(
                "Database is not configured",
                "POSTGRES_URL or DATABASE_URL environment variable is required",
            )

        with self._lock:
            # Another thread may have connected while this one waited
            if self._engine is not None:
                return self._engine

            kwargs = {"echo": self.echo, "pool_pre_ping": True}
            if self.url.startswith("sqlite"):
                kwargs["connect_args"] = {"check_same_thread": False}
                # In-memory databases live per connection; share one across threads
                if self.url in ("sqlite://", "sqlite:///:memory:"):
                    kwargs["poolclass"] = StaticPool

            engine = create_engine(self.url, **kwargs)
            # Detached records stay readable after the session closes
            self._session_factory = sessionmaker(
                bind=engine,
                autoflush=False,
                expire_on_commit=False,
            )
            self._engine = engine

        logger.info(f"Database engine created for {engine.url.render_as_string(hide_password=True)}")
        return engine

    def session(self) -> Session:
        """Create a new database session, connecting first if needed."""
        self.connect()
        return self._session_factory()

    def create_all(self) -> None:
        """Create all tables registered on Base.metadata."""
        # Register models with Base.metadata
        import db.models  # noqa: F401

        Base.metadata.create_all(bind=self.connect())
        logger.info("Database tables created")

    def dispose(self) -> None:
        """Release pooled connections. The client can reconnect afterwards."""
        with self._lock:
            engine, self._engine = self._engine, None
            self._session_factory = None
        if engine is not None:
            engine.dispose()
            logger.info("Database engine disposed")
