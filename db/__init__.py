"""
Database package for the video annotation service.

Provides the SQLAlchemy base, the video record model, and the database client.
"""

from db.base import Base
from db.session import DatabaseClient

__all__ = ["Base", "DatabaseClient"]
