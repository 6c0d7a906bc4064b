#!/usr/bin/env python3
"""
Database initialization script.

Creates all tables for development. Production databases are migrated
with Alembic instead.
"""

import sys
import os

# Add the parent directory to the path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import config
from db.session import DatabaseClient
from errors import ConfigurationError


def main():
    """Initialize the database with all tables."""
    print("=" * 50)
    print("Database Initialization")
    print("=" * 50)

    database = DatabaseClient(config.database.url, echo=config.database.echo)
    try:
        print("Creating database tables...")
        database.create_all()
        print("=" * 50)
        print("✓ Database initialized successfully!")
        print("=" * 50)
    except ConfigurationError as e:
        print(f"✗ {e.message}: {e.detail}")
        sys.exit(1)
    except Exception as e:
        print(f"✗ Database initialization failed: {e}")
        sys.exit(1)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
