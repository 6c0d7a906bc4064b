"""
Centralized configuration for the video annotation service.

Loads all environment variables and provides typed configuration objects.
No hardcoded secrets - the database URL and YouTube API key must come from
the environment.
"""

import os
from typing import Optional
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class DatabaseConfig:
    """Database connection configuration for the video record store."""

    # POSTGRES_URL (Docker) takes precedence over DATABASE_URL (local dev)
    database_url: Optional[str] = field(
        default_factory=lambda: os.getenv("POSTGRES_URL") or os.getenv("DATABASE_URL"))
    echo: bool = field(default_factory=lambda: os.getenv(
        "DB_ECHO", "false").lower() == "true")
    auto_create: bool = field(default_factory=lambda: os.getenv(
        "DB_AUTO_CREATE", "false").lower() == "true")

    @property
    def url(self) -> Optional[str]:
        """
        Return the SQLAlchemy connection URL, or None when unset.

        Normalizes the legacy postgres:// scheme to postgresql://.
        """
        if not self.database_url:
            return None
        if self.database_url.startswith("postgres://"):
            return self.database_url.replace("postgres://", "postgresql://", 1)
        return self.database_url


@dataclass
class YouTubeConfig:
    """YouTube Data API configuration for video metadata lookups."""

    api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("YOUTUBE_API_KEY"))


@dataclass
class ServerConfig:
    """Server runtime configuration."""

    host: str = field(default_factory=lambda: os.getenv(
        "SERVER_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(
        os.getenv("SERVER_PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv(
        "DEBUG", "false").lower() == "true")
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    cors_origins: list[str] = field(
        default_factory=lambda: os.getenv("CORS_ORIGINS", "*").split(",")
    )


@dataclass
class AppConfig:
    """Application behaviour settings."""

    # Shown for comments and history entries posted without a username
    default_username: str = field(
        default_factory=lambda: os.getenv("DEFAULT_USERNAME", "Anonymous"))


@dataclass
class Config:
    """
    Root configuration object aggregating all config sections.

    Usage:
        config = Config()
        database_url = config.database.url
        api_key = config.youtube.api_key
    """

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    youtube: YouTubeConfig = field(default_factory=YouTubeConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    app: AppConfig = field(default_factory=AppConfig)

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of warnings.

        Returns:
            List of validation messages (empty if all valid)
        """
        warnings = []

        if not self.database.url:
            warnings.append(
                "POSTGRES_URL or DATABASE_URL not set - video records cannot be stored")

        if not self.youtube.api_key:
            warnings.append(
                "YOUTUBE_API_KEY not set - metadata lookups for new videos will fail")

        return warnings


# Global config instance - import and use this
config = Config()
