"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="vivamente", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment name"
    )

    # API Server
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=8000, description="API port")
    api_reload: bool = Field(default=True, description="Enable auto-reload")

    # Storage
    storage_backend: Literal["json", "memory"] = Field(
        default="json",
        description="Persistence backend for posts, communities and profiles",
    )
    data_dir: str = Field(default="data", description="Directory for JSON data files")
    posts_file: str = Field(default="posts.json", description="Posts data file name")
    communities_file: str = Field(
        default="communities.json", description="Communities data file name"
    )
    profiles_file: str = Field(
        default="profiles.json", description="User profiles data file name"
    )
    seed_demo_data: bool = Field(
        default=True, description="Seed demo posts/communities when storage is empty"
    )

    # Feed
    general_community_id: str = Field(
        default="general", description="Community visible to every viewer"
    )
    general_community_label: str = Field(
        default="Geral", description="Display name of the general community"
    )
    notification_inbox_size: int = Field(
        default=50, description="Max notifications kept in the in-memory inbox"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="DEBUG", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log format"
    )
    log_include_caller_info: bool = Field(
        default=True, description="Include caller info"
    )
    log_to_file: bool = Field(default=False, description="Also write JSON log files")
    log_dir: str = Field(default="logs", description="Directory for log files")
    log_file_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Max size per log file (10MB default)"
    )
    log_file_backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )
    log_content_max_length: int = Field(
        default=80, description="Truncate post/comment text in logs to this length"
    )
    log_requests: bool = Field(
        default=True, description="Log HTTP request start/finish"
    )
    log_exclude_paths: list[str] = Field(
        default=["/health", "/health/live", "/health/ready"],
        description="Paths to exclude from request logging",
    )

    # CORS
    cors_origins: list[str] = Field(default=["*"], description="CORS origins")
    cors_allow_methods: list[str] = Field(default=["*"], description="Allowed methods")
    cors_allow_headers: list[str] = Field(default=["*"], description="Allowed headers")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def posts_path(self) -> Path:
        """Full path of the posts data file."""
        return Path(self.data_dir) / self.posts_file

    @property
    def communities_path(self) -> Path:
        """Full path of the communities data file."""
        return Path(self.data_dir) / self.communities_file

    @property
    def profiles_path(self) -> Path:
        """Full path of the profiles data file."""
        return Path(self.data_dir) / self.profiles_file


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
