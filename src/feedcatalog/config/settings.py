"""Configuration management using pydantic-settings.

Supports environment variables and .env file loading.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration.

    Every field can be overridden by an environment variable of the same name.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "feedcatalog"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False  # Set True in production for structured logs

    # Database
    db_type: str = Field(
        default="sqlite",
        description="Backing store type: sqlite or memory",
    )
    db_path: Path = Field(
        default=Path("data/feedcatalog.db"),
        description="SQLite database path (used when db_type=sqlite)",
    )

    # Feed list
    include_default_feeds: bool = Field(
        default=True,
        description="List the built-in default catalog before user-added feeds",
    )
    feed_list_serialize_adds: bool = Field(
        default=False,
        description="Run feed registrations one at a time behind a store-wide lock",
    )

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000


# Global singleton instance
settings = Settings()
