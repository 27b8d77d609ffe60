"""
Configuration management.
Simple .env based config; every value can be overridden from the environment.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Security
    session_secret: str = "change-me-in-production-use-random-string"
    admin_password_hash: str = ""  # passlib pbkdf2_sha256 hash

    # Database
    database_path: str = "./data/catalog.db"
    table_prefix: str = ""  # prepended to every catalog table name

    # Batch updates
    max_batch_size: int = 100
    timezone: str = "UTC"  # used for supplier cost "updated at" stamps

    # Logging
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
