"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache

from pydantic import Field, computed_field
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
    app_name: str = "PrepPilot"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Relational store
    database_url: str = "sqlite:///./preppilot.db"

    # Object storage (S3 / MinIO)
    s3_endpoint: str = "http://127.0.0.1:9000"
    s3_region: str = "us-east-1"
    s3_access_key: str = "minioadmin"
    s3_secret_key: str = "minioadmin"
    s3_bucket: str = "responses"
    s3_public_base_url: str = ""  # Falls back to {s3_endpoint}/{s3_bucket}
    max_upload_bytes: int = 50 * 1024 * 1024

    # Generation backend (Google Gemini)
    google_ai_api_key: str = ""
    use_generation_backend: bool = False  # Stub feedback/questions unless enabled
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    gemini_model: str = "gemini-1.5-flash"
    generation_timeout_seconds: float = 30.0

    # Interview settings
    default_question_count: int = 7

    # CORS - stored as comma-separated string in env
    cors_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def generation_backend_enabled(self) -> bool:
        """Whether calls should go to the remote generation backend."""
        return self.use_generation_backend and bool(self.google_ai_api_key)

    @property
    def public_media_base_url(self) -> str:
        """Base URL under which uploaded objects are publicly readable."""
        if self.s3_public_base_url:
            return self.s3_public_base_url.rstrip("/")
        return f"{self.s3_endpoint.rstrip('/')}/{self.s3_bucket}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
