"""
Configuration settings for the FAQ generator service.
Loads environment variables and provides application-wide settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    APP_NAME: str = "Smart FAQ Generator"
    VERSION: str = "1.0.0"

    # Database Configuration (any SQLAlchemy async URL; PostgreSQL via asyncpg works too)
    DATABASE_URL: str = "sqlite+aiosqlite:///./faqgen.db"

    # Upload Configuration
    UPLOAD_DIR: str = "./uploads"
    MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10 MB
    SUPPORTED_FILE_TYPES: List[str] = [".pdf", ".docx"]

    # Generation Configuration
    MIN_TEXT_LENGTH: int = 50  # characters, after trimming
    MAX_FAQS: int = 10
    CONTENT_PREVIEW_LENGTH: int = 200

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into a list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


# Global settings instance
settings = Settings()
