from functools import lru_cache
from typing import List, Optional
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "TW Angpao Adaptor"
    DEBUG: bool = False

    # CORS settings, comma separated
    BACKEND_CORS_ORIGINS: str = "*"

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    # Upstream redemption endpoint
    UPSTREAM_BASE_URL: str = "https://gift.truemoney.com"
    REQUEST_TIMEOUT: float = 10.0  # seconds

    # Cache settings (seconds)
    SUCCESS_CACHE_TTL: int = 60 * 60 * 24
    ERROR_CACHE_TTL: int = 60 * 5
    CACHE_MAX_ENTRIES: Optional[int] = None

    @field_validator("UPSTREAM_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended safely."""
        return v.rstrip("/")

    @field_validator("REQUEST_TIMEOUT", "SUCCESS_CACHE_TTL", "ERROR_CACHE_TTL")
    @classmethod
    def must_be_positive(cls, v):
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from the comma separated setting."""
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching for efficiency.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
