"""Configuration settings for the BizMap client."""
from pydantic_settings import BaseSettings
from typing import Optional

from bizmap import __version__


class Settings(BaseSettings):
    """Client settings loaded from environment variables (prefix ``BIZMAP_``)."""

    # BizMap backend
    base_url: str = "http://localhost:8080/api/v1/"
    request_timeout: float = 30.0  # connect/read/write, seconds
    user_agent: str = f"bizmap-python/{__version__}"

    # Logging
    log_http_bodies: bool = False
    log_level: str = "INFO"

    # Token preloaded by the command line front end
    auth_token: Optional[str] = None

    class Config:
        env_prefix = "BIZMAP_"
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
