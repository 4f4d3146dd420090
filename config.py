"""Configuration management for the TinyURL service."""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=9200,
        description="Port to listen on"
    )

    # Shortener settings
    base_url: str = Field(
        default="http://localhost:9200",
        description="Fallback base URL for short URLs when the request does not provide one"
    )

    short_code_length: int = Field(
        default=8,
        ge=1,
        description="Length of generated short codes"
    )

    max_generation_attempts: int = Field(
        default=20,
        ge=1,
        description="Maximum attempts to find a free generated short code"
    )

    enable_custom_codes: bool = Field(
        default=True,
        description="Allow users to provide custom short codes"
    )

    # Client identity settings
    client_id_header: str = Field(
        default="X-Client-Id",
        description="Request header carrying the anonymous owner id"
    )

    max_client_id_length: int = Field(
        default=64,
        ge=1,
        description="Maximum length of the owner id header value"
    )

    # CORS settings
    cors_origins: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Origins allowed to call the API from a browser"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
