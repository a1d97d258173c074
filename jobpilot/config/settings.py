# =============================================================================
# Application Settings
# =============================================================================
"""
Pydantic Settings configuration for the JobPilot extraction service.

Loads configuration from environment variables with validation and type safety.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    The .env file is automatically loaded if present.

    Attributes:
        app_name: Name of the application.
        app_env: Current environment (development, staging, production).
        debug: Enable debug mode for verbose logging.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        api_host: Host address for the API server.
        api_port: Port number for the API server.
        cors_origins: Comma-separated list of allowed CORS origins.
        fetch_user_agent: Browser-like user agent for listing fetches.
        direct_fetch_timeout: Timeout of the direct listing fetch.
        proxy_fetch_timeout: Timeout of the readability proxy fetch.
        max_response_bytes: Size cap of listing responses.
        min_direct_html_length: Direct bodies must be longer than this.
        readability_proxy_url: Base URL of the readability proxy.
        description_fetch_timeout: Timeout of the description fetch.
        description_max_response_bytes: Size cap of description responses.
        structured_description_min_length: Labeled descriptions longer
            than this override generic extraction.
        review_threshold: Confidence below which results need review.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="jobpilot",
        description="Name of the application"
    )
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    # -------------------------------------------------------------------------
    # API Settings
    # -------------------------------------------------------------------------
    api_host: str = Field(
        default="0.0.0.0",
        description="Host address for the API server"
    )
    api_port: int = Field(
        default=8000,
        description="Port number for the API server"
    )
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Fetcher Settings
    # -------------------------------------------------------------------------
    fetch_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        description="User agent sent with listing fetches"
    )
    direct_fetch_timeout: float = Field(
        default=20.0,
        gt=0,
        description="Direct listing fetch timeout in seconds"
    )
    proxy_fetch_timeout: float = Field(
        default=25.0,
        gt=0,
        description="Readability proxy fetch timeout in seconds"
    )
    max_response_bytes: int = Field(
        default=3 * 1024 * 1024,
        gt=0,
        description="Maximum accepted listing response size in bytes"
    )
    min_direct_html_length: int = Field(
        default=1000,
        ge=0,
        description="Direct bodies at or below this length use the proxy"
    )
    readability_proxy_url: str = Field(
        default="https://r.jina.ai/",
        description="Base URL of the readability proxy"
    )
    description_fetch_timeout: float = Field(
        default=15.0,
        gt=0,
        description="Description fetch timeout in seconds"
    )
    description_max_response_bytes: int = Field(
        default=2 * 1024 * 1024,
        gt=0,
        description="Maximum accepted description response size in bytes"
    )

    # -------------------------------------------------------------------------
    # Extraction Settings
    # -------------------------------------------------------------------------
    structured_description_min_length: int = Field(
        default=150,
        ge=0,
        description="Labeled descriptions longer than this override generic extraction"
    )
    review_threshold: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Confidence below which extracted fields need review"
    )

    # -------------------------------------------------------------------------
    # Model Configuration
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS origins string into a list.

        Returns:
            List of allowed origin strings.
        """
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("readability_proxy_url")
    @classmethod
    def validate_proxy_url(cls, v: str) -> str:
        """
        Validate that the proxy URL is an http(s) URL.

        Args:
            v: The proxy base URL.

        Returns:
            The validated URL.

        Raises:
            ValueError: If the URL has no http(s) scheme.
        """
        if not v.startswith(("http://", "https://")):
            raise ValueError("readability_proxy_url must start with http:// or https://")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings instance with loaded configuration.
    """
    return Settings()
