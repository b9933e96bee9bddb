"""Pulumi Importer centralized configuration management.

Uses pydantic-settings to load configuration from environment variables
and .env files with validation.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Pulumi Importer application settings.

    All settings can be overridden via environment variables
    prefixed with PULUMI_IMPORTER_.

    Example:
        PULUMI_IMPORTER_API_PORT=8080
        PULUMI_IMPORTER_AZURE_SUBSCRIPTION_ID=00000000-0000-0000-0000-000000000000
    """

    # API Server
    api_host: str = Field(default="127.0.0.1", description="API server bind address")
    api_port: int = Field(default=5000, description="API server port")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:8080,http://127.0.0.1:8080",
        description="Allowed CORS origins, comma-separated"
    )

    # AWS Resource Explorer
    search_page_size: int = Field(
        default=1000,
        ge=1,
        le=1000,
        description="MaxResults sent with every Resource Explorer search page"
    )

    # Azure
    azure_subscription_id: Optional[str] = Field(
        default=None,
        description="Subscription to use instead of the credential's default subscription"
    )

    # Pulumi CLI
    pulumi_config_passphrase: str = Field(
        default="whatever",
        description="Passphrase for the throwaway preview stacks"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    class Config:
        env_prefix = "PULUMI_IMPORTER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def get_cors_origins(self) -> List[str]:
        """Get CORS origins from the comma-separated setting."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance loaded from environment
    """
    return Settings()
