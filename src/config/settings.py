"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Storage and LLM credentials are optional: search degrades instead of
    failing when they are missing.

        - SUPABASE_URL / SUPABASE_SERVICE_KEY: listings storage. Empty means
          candidate fetching returns nothing.
        - OPENAI_API_KEY: remote term extraction. Empty means every query is
          interpreted by the local extractor.
        - ENVIRONMENT: Environment name (development, staging, production)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=4, description="Number of uvicorn workers")

    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Supabase (listings storage)
    # ==========================================================================
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_service_key: str = Field(default="", description="Supabase service role key")
    listings_table: str = Field(default="listings", description="Table holding marketplace listings")

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    # ==========================================================================
    # OpenAI (remote term extraction)
    # ==========================================================================
    openai_api_key: str = Field(default="", description="OpenAI API key for term extraction")
    term_extractor_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI chat model used to extract search terms"
    )
    term_extractor_enabled: bool = Field(
        default=True,
        description="Enable remote term extraction (local extractor is used when disabled or failing)"
    )
    term_extractor_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for the term extraction call (seconds)"
    )
    term_extractor_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for term extraction"
    )
    term_extractor_max_tokens: int = Field(
        default=500,
        ge=1,
        description="Response size cap for term extraction"
    )

    # ==========================================================================
    # Search
    # ==========================================================================
    search_default_limit: int = Field(default=24, ge=1, description="Default number of listings returned")
    search_max_limit: int = Field(default=100, ge=1, description="Largest limit accepted by the API")


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "supabase_url": "https://test.supabase.co",
        "supabase_service_key": "test-key",
        "openai_api_key": "",
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
