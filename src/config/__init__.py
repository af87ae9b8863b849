"""
Configuration module for the listing search service.

This module provides centralized configuration management using pydantic-settings.
All environment variables and configuration values should be accessed through this module.

Usage:
    from config import get_settings, settings

    settings = get_settings()
    table = settings.listings_table
"""

from config.constants import DEFAULT_TERM_SEARCH_CONFIG, TermSearchConfig
from config.settings import Settings, get_settings

# Convenience: create a default settings instance
try:
    settings = get_settings()
except Exception:
    settings = None  # Allow import even if the environment is malformed (for testing)

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "TermSearchConfig",
    "DEFAULT_TERM_SEARCH_CONFIG",
]
