"""
Core module for cross-cutting concerns.

This module provides:
- Structured logging configuration
- Request tracing middleware
"""

from core.logging import bind_context, clear_context, configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
