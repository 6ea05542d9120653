"""Configuration error raised for missing or malformed client settings."""
from __future__ import annotations


class ConfigError(ValueError):
    """Raised when configuration (usually from the environment) is unusable."""


__all__ = ["ConfigError"]
