"""Configuration management for killd.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for deployment-specific values
like the shared authentication secret.
"""

from killd.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
