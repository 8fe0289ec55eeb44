"""Application configuration module.

- **settings.py**: Environment-based settings (Pydantic BaseSettings)
  - Database URL, blob storage location, query limits
  - Loaded from .env file via pydantic-settings
"""
from mastergym.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
