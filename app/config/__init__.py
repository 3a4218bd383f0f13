"""Application configuration module.

- **settings.py**: Environment-based settings (Pydantic BaseSettings)
  - Database URL, CORS origins
  - Planner tuning: pool size, exercises per day, repair limits
  - Loaded from .env file via pydantic-settings
"""
from app.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
