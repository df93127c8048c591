"""Configuration package for error-detail construction."""

from .settings import ErrorDetailsSettings, get_settings

__all__ = ["ErrorDetailsSettings", "get_settings"]
