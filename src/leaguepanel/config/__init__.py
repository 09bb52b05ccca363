"""Configuration helpers for storage, auth and ordering options."""

from .settings import DEFAULT_BASE_PATH, Settings, load_settings

__all__ = [
    "DEFAULT_BASE_PATH",
    "Settings",
    "load_settings",
]
