"""Configuration package for the quiz agent."""

from .settings import Settings, settings

__all__ = [
    "settings",
    "Settings",
]
