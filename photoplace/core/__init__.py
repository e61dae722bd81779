"""Core modules for PhotoPlace."""

from .config import PhotoPlaceConfig

__all__ = ["PhotoPlaceConfig"]
