"""Wallgen - AI wallpaper generation and remixing with Gemini."""

__version__ = "0.1.0"

from wallgen.core.config import WallgenConfig, config
from wallgen.core.image_service import GeminiImageService, ImageServiceBase

__all__ = [
    "GeminiImageService",
    "ImageServiceBase",
    "WallgenConfig",
    "config",
]
