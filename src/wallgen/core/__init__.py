"""Core functionality for wallpaper generation.

This module provides the core components for Wallgen:

- **WallgenConfig / config**: Configuration management using Pydantic Settings
- **ImageServiceBase**: Backend-independent batch and remix orchestration
- **GeminiImageService**: Gemini implementation of the image service
- **ReferenceImage**: Optional input image that steers generation

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with WALLGEN_ in .env files

2. **Service Layer** (image_service.py, prompts.py):
   - Concurrent batch generation with all-or-nothing semantics
   - Remix with optional thinking-mode prompt expansion

3. **Support Utilities** (images.py):
   - Base64 / bytes / PIL conversions, MIME detection, download files
"""

from .config import WallgenConfig, config
from .image_service import (
    GeminiImageService,
    ImageServiceBase,
    ImageServiceError,
    MissingImageDataError,
    ServiceConfigurationError,
    create_image_service,
)
from .images import ReferenceImage

__all__ = [
    "WallgenConfig",
    "config",
    "GeminiImageService",
    "ImageServiceBase",
    "ImageServiceError",
    "MissingImageDataError",
    "ServiceConfigurationError",
    "create_image_service",
    "ReferenceImage",
]
