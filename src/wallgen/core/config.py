"""Configuration management for Wallgen.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the WALLGEN_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (WALLGEN_* prefix)
2. .env file in the project root
3. Default values defined in WallgenConfig

The Gemini API key is the one exception to the prefix rule: it is also read
from ``GEMINI_API_KEY`` or ``API_KEY`` so an existing Gemini setup works
unchanged.

Example .env file:
    GEMINI_API_KEY=your-key-here
    WALLGEN_IMAGE_MODEL=gemini-2.5-flash-image
    WALLGEN_THINKING_MODEL=gemini-2.5-pro
    WALLGEN_IMAGES_PER_BATCH=4

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

Usage Example
-------------
    from wallgen.core.config import config

    print(config.image_model)
    print(config.downloads_dir)

Directory Management
--------------------
The configuration creates ``downloads_dir`` on initialization. Images offered
through the viewer's Download button are written there.
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WallgenConfig(BaseSettings):
    """Main configuration for Wallgen.

    Attributes
    ----------
    Gemini Settings:
        gemini_api_key : str | None
            API key for the Gemini service (also read from GEMINI_API_KEY / API_KEY)
        image_model : str
            Model used for wallpaper generation and remix edits
        thinking_model : str
            Model used to expand remix instructions in thinking mode
        thinking_budget : int
            Thinking token budget for the prompt expansion call
        request_timeout_ms : int
            HTTP timeout for Gemini requests, in milliseconds

    Generation Settings:
        images_per_batch : int
            Number of parallel generation requests per batch
        remix_mime_type : str
            MIME type assumed for a remixed image when detection fails

    Paths:
        downloads_dir : Path
            Directory for files offered by the Download button

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
        >>> custom_config = WallgenConfig(
        ...     gemini_api_key="test-key",
        ...     images_per_batch=2,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WALLGEN_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Gemini settings
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("WALLGEN_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"),
        description="API key for the Gemini service",
    )
    image_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Gemini model used for generation and remix edits",
    )
    thinking_model: str = Field(
        default="gemini-2.5-pro",
        description="Gemini model used to expand remix instructions",
    )
    thinking_budget: int = Field(
        default=32768,
        description="Thinking token budget for prompt expansion",
        ge=0,
    )
    request_timeout_ms: int = Field(
        default=300_000,
        description="HTTP timeout for Gemini requests (milliseconds)",
        ge=1000,
    )

    # Generation settings
    images_per_batch: int = Field(
        default=4,
        description="Number of parallel generation requests per batch",
        ge=1,
        le=8,
    )
    remix_mime_type: str = Field(
        default="image/png",
        description="MIME type assumed for remixed images when detection fails",
    )

    # Paths
    downloads_dir: Path = Field(
        default=Path("downloads"),
        description="Directory for files offered by the Download button",
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the downloads directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.downloads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def has_api_key(self) -> bool:
        """Whether a non-blank Gemini API key is configured."""
        return bool(self.gemini_api_key and self.gemini_api_key.strip())


# Global configuration instance, loaded from WALLGEN_* environment variables and .env
config = WallgenConfig()
