"""Configuration management for Stadium Swap.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the STADIUMSWAP_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (STADIUMSWAP_* prefix)
2. .env file in the project root
3. Default values defined in StadiumSwapConfig

Example .env file:
    STADIUMSWAP_MODEL_ID=gemini-3-pro-image-preview
    STADIUMSWAP_IMAGE_SIZE=1K
    STADIUMSWAP_GRADIO_SERVER_PORT=7860

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from stadiumswap.core.config import config

    print(config.model_id)
    print(config.max_upload_bytes)

Credentials
-----------
The Gemini API key is deliberately NOT a settings field. Settings are read
once at startup, while the key must be re-read on every generation call so a
freshly selected key takes effect without a restart. Only the *name* of the
environment variable holding the key is configured here (``api_key_env_var``);
see ``stadiumswap.core.credentials`` for how it is resolved.

See Also
--------
- .env.example: Template with all available configuration options
- StadiumSwapConfig: Full configuration class documentation
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 5 MiB; uploads of exactly this size are accepted.
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class StadiumSwapConfig(BaseSettings):
    """Main configuration for Stadium Swap.

    This class uses Pydantic Settings to manage all application configuration.
    Values are loaded from environment variables with the STADIUMSWAP_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Generation Settings:
        model_id : str
            Gemini model used for image editing
        aspect_ratio : str
            Aspect ratio requested for the generated image
        image_size : Literal["1K", "2K", "4K"]
            Output resolution tier
        settle_delay_seconds : float
            Pause before the network call so the loading state renders first

    Upload Settings:
        max_upload_bytes : int
            Largest accepted upload in bytes (inclusive)

    Credentials:
        api_key_env_var : str
            Name of the environment variable holding the Gemini API key

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)
        log_level : str
            Root logging level applied by the UI entry point

    Examples
    --------
        >>> custom_config = StadiumSwapConfig(image_size="2K", settle_delay_seconds=0)
        >>> custom_config.aspect_ratio
        '4:3'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STADIUMSWAP_",
        case_sensitive=False,
        extra="ignore",
    )

    # Generation settings
    model_id: str = Field(
        default="gemini-3-pro-image-preview",
        description="Gemini model ID used for the fan transformation",
    )
    aspect_ratio: str = Field(
        default="4:3",
        description="Aspect ratio of the generated image",
    )
    image_size: Literal["1K", "2K", "4K"] = Field(
        default="1K",
        description="Output resolution tier",
    )
    settle_delay_seconds: float = Field(
        default=0.1,
        description="Delay before calling the API so the loading indicator can render",
        ge=0.0,
        le=5.0,
    )

    # Upload settings
    max_upload_bytes: int = Field(
        default=DEFAULT_MAX_UPLOAD_BYTES,
        description="Maximum accepted upload size in bytes (inclusive)",
        gt=0,
    )

    # Credentials
    api_key_env_var: str = Field(
        default="GEMINI_API_KEY",
        description="Environment variable holding the Gemini API key",
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
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the application",
    )


# Global configuration instance
# Loads values from environment variables (STADIUMSWAP_* prefix) and .env file.
config = StadiumSwapConfig()
