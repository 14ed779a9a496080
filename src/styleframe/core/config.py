"""Configuration management for Styleframe Image Generator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the STYLEFRAME_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (STYLEFRAME_* prefix)
2. .env file in the project root
3. Default values defined in StyleframeConfig

The inference credential and endpoint also honour the conventional
``HUGGINGFACE_API_KEY`` and ``HUGGINGFACE_API_URL`` names, so an existing
Hugging Face ``.env`` works unchanged.

Example .env file:
    HUGGINGFACE_API_KEY=hf_xxxxxxxxxxxxxxxx
    STYLEFRAME_REQUEST_TIMEOUT=60
    STYLEFRAME_HISTORY_CAP=5
    STYLEFRAME_UI_THEME=cosmic

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from styleframe.core.config import config

    print(config.api_url)
    print(config.history_cap)

The credential is optional at load time.  Its absence is only an error when
a generation request is made, which lets the UI and the API start (and report
the problem per request) on a machine without a key.
"""

from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = (
    "https://api-inference.huggingface.co/models/stabilityai/stable-diffusion-xl-base-1.0"
)


class StyleframeConfig(BaseSettings):
    """Main configuration for Styleframe Image Generator.

    Attributes
    ----------
    Inference Settings:
        api_key : SecretStr | None
            Bearer credential for the inference API (required per request)
        api_url : str
            Model inference endpoint receiving the enhanced prompt
        request_timeout : float
            Seconds before an outbound inference request is abandoned

    History Settings:
        history_cap : int
            Maximum number of generated images kept in the history (1-50)
        history_file : Path | None
            Shared JSON file for history.  ``None`` keeps history in each
            visitor's browser storage.

    UI Settings:
        ui_theme : str
            Name of the UI theme (classic, cosmic, minimal)
        server_host : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
        >>> custom_config = StyleframeConfig(
        ...     api_key="hf_test",
        ...     history_cap=10,
        ...     ui_theme="cosmic",
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STYLEFRAME_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Inference settings
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("STYLEFRAME_API_KEY", "HUGGINGFACE_API_KEY"),
        description="Bearer credential for the inference API",
    )
    api_url: str = Field(
        default=DEFAULT_API_URL,
        validation_alias=AliasChoices("STYLEFRAME_API_URL", "HUGGINGFACE_API_URL"),
        description="Text-to-image inference endpoint",
    )
    request_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Timeout in seconds for one inference request",
    )

    # History settings
    history_cap: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum number of images kept in history",
    )
    history_file: Path | None = Field(
        default=None,
        description="Shared history file (None = per-browser storage)",
    )

    # UI settings
    ui_theme: str = Field(
        default="classic",
        description="UI theme name",
    )
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
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
        """Initialize configuration and create the history directory if needed.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        if self.history_file is not None:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)

    def has_api_key(self) -> bool:
        """Return True when a non-blank credential is configured."""
        return self.api_key is not None and bool(self.api_key.get_secret_value().strip())


# Global configuration instance
# Loads values from environment variables (STYLEFRAME_* prefix) and .env file.
config = StyleframeConfig()
