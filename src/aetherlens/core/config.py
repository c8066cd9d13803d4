"""Configuration management for AetherLens.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the AETHERLENS_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (AETHERLENS_* prefix)
2. .env file in the project root
3. Default values defined in AetherLensConfig

Example .env file:
    AETHERLENS_API_KEY=your-gemini-key
    AETHERLENS_IMAGE_MODEL=imagen-3.0-generate-002
    AETHERLENS_IDENTITY_ENDPOINT=http://localhost:8000/api/generate-identity

The API credential is the one exception to the prefix rule: it is also read
from ``API_KEY`` or ``GEMINI_API_KEY`` so that existing Gemini setups work
unchanged.

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from aetherlens.core.config import config

    print(config.image_model)
    print(config.identity_endpoint)

Timeouts
--------
The generation calls carry no local timeout; the remote service decides.
``identity_timeout`` defaults to ``None`` for the same reason and can be set
when the identity backend is known to hang.
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AetherLensConfig(BaseSettings):
    """Main configuration for AetherLens.

    Attributes
    ----------
    Remote Generation Settings:
        api_key : str | None
            Credential for the Gemini / Imagen API
        image_model : str
            Model used for image synthesis
        text_model : str
            Model used for prompt enhancement, description and synthesis
        image_output_mime_type : Literal["image/jpeg", "image/png"]
            Encoding requested from the image model

    Identity Backend Settings:
        identity_endpoint : str
            URL of the identity-preserving generation backend
        identity_timeout : float | None
            Request timeout in seconds (None = no local timeout)
        max_identity_images : int
            Maximum number of base images per identity request

    Server Settings:
        server_host, server_port : REST API bind address
        gradio_server_name, gradio_server_port, gradio_share : Gradio UI

    Examples
    --------
        >>> from aetherlens.core.config import AetherLensConfig
        >>> custom = AetherLensConfig(api_key="test", text_model="gemini-2.5-pro")
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AETHERLENS_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Remote generation settings
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("AETHERLENS_API_KEY", "API_KEY", "GEMINI_API_KEY"),
        description="API credential for the image and text generation calls",
    )
    image_model: str = Field(
        default="imagen-3.0-generate-002",
        description="Model ID used for image generation",
    )
    text_model: str = Field(
        default="gemini-2.5-flash",
        description="Model ID used for text and vision calls",
    )
    image_output_mime_type: Literal["image/jpeg", "image/png"] = Field(
        default="image/jpeg",
        description="Output encoding requested from the image model",
    )

    # Identity backend
    identity_endpoint: str = Field(
        default="http://localhost:8000/api/generate-identity",
        description="Identity-preserving generation backend URL",
    )
    identity_timeout: float | None = Field(
        default=None,
        description="Identity request timeout in seconds (None disables the local timeout)",
        gt=0,
    )
    max_identity_images: int = Field(
        default=5,
        description="Maximum number of base images for an identity request",
        ge=1,
        le=20,
    )

    # REST API server
    server_host: str = Field(default="0.0.0.0", description="REST API bind address")
    server_port: int = Field(default=7860, description="REST API port", ge=1024, le=65535)

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7861,
        description="Gradio UI port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level for the entry points",
    )

    @property
    def has_api_key(self) -> bool:
        """Whether a non-blank API credential is configured."""
        return bool(self.api_key and self.api_key.strip())


# Global configuration instance
# Loads values from environment variables (AETHERLENS_* prefix) and .env file.
config = AetherLensConfig()
