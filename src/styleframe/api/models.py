"""Pydantic request and response models for the Styleframe API.

These models define the JSON schema for the API endpoints.  FastAPI uses
them for request parsing, serialisation, and OpenAPI documentation.

Models
------
GenerateRequest
    Payload for ``POST /api/generate``.
GenerateResponse
    Success body of ``POST /api/generate``.
ErrorResponse
    Body of every error response.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from styleframe.core.styles import DEFAULT_STYLE


class GenerateRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    ``prompt`` is optional at the schema level so that a missing prompt is
    reported by the route as ``{"error": "Prompt is required"}`` with status
    400, after the credential check, rather than as a schema error.

    Scalar prompts are accepted as text (``123`` becomes ``"123"``); falsy
    scalars count as a missing prompt.  A missing, ``null`` or non-string
    style falls back to ``realistic``.

    Attributes:
        prompt: Free-text description of the image.
        style: Style tag.  Unknown tags fall back to ``realistic``.
    """

    prompt: str | None = Field(
        default=None,
        description="Free-text description of the image to generate.",
    )
    style: str | None = Field(
        default=DEFAULT_STYLE,
        description="Style tag (realistic, anime, fantasy, cyberpunk, ...).",
    )

    @field_validator("prompt", mode="before")
    @classmethod
    def coerce_scalar_prompt(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "true" if value else None
        if isinstance(value, (int, float)):
            return str(value) if value else None
        return value

    @field_validator("style", mode="before")
    @classmethod
    def drop_non_string_style(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None


class GenerateResponse(BaseModel):
    """Success body for ``POST /api/generate``.

    Serialised with the ``imageUrl`` key used by browser clients.
    """

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(
        ...,
        alias="imageUrl",
        description="Generated image as a data URI.",
    )


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="User-facing error message.")
