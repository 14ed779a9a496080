"""Tests for styleframe.api.models — Pydantic request/response models.

Tests cover:
- Optional prompt, scalar prompt coercion and style fallback on GenerateRequest.
- The ``imageUrl`` wire name on GenerateResponse.
- ErrorResponse shape.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from styleframe.api.models import ErrorResponse, GenerateRequest, GenerateResponse


class TestGenerateRequest:
    """Test GenerateRequest Pydantic model."""

    def test_full_request(self):
        req = GenerateRequest(prompt="A cat in space", style="anime")
        assert req.prompt == "A cat in space"
        assert req.style == "anime"

    def test_style_defaults_to_realistic(self):
        req = GenerateRequest(prompt="A cat")
        assert req.style == "realistic"

    def test_prompt_may_be_missing(self):
        """A missing prompt is left for the route to report."""
        req = GenerateRequest.model_validate({})
        assert req.prompt is None

    def test_unknown_style_accepted(self):
        """Unknown styles are resolved later by the style table."""
        req = GenerateRequest(prompt="A cat", style="pixelart")
        assert req.style == "pixelart"

    def test_null_style_accepted(self):
        """A null style is left for the style table to resolve."""
        req = GenerateRequest.model_validate({"prompt": "A cat", "style": None})
        assert req.style is None

    def test_non_string_style_dropped(self):
        req = GenerateRequest.model_validate({"prompt": "A cat", "style": 42})
        assert req.style is None

    @pytest.mark.parametrize(
        "value,expected",
        [(123, "123"), (1.5, "1.5"), (True, "true"), (0, None), (False, None)],
    )
    def test_scalar_prompt_coerced(self, value, expected):
        req = GenerateRequest.model_validate({"prompt": value})
        assert req.prompt == expected

    def test_non_string_prompt_rejected(self):
        with pytest.raises(ValidationError):
            GenerateRequest.model_validate({"prompt": ["not", "a", "string"]})


class TestGenerateResponse:
    """Test GenerateResponse Pydantic model."""

    def test_serialises_with_camel_case_key(self):
        resp = GenerateResponse(image_url="data:image/jpeg;base64,AAAA")
        assert resp.model_dump(by_alias=True) == {"imageUrl": "data:image/jpeg;base64,AAAA"}

    def test_accepts_alias(self):
        resp = GenerateResponse.model_validate({"imageUrl": "data:image/jpeg;base64,AAAA"})
        assert resp.image_url == "data:image/jpeg;base64,AAAA"


class TestErrorResponse:
    """Test ErrorResponse Pydantic model."""

    def test_error_body(self):
        assert ErrorResponse(error="Prompt is required").model_dump() == {
            "error": "Prompt is required"
        }
