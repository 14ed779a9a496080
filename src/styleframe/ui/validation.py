"""Validation utilities for Styleframe UI inputs."""

import logging

from styleframe.core.errors import ValidationError

logger = logging.getLogger(__name__)

MIN_PROMPT_LENGTH = 3
MAX_PROMPT_LENGTH = 500

__all__ = ["MAX_PROMPT_LENGTH", "MIN_PROMPT_LENGTH", "ValidationError", "validate_prompt"]


def validate_prompt(prompt: str | None) -> str:
    """Validate the prompt typed into the generation form.

    The length is checked on the prompt as typed; surrounding whitespace is
    stripped only from the returned value.

    Args:
        prompt: Raw textbox value

    Returns:
        The stripped prompt

    Raises:
        ValidationError: If the prompt is shorter than 3 or longer than 500
            characters, with a message suitable for display
    """
    if prompt is None or not prompt.strip():
        raise ValidationError("Prompt is required")

    if len(prompt) > MAX_PROMPT_LENGTH:
        raise ValidationError(f"Prompt must not exceed {MAX_PROMPT_LENGTH} characters.")

    stripped = prompt.strip()
    if len(stripped) < MIN_PROMPT_LENGTH:
        raise ValidationError(f"Prompt must be at least {MIN_PROMPT_LENGTH} characters.")

    return stripped
