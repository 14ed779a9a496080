"""Style presets and prompt enhancement.

A style is a short tag chosen in the form (``realistic``, ``anime`` ...).
Before a prompt is sent to the inference API, the fixed suffix for its style
is appended to it so the model is biased toward that look.  Styles without a
suffix, and any unknown tag, fall back to the realistic suffix.
"""

from __future__ import annotations

DEFAULT_STYLE = "realistic"

STYLE_SUFFIXES: dict[str, str] = {
    "realistic": "ultra realistic, highly detailed, 8k resolution, professional photography",
    "anime": "Studio Ghibli style, anime, hand-drawn, colorful, Hayao Miyazaki inspired",
    "fantasy": "fantasy art, magical, detailed, ethereal lighting, vibrant colors, digital painting",
    "cyberpunk": "cyberpunk, neon lights, futuristic, dystopian, high contrast, digital art",
}

# Styles offered by the form, in display order.  ``abstract`` and
# ``watercolor`` have no suffix of their own and use the realistic one.
STYLE_LABELS: dict[str, str] = {
    "realistic": "Realistic",
    "anime": "Studio Ghibli Style",
    "fantasy": "Fantasy Character",
    "cyberpunk": "Cyberpunk Art",
    "abstract": "Abstract Art",
    "watercolor": "Watercolor Painting",
}

NEGATIVE_PROMPT = "blurry, bad anatomy, bad hands, cropped, worst quality, low quality"

EXAMPLE_PROMPTS = [
    "A futuristic cityscape with flying cars and neon lights",
    "A serene mountain landscape at sunset with a lake reflection",
    "A magical forest with glowing plants and mythical creatures",
    "An underwater scene with colorful coral reefs and exotic fish",
]


def style_suffix(style: str | None) -> str:
    """Return the suffix for ``style``, falling back to the realistic suffix.

    Args:
        style: Style tag from the request.  ``None``, empty and unknown tags
            are all treated as the default style.

    Returns:
        The suffix text appended to the prompt.
    """
    if style and style in STYLE_SUFFIXES:
        return STYLE_SUFFIXES[style]
    return STYLE_SUFFIXES[DEFAULT_STYLE]


def enhance_prompt(prompt: str, style: str | None) -> str:
    """Append the style suffix to a user prompt.

    The prompt is used verbatim; only the separator and the suffix are added.

    Example:
        >>> enhance_prompt("A cat", "anime")
        'A cat, Studio Ghibli style, anime, hand-drawn, colorful, Hayao Miyazaki inspired'
    """
    return f"{prompt}, {style_suffix(style)}"


def style_label(style: str) -> str:
    """Return the display label for a style, or the capitalised tag if unknown."""
    return STYLE_LABELS.get(style, style[:1].upper() + style[1:])


def list_styles() -> list[dict]:
    """Return the selectable styles as ``{"id", "label"}`` dictionaries."""
    return [{"id": style_id, "label": label} for style_id, label in STYLE_LABELS.items()]
