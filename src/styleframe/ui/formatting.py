"""Text formatting helpers for the Styleframe UI."""

from datetime import datetime, timezone

from styleframe.core.errors import StyleframeError
from styleframe.core.history import GeneratedImage

EMPTY_DISPLAY_TEXT = "*Your generated image will appear here*"
EMPTY_HISTORY_TEXT = "*Your image history will appear here after you generate some images.*"
UNKNOWN_ERROR_TEXT = "An unknown error occurred"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_distance(seconds: float) -> str:
    """Describe a duration the way a reader would say it ("about 2 hours").

    Thresholds round to the nearest sensible unit: under 30 seconds is
    "less than a minute", under 45 minutes is counted in minutes, under a day
    in hours, under a month in days, under a year in months.
    """
    seconds = abs(seconds)
    minutes = round(seconds / 60)

    if seconds < 30:
        return "less than a minute"
    if minutes < 45:
        return _plural(max(minutes, 1), "minute")
    if minutes < 90:
        return "about 1 hour"

    hours = round(minutes / 60)
    if hours < 24:
        return f"about {hours} hours"
    if hours < 42:
        return "1 day"

    days = round(hours / 24)
    if days < 30:
        return f"{days} days"
    if days < 45:
        return "about 1 month"
    if days < 60:
        return "about 2 months"

    months = round(days / 30)
    if months < 12:
        return f"{months} months"

    years = round(days / 365)
    return f"about {_plural(max(years, 1), 'year')}"


def format_relative_time(moment: datetime, now: datetime | None = None) -> str:
    """Return ``moment`` relative to ``now`` with a suffix ("5 minutes ago").

    Args:
        moment: Aware datetime to describe
        now: Reference time (defaults to the current UTC time)

    Returns:
        "<distance> ago" for past moments, "in <distance>" for future ones
    """
    now = now or datetime.now(timezone.utc)
    delta = (now - moment).total_seconds()
    distance = format_distance(delta)
    return f"{distance} ago" if delta >= 0 else f"in {distance}"


def format_style_badge(style: str) -> str:
    """Capitalise the style tag for display (``anime`` -> ``Anime``)."""
    return style[:1].upper() + style[1:]


def format_image_caption(image: GeneratedImage | None, now: datetime | None = None) -> str:
    """Markdown caption shown above the current image."""
    if image is None:
        return EMPTY_DISPLAY_TEXT
    created = format_relative_time(image.created_datetime, now)
    return f"Created {created} · `{format_style_badge(image.style)}`\n\n> {image.prompt}"


def format_history_caption(image: GeneratedImage, now: datetime | None = None) -> str:
    """Short caption for a history thumbnail: prompt, style and age."""
    prompt = image.prompt if len(image.prompt) <= 80 else image.prompt[:77] + "..."
    created = format_relative_time(image.created_datetime, now)
    return f"{prompt} [{image.style}] - {created}"


def format_generation_error(error: Exception) -> str:
    """Message shown to the user when a generation fails.

    Styleframe errors carry a user-facing message; anything else is reported
    generically.
    """
    if isinstance(error, StyleframeError):
        return error.message
    return UNKNOWN_ERROR_TEXT


def format_prompt_counter(prompt: str | None, max_length: int) -> str:
    """Character counter shown under the prompt box ("42/500")."""
    return f"{len(prompt or '')}/{max_length}"
