"""UI event handlers for the Styleframe Gradio interface.

Handlers take and return plain values plus the session :class:`UIState`.
They never raise into Gradio: failures become user notifications and leave
the history untouched.
"""

import io
import logging

import gradio as gr
from PIL import Image

from styleframe.core.errors import StyleframeError
from styleframe.core.history import GeneratedImage
from styleframe.core.relay import PromptRelay, decode_data_uri
from styleframe.core.styles import DEFAULT_STYLE

from .components import GENERATE_LABEL, GENERATING_LABEL
from .formatting import (
    format_generation_error,
    format_history_caption,
    format_image_caption,
    format_prompt_counter,
)
from .models import UIState
from .validation import MAX_PROMPT_LENGTH, validate_prompt

logger = logging.getLogger(__name__)


def notify_success(message: str) -> None:
    """Show a transient success toast."""
    gr.Info(message)


def notify_failure(message: str) -> None:
    """Show a warning toast for a failed action."""
    gr.Warning(message)


def to_display_image(url: str) -> Image.Image | str | None:
    """Convert an image URL into something Gradio can render.

    Data URIs are decoded into PIL images; remote URLs are passed through.
    Undecodable data yields None.
    """
    if not url.startswith("data:"):
        return url
    try:
        return Image.open(io.BytesIO(decode_data_uri(url)))
    except (ValueError, OSError) as e:
        logger.error(f"Could not decode stored image: {e}")
        return None


def _browser_value(state: UIState):
    """Serialized history for the browser, or no update when stored on disk."""
    if state.mirrors_browser_storage():
        return state.history.serialize()
    return gr.skip()


def render_current(state: UIState) -> tuple:
    """Return (image, caption) for the current image."""
    image = state.current_image
    display = to_display_image(image.url) if image else None
    return display, format_image_caption(image)


def render_history(state: UIState) -> tuple:
    """Return (gallery items, empty-notice update) for the history."""
    items = [(to_display_image(image.url), format_history_caption(image)) for image in state.history]
    return items, gr.update(visible=len(items) == 0)


def restore_history(browser_value: str | None, state: UIState) -> tuple:
    """Load the persisted history when a page opens.

    With browser-mirrored history the value comes from the visitor's local
    storage; with a history file the file is read instead.

    Args:
        browser_value: Serialized history from browser storage (may be None)
        state: Session state

    Returns:
        Tuple of (state, gallery_items, empty_notice_update)
    """
    if state.mirrors_browser_storage() and isinstance(browser_value, str):
        state.history.storage.set(state.history.storage_key, browser_value)

    state.history.restore()
    return (state, *render_history(state))


async def generate_image(
    prompt: str,
    style: str,
    state: UIState,
    relay: PromptRelay,
) -> tuple:
    """Generate an image from the form inputs.

    Only one generation per session runs at a time: a request arriving while
    another is in flight is refused with a notification.  On success the
    image becomes the current image and is recorded in history.  On failure
    nothing is recorded.

    Args:
        prompt: Prompt textbox value
        style: Selected style tag
        state: Session state
        relay: Relay used to reach the inference API

    Returns:
        Tuple of (state, image, caption, gallery_items, empty_notice_update,
        browser_value)
    """
    if not state.begin_generation():
        logger.info("Generation refused: another generation is in progress")
        notify_failure("An image is already being generated. Please wait for it to finish.")
        return (state, *render_current(state), *render_history(state), gr.skip())

    try:
        clean_prompt = validate_prompt(prompt)
        style = style or DEFAULT_STYLE
        image_url = await relay.generate(clean_prompt, style)

        image = GeneratedImage.create(url=image_url, prompt=clean_prompt, style=style)
        state.history.record(image)
        state.current_image = image

        logger.info(f"Generated image {image.id} (style={style})")
        notify_success("Image generated successfully!")

    except StyleframeError as e:
        logger.warning(f"Generation failed: {e.message}")
        notify_failure(f"Failed to generate image: {format_generation_error(e)}")
        return (state, *render_current(state), *render_history(state), gr.skip())

    except Exception as e:
        logger.error(f"Error generating image: {e}", exc_info=True)
        notify_failure(f"Failed to generate image: {format_generation_error(e)}")
        return (state, *render_current(state), *render_history(state), gr.skip())

    finally:
        state.end_generation()

    return (state, *render_current(state), *render_history(state), _browser_value(state))


def select_from_history(state: UIState, evt: gr.SelectData) -> tuple:
    """Show a history image as the current image.

    Returns:
        Tuple of (state, image, caption)
    """
    images = state.history.images
    index = evt.index if isinstance(evt.index, int) else evt.index[0]

    if 0 <= index < len(images):
        selected = state.history.select(images[index].id)
        if selected is not None:
            state.current_image = selected

    return (state, *render_current(state))


def clear_history(state: UIState) -> tuple:
    """Remove every image from the history.

    The current image stays on screen.

    Returns:
        Tuple of (state, gallery_items, empty_notice_update, browser_value)
    """
    state.history.clear()
    logger.info("History cleared")
    return (state, *render_history(state), _browser_value(state))


def update_prompt_counter(prompt: str | None) -> str:
    """Return the character counter for the prompt box."""
    return format_prompt_counter(prompt, MAX_PROMPT_LENGTH)


def use_example_prompt(example: str) -> tuple[str, str]:
    """Fill the prompt box with an example.

    Returns:
        Tuple of (prompt, counter)
    """
    return example, update_prompt_counter(example)


def lock_generate_button() -> dict:
    """Disable the generate button while a generation runs."""
    return gr.update(value=GENERATING_LABEL, interactive=False)


def unlock_generate_button() -> dict:
    """Re-enable the generate button."""
    return gr.update(value=GENERATE_LABEL, interactive=True)
