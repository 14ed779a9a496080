"""Gradio UI for Styleframe Image Generator."""

import logging
from collections.abc import Callable

import gradio as gr

from styleframe.core.config import StyleframeConfig, config
from styleframe.core.history import HISTORY_STORAGE_KEY
from styleframe.core.relay import PromptRelay

from .components import GeneratorFormUI, ImageDisplayUI, ImageHistoryUI
from .handlers import (
    clear_history,
    generate_image,
    lock_generate_button,
    restore_history,
    select_from_history,
    unlock_generate_button,
    update_prompt_counter,
    use_example_prompt,
)
from .models import UIState
from .state import initialize_ui_state
from .themes import get_theme

logger = logging.getLogger(__name__)

TITLE = "AI Image Generator"


def create_ui(
    app_config: StyleframeConfig,
    relay_provider: Callable[[], PromptRelay],
) -> gr.Blocks:
    """Create the Gradio UI.

    Args:
        app_config: Settings (history cap and storage, theme)
        relay_provider: Returns the relay to use for a generation.  Called per
            request so the UI can share a relay created later, e.g. in the
            FastAPI lifespan.

    Returns:
        Gradio Blocks app
    """
    theme = get_theme(app_config.ui_theme)

    app = gr.Blocks(title=TITLE, theme=theme.build(), css=theme.css)

    with app:
        # Session state - one instance per user
        ui_state = gr.State(initialize_ui_state(app_config))

        # Serialized history mirrored into the visitor's localStorage
        browser_history = gr.BrowserState(None, storage_key=HISTORY_STORAGE_KEY)

        gr.HTML(theme.heading_html(TITLE))

        with gr.Row():
            with gr.Column(scale=5):
                form = GeneratorFormUI()

            with gr.Column(scale=7):
                with gr.Tabs():
                    with gr.Tab("Current Image", id="current_tab"):
                        display = ImageDisplayUI()
                    with gr.Tab("Image History", id="history_tab"):
                        history = ImageHistoryUI(app_config.history_cap)

        async def _generate(prompt: str, style: str, state: UIState):
            return await generate_image(prompt, style, state, relay_provider())

        # Event handlers
        app.load(
            fn=restore_history,
            inputs=[browser_history, ui_state],
            outputs=[ui_state, *history.get_output_components()],
        )

        form.prompt.change(
            fn=update_prompt_counter,
            inputs=[form.prompt],
            outputs=[form.counter],
            show_progress="hidden",
        )

        for button, example in form.example_buttons:
            button.click(
                fn=lambda example=example: use_example_prompt(example),
                inputs=None,
                outputs=[form.prompt, form.counter],
            )

        form.generate_btn.click(
            fn=lock_generate_button,
            inputs=None,
            outputs=[form.generate_btn],
            queue=False,
        ).then(
            fn=_generate,
            inputs=[*form.get_input_components(), ui_state],
            outputs=[
                ui_state,
                *display.get_output_components(),
                *history.get_output_components(),
                browser_history,
            ],
            concurrency_limit=None,
        ).then(
            fn=unlock_generate_button,
            inputs=None,
            outputs=[form.generate_btn],
            queue=False,
        )

        history.gallery.select(
            fn=select_from_history,
            inputs=[ui_state],
            outputs=[ui_state, *display.get_output_components()],
        )

        history.clear_btn.click(
            fn=clear_history,
            inputs=[ui_state],
            outputs=[ui_state, *history.get_output_components(), browser_history],
        )

    return app


def main():
    """Launch the UI on its own, without the REST API."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting Styleframe Image Generator UI...")
    logger.info(f"Configuration: {config.model_dump()}")

    relay = PromptRelay(config)
    app = create_ui(config, relay_provider=lambda: relay)

    logger.info(f"Launching Gradio UI on {config.server_host}:{config.server_port}")

    app.launch(
        server_name=config.server_host,
        server_port=config.server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
