"""Reusable UI components for the Styleframe Gradio interface.

There is one implementation of each component.  Visual variations come from
the active :class:`~styleframe.ui.themes.UITheme`, not from copies of the
component.
"""

import gradio as gr

from styleframe.core.styles import DEFAULT_STYLE, EXAMPLE_PROMPTS, STYLE_LABELS

from .formatting import EMPTY_DISPLAY_TEXT, EMPTY_HISTORY_TEXT, format_prompt_counter
from .validation import MAX_PROMPT_LENGTH

GENERATE_LABEL = "Generate Image"
GENERATING_LABEL = "Generating..."


class GeneratorFormUI:
    """Prompt entry form.

    Contains:
    - Prompt textbox with a live character counter
    - Example prompt buttons that fill the textbox
    - Style dropdown
    - Generate button
    """

    def __init__(self):
        with gr.Group():
            gr.Markdown(
                "### 💡 Describe Your Vision\n"
                "Enter a detailed description of the image you want to create."
            )

            self.prompt = gr.Textbox(
                label="Image Description",
                placeholder="A futuristic cityscape with flying cars and neon lights...",
                lines=5,
                max_length=MAX_PROMPT_LENGTH,
                info="Be specific and detailed for better results.",
            )
            self.counter = gr.Markdown(
                value=format_prompt_counter("", MAX_PROMPT_LENGTH),
                elem_classes="sf-counter",
            )

            gr.Markdown("*Try one of these examples:*")
            with gr.Row(elem_classes="sf-example"):
                self.example_buttons = [
                    (gr.Button(f"{example[:30]}...", size="sm", variant="secondary"), example)
                    for example in EXAMPLE_PROMPTS
                ]

            self.style = gr.Dropdown(
                label="🎨 Image Style",
                choices=[(label, style_id) for style_id, label in STYLE_LABELS.items()],
                value=DEFAULT_STYLE,
                info="Choose a style for your generated image.",
            )

            self.generate_btn = gr.Button(GENERATE_LABEL, variant="primary", size="lg")

    def get_input_components(self) -> list[gr.components.Component]:
        """Return components used as inputs to the generate handler."""
        return [self.prompt, self.style]


class ImageDisplayUI:
    """Current image with its caption (age, style badge and prompt)."""

    def __init__(self):
        self.caption = gr.Markdown(value=EMPTY_DISPLAY_TEXT)
        self.image = gr.Image(
            label="Generated Image",
            type="pil",
            interactive=False,
            height=512,
        )

    def get_output_components(self) -> list[gr.components.Component]:
        """Return components updated when the current image changes."""
        return [self.image, self.caption]


class ImageHistoryUI:
    """Thumbnail grid of recent images; clicking one shows it again."""

    def __init__(self, cap: int):
        self.empty_notice = gr.Markdown(value=EMPTY_HISTORY_TEXT, visible=True)
        self.gallery = gr.Gallery(
            label=f"Image History (last {cap})",
            columns=2,
            height=500,
            object_fit="cover",
            allow_preview=False,
        )
        self.clear_btn = gr.Button("Clear History", variant="secondary", size="sm")

    def get_output_components(self) -> list[gr.components.Component]:
        """Return components updated when the history changes."""
        return [self.gallery, self.empty_notice]
