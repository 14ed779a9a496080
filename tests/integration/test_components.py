"""Integration tests for UI components and the Blocks app."""

import gradio as gr
import pytest

from styleframe.core.config import StyleframeConfig
from styleframe.core.styles import EXAMPLE_PROMPTS, STYLE_LABELS
from styleframe.ui.app import create_ui
from styleframe.ui.components import (
    GENERATE_LABEL,
    GeneratorFormUI,
    ImageDisplayUI,
    ImageHistoryUI,
)


class TestGeneratorFormUI:
    """Integration tests for GeneratorFormUI component."""

    def test_form_creation(self):
        with gr.Blocks():
            form = GeneratorFormUI()

        assert isinstance(form.prompt, gr.Textbox)
        assert isinstance(form.style, gr.Dropdown)
        assert isinstance(form.generate_btn, gr.Button)
        assert form.prompt.max_length == 500

    def test_one_button_per_example(self):
        with gr.Blocks():
            form = GeneratorFormUI()

        assert [example for _, example in form.example_buttons] == EXAMPLE_PROMPTS

    def test_style_choices_cover_every_label(self):
        with gr.Blocks():
            form = GeneratorFormUI()

        values = [value for _, value in form.style.choices]
        assert values == list(STYLE_LABELS)
        assert form.style.value == "realistic"

    def test_get_input_components(self):
        with gr.Blocks():
            form = GeneratorFormUI()

        assert form.get_input_components() == [form.prompt, form.style]

    def test_generate_button_label(self):
        with gr.Blocks():
            form = GeneratorFormUI()

        assert form.generate_btn.value == GENERATE_LABEL


class TestImageDisplayAndHistoryUI:
    """Integration tests for the display and history components."""

    def test_display_output_order(self):
        with gr.Blocks():
            display = ImageDisplayUI()

        assert display.get_output_components() == [display.image, display.caption]

    def test_history_label_shows_cap(self):
        with gr.Blocks():
            history = ImageHistoryUI(50)

        assert history.gallery.label == "Image History (last 50)"
        assert history.get_output_components() == [history.gallery, history.empty_notice]


class TestCreateUI:
    """Integration tests for create_ui."""

    @pytest.mark.parametrize("theme", ["classic", "cosmic", "minimal", "unknown"])
    def test_builds_for_each_theme(self, theme, relay):
        config = StyleframeConfig(_env_file=None, ui_theme=theme)
        app = create_ui(config, relay_provider=lambda: relay)
        assert isinstance(app, gr.Blocks)

    def test_builds_with_history_file(self, temp_dir, relay):
        config = StyleframeConfig(_env_file=None, history_file=temp_dir / "history.json")
        app = create_ui(config, relay_provider=lambda: relay)
        assert isinstance(app, gr.Blocks)
