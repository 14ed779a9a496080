"""Visual themes for the Styleframe UI.

Every theme drives the same components; only colours, fonts and the heading
style differ.  Select one with ``STYLEFRAME_UI_THEME``.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

import gradio as gr

logger = logging.getLogger(__name__)

DEFAULT_THEME = "classic"


@dataclass(frozen=True)
class UITheme:
    """A named look for the generator UI.

    Attributes:
        name: Identifier used in configuration
        build: Factory returning the Gradio theme object
        css: Extra CSS applied to the Blocks app
        heading_gradient: CSS gradient used for the page title
    """

    name: str
    build: Callable[[], gr.themes.Base]
    css: str
    heading_gradient: str

    def heading_html(self, title: str) -> str:
        """Page title rendered with this theme's gradient."""
        return (
            f'<h1 class="sf-heading" style="background-image: {self.heading_gradient};">'
            f"{title}</h1>"
        )


_BASE_CSS = """
.sf-heading {
    text-align: center;
    font-size: 2.25rem;
    font-weight: 700;
    color: transparent;
    -webkit-background-clip: text;
    background-clip: text;
    margin-bottom: 1.5rem;
}
.sf-counter {
    text-align: right;
    font-size: 0.75rem;
    opacity: 0.7;
}
.sf-example button {
    font-size: 0.75rem;
    border-radius: 9999px;
}
"""


def _classic() -> gr.themes.Base:
    return gr.themes.Soft(primary_hue="purple", secondary_hue="pink")


def _cosmic() -> gr.themes.Base:
    return gr.themes.Base(primary_hue="fuchsia", secondary_hue="sky", neutral_hue="slate").set(
        body_background_fill="#0F0F1A",
        body_background_fill_dark="#0F0F1A",
        block_background_fill="#16162A",
        block_background_fill_dark="#16162A",
        body_text_color="#E9B8FF",
        body_text_color_dark="#E9B8FF",
        button_primary_background_fill="linear-gradient(90deg, #FF00FF, #00BFFF)",
        button_primary_background_fill_dark="linear-gradient(90deg, #FF00FF, #00BFFF)",
    )


def _minimal() -> gr.themes.Base:
    return gr.themes.Default(primary_hue="slate")


THEMES: dict[str, UITheme] = {
    "classic": UITheme(
        name="classic",
        build=_classic,
        css=_BASE_CSS,
        heading_gradient="linear-gradient(90deg, #9333ea, #ec4899, #fb923c)",
    ),
    "cosmic": UITheme(
        name="cosmic",
        build=_cosmic,
        css=_BASE_CSS + ".sf-example button { border-color: #ffffff20; }\n",
        heading_gradient="linear-gradient(90deg, #FF00FF, #00BFFF)",
    ),
    "minimal": UITheme(
        name="minimal",
        build=_minimal,
        css=_BASE_CSS,
        heading_gradient="linear-gradient(90deg, #334155, #334155)",
    ),
}


def get_theme(name: str | None) -> UITheme:
    """Return the theme called ``name``, falling back to the default theme."""
    if name and name in THEMES:
        return THEMES[name]
    if name:
        logger.warning(f"Unknown UI theme '{name}', using '{DEFAULT_THEME}'")
    return THEMES[DEFAULT_THEME]


def list_themes() -> list[str]:
    """Names of the available themes."""
    return list(THEMES)
