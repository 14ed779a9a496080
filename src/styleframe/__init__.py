"""Styleframe Image Generator - styled text-to-image through a hosted inference API."""

__version__ = "0.1.0"

from styleframe.core.config import StyleframeConfig, config
from styleframe.core.history import GeneratedImage, HistoryStore
from styleframe.core.relay import PromptRelay

__all__ = [
    "GeneratedImage",
    "HistoryStore",
    "PromptRelay",
    "StyleframeConfig",
    "config",
]
