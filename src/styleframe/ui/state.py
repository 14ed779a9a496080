"""State management utilities for Styleframe UI.

This module creates the per-session UI state and chooses where the session's
history is persisted.
"""

import logging

from styleframe.core.config import StyleframeConfig
from styleframe.core.history import HistoryStore, JsonFileStorage, MemoryStorage

from .models import UIState

logger = logging.getLogger(__name__)


def initialize_ui_state(config: StyleframeConfig) -> UIState:
    """Create a fresh UIState for the given configuration.

    With ``history_file`` configured, every session shares that JSON file.
    Otherwise each session keeps its history in memory and the UI mirrors it
    into the visitor's browser storage.

    Args:
        config: Application settings

    Returns:
        New UIState with an empty history store
    """
    if config.history_file is not None:
        logger.info(f"Using shared history file: {config.history_file}")
        storage = JsonFileStorage(config.history_file)
    else:
        storage = MemoryStorage()

    return UIState(history=HistoryStore(storage, cap=config.history_cap))
