"""Data models for Styleframe UI state."""

import logging
from dataclasses import dataclass, field

from styleframe.core.history import GeneratedImage, HistoryStore, MemoryStorage

logger = logging.getLogger(__name__)


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own UIState (Gradio copies the initial
    value per session), so the history store is owned by exactly one session.

    Attributes
    ----------
    history : HistoryStore
        Capped, persisted list of images generated in this session
    current_image : GeneratedImage | None
        Image shown in the "Current Image" tab
    busy : bool
        True while a generation is in flight; a second generation is refused
    """

    history: HistoryStore = field(default_factory=lambda: HistoryStore(MemoryStorage()))
    current_image: GeneratedImage | None = None
    busy: bool = False

    def begin_generation(self) -> bool:
        """Mark the session busy.

        Returns:
            False if a generation is already running, True otherwise
        """
        if self.busy:
            return False
        self.busy = True
        return True

    def end_generation(self) -> None:
        """Clear the busy flag."""
        self.busy = False

    def mirrors_browser_storage(self) -> bool:
        """True when history is kept in memory and mirrored to the browser."""
        return isinstance(self.history.storage, MemoryStorage)

    def __repr__(self) -> str:
        """String representation for debugging."""
        current = self.current_image.id if self.current_image else None
        return f"UIState(history={len(self.history)}, current={current}, busy={self.busy})"
