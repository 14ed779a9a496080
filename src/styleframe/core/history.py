"""Bounded, persisted history of generated images.

The history is intentionally simple:

- records live in an ordered list, newest first
- the list never holds more than ``cap`` records; adding one at capacity
  evicts the oldest
- every mutation writes the whole list, as one JSON array, under a single
  key of a key-value storage backend

Two backends are provided.  :class:`MemoryStorage` is a plain dictionary;
the Gradio UI uses one per session and mirrors its content into the
browser's ``localStorage``.  :class:`JsonFileStorage` keeps all keys in one
JSON file on disk for single-user installs that want history to survive a
browser change.

Records are never mutated.  They are created after a successful generation
and destroyed only by eviction or :meth:`HistoryStore.clear`.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

HISTORY_STORAGE_KEY = "imageHistory"
DEFAULT_HISTORY_CAP = 5

_id_lock = threading.Lock()
_last_id = 0


def next_image_id() -> str:
    """Return a unique id derived from the current time in milliseconds.

    Ids are strictly increasing within a process: if two images are created
    in the same millisecond the second id is bumped by one.
    """
    global _last_id
    with _id_lock:
        candidate = time.time_ns() // 1_000_000
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


@dataclass(frozen=True)
class GeneratedImage:
    """One generated image and the request that produced it.

    Attributes:
        id: Unique identifier assigned at creation.
        url: Remote URL or inline ``data:`` URI of the image.
        prompt: The user's original prompt (without the style suffix).
        style: Style tag the image was generated with.
        created_at: ISO-8601 creation timestamp (UTC).
    """

    id: str
    url: str
    prompt: str
    style: str
    created_at: str

    @classmethod
    def create(cls, url: str, prompt: str, style: str) -> GeneratedImage:
        """Create a record with a fresh id and the current timestamp."""
        return cls(
            id=next_image_id(),
            url=url,
            prompt=prompt,
            style=style,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

    @classmethod
    def from_dict(cls, data: dict) -> GeneratedImage:
        """Build a record from its persisted form.

        Raises:
            ValueError: If a required key is missing or not a string.
        """
        values = {}
        for field_name, key in (
            ("id", "id"),
            ("url", "url"),
            ("prompt", "prompt"),
            ("style", "style"),
            ("created_at", "createdAt"),
        ):
            value = data.get(key)
            if not isinstance(value, str):
                raise ValueError(f"History entry has no valid '{key}'")
            values[field_name] = value
        return cls(**values)

    def to_dict(self) -> dict:
        """Return the persisted form of this record."""
        return {
            "id": self.id,
            "url": self.url,
            "prompt": self.prompt,
            "style": self.style,
            "createdAt": self.created_at,
        }

    @property
    def created_datetime(self) -> datetime:
        """Creation time as an aware ``datetime``."""
        parsed = datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


class KeyValueStorage(Protocol):
    """Minimal string key-value store used to persist the history."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """Dictionary-backed storage.

    Args:
        initial: Optional starting content, e.g. the values restored from the
            browser.  The mapping is copied.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """Storage that keeps every key in a single JSON object on disk.

    Reading is forgiving: a missing, empty or invalid file reads as an empty
    store rather than raising, so the file bootstraps itself on first write.

    Args:
        path: Location of the JSON file.  Parent directories are created on
            first write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read history file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring history file {self.path}: expected a JSON object")
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class HistoryStore:
    """Newest-first, capped list of :class:`GeneratedImage` records.

    The store is owned explicitly by whoever creates it (one per UI session).
    Several stores may share one storage backend: writes merge with the
    persisted list.

    Args:
        storage: Backend the full list is persisted to.
        cap: Maximum number of records kept (at least 1).
        storage_key: Key the serialized list is stored under.

    Raises:
        ValueError: If ``cap`` is less than 1.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        cap: int = DEFAULT_HISTORY_CAP,
        storage_key: str = HISTORY_STORAGE_KEY,
    ):
        if cap < 1:
            raise ValueError(f"History cap must be at least 1, got {cap}")
        self.storage = storage
        self.cap = cap
        self.storage_key = storage_key
        self._images: list[GeneratedImage] = []

    @property
    def images(self) -> tuple[GeneratedImage, ...]:
        """Records currently held, newest first."""
        return tuple(self._images)

    @property
    def latest(self) -> GeneratedImage | None:
        """Most recently recorded image, if any."""
        return self._images[0] if self._images else None

    def __len__(self) -> int:
        return len(self._images)

    def __iter__(self) -> Iterator[GeneratedImage]:
        return iter(tuple(self._images))

    def record(self, image: GeneratedImage) -> None:
        """Prepend ``image`` to the persisted list, evict beyond the cap and persist.

        The list is re-read from storage first, so stores sharing one backend
        (e.g. several sessions on one history file) keep each other's records.
        """
        self._images = [image, *self._load()][: self.cap]
        self._persist()
        logger.debug(f"Recorded image {image.id} (history size {len(self._images)})")

    def restore(self) -> None:
        """Replace in-memory state with the persisted list.

        Unparseable data yields an empty history; individual invalid entries
        are skipped.  Restored data is truncated to the cap.  Nothing is
        written back.
        """
        self._images = self._load()[: self.cap]
        logger.info(f"Restored {len(self._images)} image(s) from history")

    def _load(self) -> list[GeneratedImage]:
        """Parse the persisted list, skipping anything invalid."""
        raw = self.storage.get(self.storage_key)
        restored: list[GeneratedImage] = []

        if raw:
            try:
                entries = json.loads(raw)
            except ValueError as e:
                logger.error(f"Failed to parse image history: {e}")
                entries = []

            if not isinstance(entries, list):
                logger.error("Failed to parse image history: expected a JSON array")
                entries = []

            for entry in entries:
                if not isinstance(entry, dict):
                    continue
                try:
                    restored.append(GeneratedImage.from_dict(entry))
                except ValueError as e:
                    logger.warning(f"Skipping invalid history entry: {e}")

        return restored

    def select(self, image_id: str) -> GeneratedImage | None:
        """Return the record with ``image_id``, or None."""
        return next((image for image in self._images if image.id == image_id), None)

    def clear(self) -> None:
        """Drop every record and persist the empty list."""
        self._images = []
        self._persist()

    def serialize(self) -> str:
        """Return the JSON array written to storage."""
        return json.dumps([image.to_dict() for image in self._images])

    def _persist(self) -> None:
        self.storage.set(self.storage_key, self.serialize())
