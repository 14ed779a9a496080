"""Shared pytest fixtures for Styleframe tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import httpx
import pytest
from PIL import Image

from styleframe.core.config import StyleframeConfig
from styleframe.core.history import HistoryStore, MemoryStorage
from styleframe.core.relay import PromptRelay
from styleframe.ui.models import UIState

TEST_API_URL = "https://inference.test/models/stable-diffusion"
TEST_API_KEY = "hf_test_key"

ENV_VARS = (
    "HUGGINGFACE_API_KEY",
    "HUGGINGFACE_API_URL",
    "STYLEFRAME_API_KEY",
    "STYLEFRAME_API_URL",
    "STYLEFRAME_HISTORY_CAP",
    "STYLEFRAME_HISTORY_FILE",
    "STYLEFRAME_REQUEST_TIMEOUT",
    "STYLEFRAME_UI_THEME",
    "STYLEFRAME_SERVER_PORT",
)


class FakeUpstream:
    """Stand-in for the inference API behind an ``httpx.MockTransport``.

    Records every request and answers with the configured status and body.
    Set ``error`` to an exception instance to make the transport raise it.
    """

    def __init__(self, content: bytes = b"", status_code: int = 200):
        self.content = content
        self.status_code = status_code
        self.json_body: dict | None = None
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.json_body is not None:
            return httpx.Response(self.status_code, json=self.json_body)
        return httpx.Response(
            self.status_code,
            content=self.content,
            headers={"content-type": "image/jpeg"},
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Keep the developer's environment out of configuration under test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> StyleframeConfig:
    """Configuration with a credential and a fake endpoint."""
    return StyleframeConfig(
        _env_file=None,
        api_key=TEST_API_KEY,
        api_url=TEST_API_URL,
        request_timeout=5.0,
        history_cap=5,
    )


@pytest.fixture
def unconfigured_config() -> StyleframeConfig:
    """Configuration without an API credential."""
    return StyleframeConfig(_env_file=None, api_url=TEST_API_URL)


@pytest.fixture
def image_bytes() -> bytes:
    """A small real JPEG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 40, 120)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def upstream(image_bytes: bytes) -> FakeUpstream:
    """Fake inference API answering 200 with ``image_bytes``."""
    return FakeUpstream(content=image_bytes)


@pytest.fixture
def relay(test_config: StyleframeConfig, upstream: FakeUpstream) -> PromptRelay:
    """Relay wired to the fake inference API."""
    return PromptRelay(test_config, client=httpx.AsyncClient(transport=upstream.transport))


@pytest.fixture
def unconfigured_relay(unconfigured_config: StyleframeConfig, upstream: FakeUpstream) -> PromptRelay:
    """Relay without a credential, wired to the fake inference API."""
    return PromptRelay(
        unconfigured_config, client=httpx.AsyncClient(transport=upstream.transport)
    )


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Empty in-memory key-value storage."""
    return MemoryStorage()


@pytest.fixture
def history(memory_storage: MemoryStorage) -> HistoryStore:
    """History store with a cap of 5 over in-memory storage."""
    return HistoryStore(memory_storage, cap=5)


@pytest.fixture
def ui_state(history: HistoryStore) -> UIState:
    """Fresh UI state using the ``history`` fixture."""
    return UIState(history=history)


@pytest.fixture
def test_client(test_config: StyleframeConfig, relay: PromptRelay):
    """FastAPI TestClient with the relay wired to the fake inference API.

    The Gradio UI is not mounted.
    """
    from fastapi.testclient import TestClient

    from styleframe.api.main import create_app, get_relay

    app = create_app(test_config, mount_ui=False)
    app.dependency_overrides[get_relay] = lambda: relay

    with TestClient(app) as client:
        yield client


@pytest.fixture
def unconfigured_client(unconfigured_config: StyleframeConfig, unconfigured_relay: PromptRelay):
    """FastAPI TestClient whose relay has no API credential."""
    from fastapi.testclient import TestClient

    from styleframe.api.main import create_app, get_relay

    app = create_app(unconfigured_config, mount_ui=False)
    app.dependency_overrides[get_relay] = lambda: unconfigured_relay

    with TestClient(app) as client:
        yield client
