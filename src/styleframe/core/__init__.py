"""Core functionality for styled image generation.

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - Settings prefixed with STYLEFRAME_ (credential also as HUGGINGFACE_API_KEY)

2. **Prompt Layer** (styles.py):
   - Style tag table and prompt enhancement

3. **Relay Layer** (relay.py):
   - One outbound request per generation, returned as a data URI

4. **History Layer** (history.py):
   - GeneratedImage records and the capped, persisted HistoryStore

5. **Errors** (errors.py):
   - Error taxonomy shared by the API and the UI
"""

from .config import StyleframeConfig, config
from .errors import (
    ConfigurationError,
    StyleframeError,
    UnexpectedError,
    UpstreamError,
    ValidationError,
)
from .history import (
    HISTORY_STORAGE_KEY,
    GeneratedImage,
    HistoryStore,
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
)
from .relay import PromptRelay, decode_data_uri, encode_data_uri
from .styles import DEFAULT_STYLE, STYLE_SUFFIXES, enhance_prompt, style_suffix

__all__ = [
    "ConfigurationError",
    "DEFAULT_STYLE",
    "GeneratedImage",
    "HISTORY_STORAGE_KEY",
    "HistoryStore",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "PromptRelay",
    "STYLE_SUFFIXES",
    "StyleframeConfig",
    "StyleframeError",
    "UnexpectedError",
    "UpstreamError",
    "ValidationError",
    "config",
    "decode_data_uri",
    "encode_data_uri",
    "enhance_prompt",
    "style_suffix",
]
