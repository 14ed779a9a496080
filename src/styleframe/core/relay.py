"""Prompt relay to the text-to-image inference API.

Processing flow:
    1. Check that the inference credential is configured.
    2. Check that a prompt was given.
    3. Append the style suffix to the prompt.
    4. POST one JSON request to the configured endpoint (redirects followed).
    5. Return the binary response body as a ``data:`` URI.

Error handling strategy:
    - Missing credential -> ``ConfigurationError`` (no outbound call)
    - Missing prompt -> ``ValidationError`` (no outbound call)
    - Non-2xx response -> ``UpstreamError`` with the provider's status
    - Timeout -> ``UpstreamError`` with status 504
    - Other transport failure -> ``UpstreamError`` with status 502

No request is ever retried.
"""

from __future__ import annotations

import base64
import logging

import httpx

from .config import StyleframeConfig
from .errors import ConfigurationError, UpstreamError, ValidationError
from .styles import DEFAULT_STYLE, NEGATIVE_PROMPT, enhance_prompt

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:image/jpeg;base64,"


def encode_data_uri(image_bytes: bytes) -> str:
    """Wrap raw image bytes in a JPEG ``data:`` URI."""
    return DATA_URI_PREFIX + base64.b64encode(image_bytes).decode("ascii")


def decode_data_uri(uri: str) -> bytes:
    """Return the bytes embedded in a base64 ``data:`` URI.

    Any media type is accepted; only the base64 payload after the first comma
    is decoded.

    Raises:
        ValueError: If ``uri`` is not a base64 data URI.
    """
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    return base64.b64decode(payload)


class PromptRelay:
    """Forward style-enhanced prompts to the inference API.

    The relay owns an ``httpx.AsyncClient`` unless one is passed in.  Only a
    client the relay created itself is closed by :meth:`aclose`.

    Args:
        config: Settings providing the endpoint, credential and timeout.
        client: Optional pre-built async client (tests inject one backed by
            ``httpx.MockTransport``).
    """

    def __init__(self, config: StyleframeConfig, client: httpx.AsyncClient | None = None):
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=config.request_timeout, follow_redirects=True
        )

    def build_payload(self, prompt: str, style: str | None = DEFAULT_STYLE) -> dict:
        """Build the JSON body sent to the inference API."""
        return {
            "inputs": enhance_prompt(prompt, style),
            "parameters": {"negative_prompt": NEGATIVE_PROMPT},
        }

    async def generate(self, prompt: str | None, style: str | None = DEFAULT_STYLE) -> str:
        """Generate one image and return it as a data URI.

        Args:
            prompt: Free-text prompt from the user.
            style: Style tag; unknown tags fall back to ``realistic``.

        Returns:
            ``data:image/jpeg;base64,...`` holding the exact response bytes.

        Raises:
            ConfigurationError: The API credential is not configured.
            ValidationError: The prompt is missing or blank.
            UpstreamError: The provider failed, timed out or was unreachable.
        """
        if not self.config.has_api_key():
            raise ConfigurationError("API key is not configured")

        if not prompt or not prompt.strip():
            raise ValidationError("Prompt is required")

        payload = self.build_payload(prompt, style)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key.get_secret_value()}",
        }

        logger.info(f"Requesting image (style={style}, prompt_length={len(prompt)})")

        try:
            response = await self._client.post(
                self.config.api_url,
                json=payload,
                headers=headers,
                timeout=self.config.request_timeout,
                follow_redirects=True,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Inference request timed out after {self.config.request_timeout}s")
            raise UpstreamError("Image generation timed out", status_code=504) from e
        except httpx.HTTPError as e:
            logger.error(f"Inference request failed: {e}")
            raise UpstreamError("Failed to reach the image service", status_code=502) from e

        if not response.is_success:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text or None
            logger.error(f"Inference API error ({response.status_code}): {detail}")
            raise UpstreamError("Failed to generate image", status_code=response.status_code)

        image_bytes = response.content
        logger.info(f"Received {len(image_bytes)} bytes from inference API")
        return encode_data_uri(image_bytes)

    async def aclose(self) -> None:
        """Close the HTTP client if this relay created it."""
        if self._owns_client:
            await self._client.aclose()
