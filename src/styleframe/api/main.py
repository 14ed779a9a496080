"""Styleframe Image Generator — FastAPI Application.

This module is the entry point for the web application.  It builds the
FastAPI ``app``, its REST routes, mounts the Gradio UI, and defines the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
- **Configuration** comes from :data:`~styleframe.core.config.config`
  (environment variables and ``.env``).
- **Image generation** is delegated to a single
  :class:`~styleframe.core.relay.PromptRelay` created at startup and stored on
  ``app.state``.  The relay forwards one request per generation to the
  inference API and returns the image as a data URI.
- **Errors** are raised as :class:`~styleframe.core.errors.StyleframeError`
  subclasses and turned into ``{"error": ...}`` bodies by one exception
  handler.
- **The UI** is the Gradio app from :mod:`styleframe.ui.app`, mounted at ``/``.

Endpoints
---------
========  ==================  ==========================================
Method    Path                Purpose
========  ==================  ==========================================
POST      ``/api/generate``   Generate one image from a prompt and style
GET       ``/api/config``     Styles, prompt limits, examples, history cap
GET       ``/api/health``     Liveness probe
GET       ``/``               Gradio UI
========  ==================  ==========================================

Usage
-----
CLI (installed entry point)::

    styleframe

Direct invocation::

    python -m styleframe.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from styleframe import __version__
from styleframe.api.models import ErrorResponse, GenerateRequest, GenerateResponse
from styleframe.core.config import StyleframeConfig, config
from styleframe.core.errors import ConfigurationError, StyleframeError, UnexpectedError
from styleframe.core.relay import PromptRelay
from styleframe.core.styles import DEFAULT_STYLE, EXAMPLE_PROMPTS, list_styles
from styleframe.ui.validation import MAX_PROMPT_LENGTH, MIN_PROMPT_LENGTH

logger = logging.getLogger(__name__)


def get_relay(request: Request) -> PromptRelay:
    """FastAPI dependency returning the application's relay."""
    return request.app.state.relay


def create_app(app_config: StyleframeConfig | None = None, *, mount_ui: bool = True) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_config: Settings to use.  Defaults to the global ``config``.
        mount_ui: Mount the Gradio UI at ``/``.  Tests of the REST API pass
            ``False`` to keep startup light.

    Returns:
        Configured FastAPI application.
    """
    app_config = app_config or config

    # -----------------------------------------------------------------------
    # Application lifecycle — relay setup and teardown.
    # -----------------------------------------------------------------------

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Create the relay on startup and close its HTTP client on shutdown."""
        app.state.relay = PromptRelay(app_config)
        if not app_config.has_api_key():
            logger.warning("No inference API key configured; generation requests will fail.")
        logger.info(f"PromptRelay initialised for {app_config.api_url}")

        yield  # Application runs here.

        await app.state.relay.aclose()
        logger.info("PromptRelay closed on shutdown.")

    app = FastAPI(
        title="Styleframe Image Generator",
        description="Styled text-to-image generation through a hosted inference API.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = app_config

    # Allow cross-origin requests so a separately served frontend can call
    # the API during development.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Error handlers.
    # -----------------------------------------------------------------------

    @app.exception_handler(StyleframeError)
    async def handle_styleframe_error(request: Request, exc: StyleframeError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # The credential is checked first, whatever the body.
        if not app_config.has_api_key():
            error = ConfigurationError("API key is not configured")
            return JSONResponse(status_code=error.status_code, content={"error": error.message})

        logger.warning(f"Rejected malformed request body: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    # -----------------------------------------------------------------------
    # Routes.
    # -----------------------------------------------------------------------

    @app.post(
        "/api/generate",
        response_model=GenerateResponse,
        responses={
            400: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def generate_image(
        req: GenerateRequest, relay: PromptRelay = Depends(get_relay)
    ) -> GenerateResponse:
        """Generate one image from a prompt and a style.

        The prompt is enhanced with the style's suffix and forwarded to the
        inference API.  The image comes back inline as a data URI.

        Args:
            req: Validated :class:`GenerateRequest` payload.

        Returns:
            ``{"imageUrl": "data:image/jpeg;base64,..."}``

        Raises:
            ConfigurationError: 500 when no API key is configured.
            ValidationError: 400 when the prompt is missing.
            UpstreamError: The provider's status when generation fails.
            UnexpectedError: 500 for anything else.
        """
        try:
            image_url = await relay.generate(req.prompt, req.style)
        except StyleframeError:
            raise
        except Exception as e:
            logger.error(f"Error generating image: {e}", exc_info=True)
            raise UnexpectedError() from e

        return GenerateResponse(image_url=image_url)

    @app.get("/api/config")
    async def get_config() -> dict:
        """Return what a frontend needs to render the generation form.

        Returns:
            Dictionary with ``version``, ``styles``, ``default_style``,
            ``prompt_min_length``, ``prompt_max_length``, ``example_prompts``
            and ``history_cap``.
        """
        return {
            "version": __version__,
            "styles": list_styles(),
            "default_style": DEFAULT_STYLE,
            "prompt_min_length": MIN_PROMPT_LENGTH,
            "prompt_max_length": MAX_PROMPT_LENGTH,
            "example_prompts": EXAMPLE_PROMPTS,
            "history_cap": app_config.history_cap,
        }

    @app.get("/api/health")
    async def health() -> dict:
        """Liveness probe."""
        return {"status": "ok"}

    # The UI is mounted last so that the API routes above take precedence
    # over the catch-all mount at ``/``.
    if mount_ui:
        import gradio as gr

        from styleframe.ui.app import create_ui

        blocks = create_ui(app_config, relay_provider=lambda: app.state.relay)
        app = gr.mount_gradio_app(app, blocks, path="/")

    return app


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~styleframe.core.config.config` (which
    loads from ``STYLEFRAME_SERVER_HOST`` and ``STYLEFRAME_SERVER_PORT``
    environment variables).  Defaults to ``0.0.0.0:7860``.

    This function is registered as the ``styleframe`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Configuration: {config.model_dump()}")

    uvicorn.run(
        "styleframe.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
