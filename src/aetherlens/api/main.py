"""AetherLens FastAPI application.

This module defines the FastAPI ``app`` instance, all REST API routes, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The API is a thin JSON surface over
:class:`~aetherlens.core.orchestrator.RequestOrchestrator`:

- **Catalog data** (style cores, presets, inspirations) is static and served
  by ``GET /api/config`` and ``GET /api/styles``.
- **Remote work** (image generation, text transforms, identity) goes through
  the orchestrator stored on ``app.state`` by the lifespan handler.
- **Errors** always have the shape ``{"error": "<message>"}``: 400 for
  validation and file errors, 502 for remote failures, 422 for request
  bodies that do not match their model.

Endpoints
---------
========  ================================  ==================================
Method    Path                              Purpose
========  ================================  ==================================
GET       ``/api/config``                   Catalog data, version, limits
GET       ``/api/styles``                   Filtered styles and inspirations
GET       ``/api/styles/suggest``           Style suggested by a prompt
POST      ``/api/prompt/compose``           Preview the composed prompt
POST      ``/api/prompt/negative-preset``   Merge a negative preset
POST      ``/api/prompt/enhance``           Enhance a prompt
POST      ``/api/prompt/random``            Generate a random prompt
POST      ``/api/prompt/describe``          Describe an image as a prompt
POST      ``/api/generate``                 Generate images
POST      ``/api/reimagine``                Reimagine base images
POST      ``/api/upscale``                  Upscale the first base image
POST      ``/api/identity``                 Identity-preserving generation
========  ================================  ==================================

Usage
-----
CLI (installed entry point)::

    aetherlens

Direct invocation::

    python -m aetherlens.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aetherlens import __version__
from aetherlens.api.models import (
    ComposeRequest,
    DescribeRequest,
    EnhanceRequest,
    GenerateRequest,
    IdentityRequest,
    ImagePayload,
    NegativePresetRequest,
    ReimagineRequest,
    UpscaleRequest,
)
from aetherlens.core import catalog
from aetherlens.core.config import config
from aetherlens.core.exceptions import ImageReadError, RemoteServiceError
from aetherlens.core.images import check_payloads
from aetherlens.core.models import (
    IMAGE_COUNTS,
    EditableImage,
    ErrorKind,
    GenerationResult,
    IdentityResult,
    PromptComposition,
    TextResult,
)
from aetherlens.core.orchestrator import RequestOrchestrator, create_orchestrator
from aetherlens.core.prompt_builder import build_prompt, merge_negative_terms
from aetherlens.core.validation import ValidationError

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.FILE: 400,
    ErrorKind.REMOTE: 502,
}

# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the orchestrator on startup and release its clients on shutdown.

    No remote connection is opened here; the SDK and HTTP clients are
    created on the first request that needs them.
    """
    app.state.orchestrator = create_orchestrator(config)
    logger.info("RequestOrchestrator initialised.")

    yield

    await app.state.orchestrator.aclose()
    logger.info("RequestOrchestrator closed on shutdown.")


app = FastAPI(
    title="AetherLens",
    description="Prompt composition, image generation, reimagining and identity studio API.",
    version=__version__,
    lifespan=lifespan,
)

# Allow cross-origin requests so a browser frontend can be served from
# another port during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error handling.
# ---------------------------------------------------------------------------


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(ValidationError)
async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"{request.url.path}: {exc}")
    return _error(str(exc), 400)


@app.exception_handler(ImageReadError)
async def _image_read_error_handler(request: Request, exc: ImageReadError) -> JSONResponse:
    logger.warning(f"{request.url.path}: {exc}")
    return _error(str(exc), 400)


@app.exception_handler(RemoteServiceError)
async def _remote_error_handler(request: Request, exc: RemoteServiceError) -> JSONResponse:
    return _error(str(exc), 502)


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return _error("Invalid request: " + "; ".join(parts), 422)


def _respond(result: GenerationResult | TextResult | IdentityResult) -> JSONResponse:
    """Render a result object, mapping its error kind to a status code."""
    if result.ok:
        return JSONResponse(content=result.to_dict())
    return _error(result.error or "", _STATUS_BY_KIND.get(result.error_kind, 500))


def _orchestrator(request: Request) -> RequestOrchestrator:
    return request.app.state.orchestrator


def _editable(payloads: list[ImagePayload]) -> list[EditableImage]:
    images = [p.to_editable() for p in payloads]
    check_payloads(images)
    return images


# ---------------------------------------------------------------------------
# Catalog routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return static catalog data and limits for a frontend.

    Returns:
        Dictionary with ``version``, ``styles``, ``aspect_ratios``,
        ``image_counts``, ``negative_presets``, ``inspirations``,
        ``identity_styles``, ``max_identity_images``, the model ids and
        whether an API key is configured.
    """
    return {
        "version": __version__,
        "styles": [asdict(s) for s in catalog.STYLE_CORES],
        "aspect_ratios": [asdict(a) for a in catalog.ASPECT_RATIOS],
        "image_counts": list(IMAGE_COUNTS),
        "negative_presets": [asdict(p) for p in catalog.NEGATIVE_PRESETS],
        "inspirations": [asdict(i) for i in catalog.INSPIRATION_PROMPTS],
        "identity_styles": list(catalog.IDENTITY_STYLES),
        "max_identity_images": config.max_identity_images,
        "image_model": config.image_model,
        "text_model": config.text_model,
        "has_api_key": config.has_api_key,
    }


@app.get("/api/styles")
async def get_styles(q: str = "") -> dict:
    """Filter style cores and inspiration prompts by a search term."""
    return {
        "styles": [asdict(s) for s in catalog.filter_styles(q)],
        "inspirations": [asdict(i) for i in catalog.filter_inspirations(q)],
    }


@app.get("/api/styles/suggest")
async def suggest_style(prompt: str = "") -> dict:
    return {"style_id": catalog.suggest_style(prompt)}


# ---------------------------------------------------------------------------
# Prompt routes.
# ---------------------------------------------------------------------------


@app.post("/api/prompt/compose")
async def compose_prompt(req: ComposeRequest) -> dict:
    """Preview the final request prompt without generating anything.

    Raises:
        ValidationError: 400 when the base prompt is empty.
    """
    compiled = build_prompt(
        req.prompt,
        style=catalog.get_style(req.style_id),
        negative_prompt=req.negative_prompt,
    )
    return {"compiled_prompt": compiled}


@app.post("/api/prompt/negative-preset")
async def apply_negative_preset(req: NegativePresetRequest) -> dict:
    preset = catalog.get_negative_preset(req.preset)
    if preset is None:
        raise ValidationError(f"Unknown negative preset: {req.preset}")
    return {"negative_prompt": merge_negative_terms(req.negative_prompt, preset.value)}


@app.post("/api/prompt/enhance")
async def enhance_prompt(req: EnhanceRequest, request: Request) -> JSONResponse:
    return _respond(await _orchestrator(request).enhance_prompt(req.prompt))


@app.post("/api/prompt/random")
async def random_prompt(request: Request) -> JSONResponse:
    return _respond(await _orchestrator(request).random_prompt())


@app.post("/api/prompt/describe")
async def describe_image(req: DescribeRequest, request: Request) -> JSONResponse:
    image = _editable([req.image])[0]
    return _respond(await _orchestrator(request).describe_image(image))


# ---------------------------------------------------------------------------
# Generation routes.
# ---------------------------------------------------------------------------


@app.post("/api/generate")
async def generate_images(req: GenerateRequest, request: Request) -> JSONResponse:
    """Compose the prompt and generate images.

    Returns:
        ``{"images": [data URL, ...]}`` on success, in the order the image
        service produced them.
    """
    composition = PromptComposition(
        base_prompt=req.prompt,
        style=catalog.get_style(req.style_id),
        negative_prompt=req.negative_prompt,
        number_of_images=req.number_of_images,
        aspect_ratio=req.aspect_ratio,
    )
    return _respond(await _orchestrator(request).generate(composition))


@app.post("/api/reimagine")
async def reimagine(req: ReimagineRequest, request: Request) -> JSONResponse:
    images = _editable(req.images)
    return _respond(await _orchestrator(request).reimagine(images, req.prompt, req.aspect_ratio))


@app.post("/api/upscale")
async def upscale(req: UpscaleRequest, request: Request) -> JSONResponse:
    images = _editable(req.images)
    return _respond(await _orchestrator(request).upscale(images, req.aspect_ratio))


@app.post("/api/identity")
async def generate_identity(req: IdentityRequest, request: Request) -> JSONResponse:
    """Send base images and a scenario to the identity backend.

    Returns:
        ``{"persona": {...}, "generatedImage": data URL}`` on success.
    """
    images = _editable(req.images)
    result = await _orchestrator(request).generate_identity(
        images, req.scenario, req.aspect_ratio, req.style
    )
    return _respond(result)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~aetherlens.core.config.config`
    (``AETHERLENS_SERVER_HOST`` / ``AETHERLENS_SERVER_PORT``).

    This function is registered as the ``aetherlens`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "aetherlens.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
