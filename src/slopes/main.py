"""
Slopes Service
==============

FastAPI entry point exposing the generator over HTTP.

Endpoints:
    GET  /              - Service information
    GET  /health        - Liveness probe
    POST /generate      - Generate a drawing, returns the JSON document
    POST /generate.svg  - Generate a drawing, returns SVG

Generation is CPU-bound and synchronous; the generate endpoints are plain
`def` handlers so FastAPI runs them in its worker threadpool. Each request
builds its own SlopesGenerator, so requests never share noise or jitter
state.
"""

import logging
import os
import threading
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from slopes.config import settings, setup_logging
from slopes.errors import InvalidConfigurationError
from slopes.export import drawing_to_svg
from slopes.generator import SlopesGenerator
from slopes.models.input import GenerateRequest
from slopes.models.output import Drawing


logger = logging.getLogger(__name__)


# =============================================================================
# Global State
# =============================================================================

_startup_time: float = 0.0
_drawings_generated: int = 0
_drawings_lock = threading.Lock()


# =============================================================================
# Generator Factory
# =============================================================================

def create_generator(request: GenerateRequest) -> SlopesGenerator:
    """
    Build a generator for one request.

    Request fields override the configured generation defaults.

    Raises:
        InvalidConfigurationError: If the merged parameters are invalid
    """
    overrides = request.model_dump(exclude_none=True)
    generation = settings.generation.model_copy(update=overrides)
    return SlopesGenerator.from_seeds(
        generation.to_generation_config(),
        noise_seed=generation.noise_seed,
        jitter_seed=generation.jitter_seed,
        grouping_tolerance=settings.postprocess.grouping_tolerance,
    )


def _run(request: GenerateRequest) -> Drawing:
    global _drawings_generated

    drawing = create_generator(request).run_drawing()
    with _drawings_lock:
        _drawings_generated += 1
    return drawing


# =============================================================================
# Application
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    global _startup_time

    _startup_time = time.time()
    logger.info(f"Starting {settings.service.name} {settings.service.version}")

    port = int(os.environ.get("PORT", settings.server.port))
    logger.info(f"Configured port: {port}")

    yield

    logger.info(
        f"Shutting down {settings.service.name} "
        f"({_drawings_generated} drawings generated)"
    )


app = FastAPI(
    title="Slopes",
    description="Procedural mountain-range line art for pen plotters",
    version=settings.service.version,
    lifespan=lifespan,
)


@app.exception_handler(InvalidConfigurationError)
async def invalid_configuration_handler(
    request: Request,
    exc: InvalidConfigurationError,
) -> JSONResponse:
    logger.warning(f"Rejected generation request: {exc}")
    return JSONResponse(
        {"error": "invalid_configuration", "detail": str(exc)},
        status_code=422,
    )


# =============================================================================
# HTTP Endpoints
# =============================================================================

@app.get("/")
async def root() -> JSONResponse:
    """Service information endpoint."""
    return JSONResponse({
        "service": "Slopes",
        "version": settings.service.version,
        "name": settings.service.name,
        "status": "running",
    })


@app.get("/health")
async def health() -> JSONResponse:
    """
    Liveness probe - is the process alive?

    Always returns 200 if the service is running.
    """
    return JSONResponse({
        "status": "healthy",
        "uptime_seconds": round(time.time() - _startup_time, 1),
        "drawings_generated": _drawings_generated,
    })


@app.post("/generate")
def generate_drawing(request: GenerateRequest) -> JSONResponse:
    """Generate a drawing and return it as a JSON document."""
    drawing = _run(request)
    return JSONResponse(drawing.model_dump(mode="json"))


@app.post("/generate.svg")
def generate_svg(request: GenerateRequest) -> Response:
    """Generate a drawing and return it as SVG."""
    drawing = _run(request)
    svg = drawing_to_svg(
        drawing,
        stroke_width=settings.export.stroke_width,
        stroke_color=settings.export.stroke_color,
    )
    return Response(content=svg, media_type="image/svg+xml")


# =============================================================================
# Main Entry Point
# =============================================================================

def serve() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    setup_logging(settings)

    # Cloud Run uses PORT env var
    port = int(os.environ.get("PORT", settings.server.port))

    uvicorn.run(
        "slopes.main:app",
        host=settings.server.host,
        port=port,
        reload=False,
    )


if __name__ == "__main__":
    serve()
