"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from citeservice import __version__
from citeservice.api.bodylimit import BodySizeLimitMiddleware
from citeservice.api.dependencies import get_config
from citeservice.api.routes import bibliography, citations
from citeservice.api.schemas import HealthResponse
from citeservice.config import ServiceConfig

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    The service is stateless: engines are created per request, so there
    is nothing to open or close here beyond logging.
    """
    config: ServiceConfig = app.state.config
    logger.info(
        "Citeproc service running on %s:%d (default locale %s)",
        config.api.host,
        config.api.port,
        config.engine.default_locale,
    )

    yield

    logger.info("Citeproc service shutdown complete")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 before any processing."""
    errors = jsonable_encoder(exc.errors())
    missing = [
        ".".join(str(part) for part in error["loc"][1:]) or "request body"
        for error in errors
        if error.get("type") == "missing"
    ]
    if missing:
        detail = f"Missing {' or '.join(missing)}"
    else:
        detail = "Invalid request body"

    logger.info("Rejected %s %s: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=400, content={"detail": detail, "errors": errors})


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Service configuration (defaults to `get_config()`)

    Returns:
        Configured FastAPI application
    """
    config = config or get_config()

    app = FastAPI(
        title="Citeproc Service",
        description="Renders CSL citations and bibliographies for editor documents",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.dependency_overrides[get_config] = lambda: config

    app.add_middleware(
        BodySizeLimitMiddleware,
        max_body_bytes=config.api.max_body_bytes,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Include routers
    app.include_router(citations.router)
    app.include_router(bibliography.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Citeproc Service",
            "version": __version__,
            "endpoints": {
                "render_citations": "/render-citations",
                "render_bibliography": "/render-bibliography",
                "health": "/health",
            },
        }

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint."""
        logger.info("Health check requested")
        return HealthResponse(ok=True)

    return app
