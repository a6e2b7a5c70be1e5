"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import yaml
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from docshelf.api.health import router as health_router
from docshelf.api.listings import router as listings_router
from docshelf.api.render import router as render_router
from docshelf.api.site import router as site_router
from docshelf.config import Settings
from docshelf.exceptions import InternalServerError
from docshelf.filesystem.content_manager import ContentManager
from docshelf.filesystem.site_config import SITE_CONFIG_FILE
from docshelf.services.index_service import build_site_index

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_SITE_TOML = (
    '[site]\ntitle = "Documentation"\nbaseurl = ""\ntimezone = "UTC"\n\n'
    '[listing]\nexclude = []\nrecent_groups = 6\ndescription_length = 80\nundated = "now"\n'
)


def _configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def ensure_content_dir(content_dir: Path) -> None:
    """Ensure the content directory and site.toml exist without overwriting anything."""
    if content_dir.exists() and not content_dir.is_dir():
        msg = f"Content path exists but is not a directory: {content_dir}"
        raise NotADirectoryError(msg)

    if not content_dir.exists():
        logger.info("Creating default content directory at %s", content_dir)
        content_dir.mkdir(parents=True)

    site_toml = content_dir / SITE_CONFIG_FILE
    if not site_toml.exists():
        site_toml.write_text(_DEFAULT_SITE_TOML, encoding="utf-8")
        logger.info("Created missing content scaffold file: %s", site_toml)


def init_app_state(app: FastAPI, settings: Settings) -> None:
    """Load content into app state: content manager and the first site index."""
    try:
        ensure_content_dir(settings.content_dir)
    except OSError as exc:
        logger.critical(
            "Failed to initialize content directory at %s: %s.", settings.content_dir, exc
        )
        raise

    content_manager = ContentManager(content_dir=settings.content_dir)
    app.state.content_manager = content_manager

    try:
        index = build_site_index(content_manager)
    except (OSError, ValueError) as exc:
        logger.critical("Failed to build site index from %s: %s.", settings.content_dir, exc)
        raise
    app.state.site_index = index
    logger.info("Indexed %d pages from filesystem", len(index.pages))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan: startup and shutdown."""
    settings: Settings = app.state.settings
    _configure_logging(settings.debug)
    logger.info("Starting Docshelf (debug=%s)", settings.debug)

    init_app_state(app, settings)

    yield

    logger.info("Docshelf stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    docs_enabled = settings.debug or settings.expose_docs

    app = FastAPI(
        title="Docshelf",
        description="Page listings for a markdown documentation site",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings

    app.add_middleware(GZipMiddleware, minimum_size=500)

    cors_origins = (
        settings.cors_origins
        if settings.cors_origins
        else (["http://localhost:4000", "http://localhost:8000"] if settings.debug else [])
    )
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    app.include_router(health_router)
    app.include_router(site_router)
    app.include_router(listings_router)
    app.include_router(render_router)

    # Global exception handlers: safety net for unhandled exceptions

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = []
        for err in exc.errors():
            loc = err.get("loc", ())
            field = str(loc[-1]) if loc else "unknown"
            errors.append({"field": field, "message": err.get("msg", "Invalid value")})
        logger.warning(
            "RequestValidationError in %s %s: %s",
            request.method,
            request.url.path,
            errors,
        )
        return JSONResponse(status_code=422, content={"detail": errors})

    @app.exception_handler(InternalServerError)
    async def internal_server_error_handler(
        request: Request, exc: InternalServerError
    ) -> JSONResponse:
        logger.error(
            "InternalServerError in %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.error("ValueError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        message = str(exc) or "Invalid value"
        return JSONResponse(
            status_code=422,
            content={"detail": message},
        )

    @app.exception_handler(OSError)
    async def os_error_handler(request: Request, exc: OSError) -> JSONResponse:
        if isinstance(exc, (ConnectionError, TimeoutError)):
            raise exc
        logger.error("OSError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Storage operation failed"},
        )

    @app.exception_handler(yaml.YAMLError)
    async def yaml_error_handler(request: Request, exc: yaml.YAMLError) -> JSONResponse:
        logger.error("YAMLError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=422,
            content={"detail": "Invalid content format"},
        )

    @app.exception_handler(UnicodeDecodeError)
    async def unicode_error_handler(request: Request, exc: UnicodeDecodeError) -> JSONResponse:
        logger.error(
            "UnicodeDecodeError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc
        )
        return JSONResponse(
            status_code=422,
            content={"detail": "Invalid content encoding"},
        )

    return app


app = create_app()


def cli_entry() -> None:
    """CLI entry point for running the server."""
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(
        "docshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
