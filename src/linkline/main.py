"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from linkline import __version__
from linkline.api.routes import api_router
from linkline.config import Settings, get_settings
from linkline.middleware.logging import LoggingMiddleware, configure_logging
from linkline.middleware.request_id import RequestIdMiddleware
from linkline.utils.errors import ErrorCode, create_error_response, log_error

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    settings = get_settings()

    configure_logging(
        level=settings.logging.level,
        format=settings.logging.format,
    )

    logger.info(
        "Starting linkline-server",
        extra={
            "version": __version__,
            "host": settings.server.host,
            "port": settings.server.port,
            "log_level": settings.logging.level,
        },
    )

    yield

    logger.info("Shutting down linkline-server")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override for testing.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="linkline-server",
        description="FastAPI service that fetches article titles and renders them as HTML link sentences",
        version=__version__,
        lifespan=lifespan,
    )

    # Last added runs first; CORS stays outermost for preflight requests
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors.allowed_origins,
        allow_credentials=True,
        allow_methods=settings.server.cors.allowed_methods,
        allow_headers=settings.server.cors.allowed_headers,
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    app.include_router(api_router)

    return app


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle Pydantic validation errors."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "code": ErrorCode.VALIDATION_ERROR.value,
            "errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Handle value errors."""
    error = create_error_response(
        ErrorCode.INVALID_REQUEST,
        error=str(exc),
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=400, content=error.model_dump(mode="json", exclude_none=True))


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors."""
    request_id = getattr(request.state, "request_id", None)

    log_error(
        exc,
        code=ErrorCode.INTERNAL_ERROR,
        request_id=request_id,
        path=request.url.path,
        method=request.method,
    )

    error = create_error_response(ErrorCode.INTERNAL_ERROR, request_id=request_id)
    return JSONResponse(status_code=500, content=error.model_dump(mode="json", exclude_none=True))


def run() -> None:
    """Run the server with uvicorn using configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "linkline.main:app",
        host=settings.server.host,
        port=settings.server.port,
        workers=settings.server.workers,
    )


# Create the default app instance
app = create_app()
