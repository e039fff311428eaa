"""FastAPI application for the ourmemories JSON API."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import get_cors_origins
from ..errors import OurMemoriesError
from ..logging_config import configure_structured_logging, get_logger
from .routes import health, photos, upload

logger = get_logger(__name__)


async def service_error_handler(request: Request, exc: OurMemoriesError):
    """Answer every OurMemoriesError with its status code and a consistent body."""
    logger.warning(
        "request_failed",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        code=exc.code,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors like any other validation failure."""
    logger.warning("request_validation_failed", path=request.url.path, errors=str(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "Invalid request",
            "code": "invalid_request",
            "details": {"errors": jsonable_errors(exc)},
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error("unexpected_error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "An unexpected error occurred",
            "code": "internal_error",
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [{"loc": list(error.get("loc", ())), "msg": error.get("msg", "")} for error in exc.errors()]


def create_app() -> FastAPI:
    """Build the API application."""
    configure_structured_logging(component="api")

    app = FastAPI(
        title="ourmemories API",
        version=__version__,
        description="Photo metadata and image upload API for the ourmemories gallery",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(OurMemoriesError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health.router)
    app.include_router(photos.router)
    app.include_router(upload.router)

    @app.get("/")
    def root():
        """Root endpoint with API information."""
        return {
            "service": "ourmemories API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    logger.info("api_app_created", version=__version__)
    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("ourmemories.api.app:app", host="0.0.0.0", port=8000)  # nosec B104


if __name__ == "__main__":
    main()
