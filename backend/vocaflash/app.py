"""
Voca-Flash Backend - FastAPI Application

REST service persisting flashcards and study sessions for the voice client.
"""

import logging
import sqlite3
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Must happen before importing modules that read environment variables
load_dotenv()

from fastapi import FastAPI, Request, status  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: E402

from vocaflash.api.dependencies import cleanup_dependencies, init_dependencies  # noqa: E402
from vocaflash.api.routes import flashcards_router, study_router  # noqa: E402
from vocaflash.config import (  # noqa: E402
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    get_api_host,
    get_api_port,
    get_cors_allow_credentials,
    get_cors_origins,
    get_log_level,
    is_production,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan manager for startup/shutdown events.

    Startup:
    - Open the flashcard database (creating tables)

    Shutdown:
    - Release singleton dependencies
    """
    logger.info("Starting Voca-Flash backend...")
    await init_dependencies()
    logger.info("Dependencies initialized")

    yield

    logger.info("Shutting down Voca-Flash backend...")
    await cleanup_dependencies()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Voca-Flash API",
    description="Flashcard storage for the voice-controlled study client",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration - loaded from environment with restrictive defaults
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=get_cors_allow_credentials(),
    allow_methods=CORS_ALLOWED_METHODS,
    allow_headers=CORS_ALLOWED_HEADERS,
)


# =============================================================================
# Error responses: every failure is {"error": "<message>"}
# =============================================================================


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"Invalid {field}: {first.get('msg', 'invalid value')}" if field else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(sqlite3.Error)
async def database_exception_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    # Driver messages stay out of production responses
    message = "Internal server error" if is_production() else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message}
    )


# Register API routers
app.include_router(flashcards_router)
app.include_router(study_router)


@app.get("/api/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "message": "Voca-Flash API is running",
    }


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    logging.basicConfig(level=get_log_level())
    uvicorn.run(app, host=get_api_host(), port=get_api_port())
