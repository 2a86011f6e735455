# src/momentum/main.py
"""Main entry point for the Momentum application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from momentum.api.v1 import auth_router, messages_router, users_router
from momentum.core.settings import settings
from momentum.services.errors import (
    IntegrityViolationError,
    InvalidStateError,
    MessagingError,
    NotAllowedError,
    NotFoundError,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Personal productivity backend: drafts, sent and received messages",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(messages_router, prefix="/api/v1")

# Most specific first; the first matching class wins.
_ERROR_STATUS: tuple[tuple[type[MessagingError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotAllowedError, status.HTTP_403_FORBIDDEN),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (IntegrityViolationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


@app.exception_handler(MessagingError)
async def messaging_error_handler(request: Request, exc: MessagingError) -> JSONResponse:
    """Translate domain errors into JSON failure responses."""
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            status_code = code
            break

    if isinstance(exc, IntegrityViolationError):
        logger.error("Data integrity violation on %s %s: %s", request.method, request.url.path, exc)
        detail = "Message data is inconsistent; the operation was not applied."
    else:
        detail = str(exc)
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("momentum.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
