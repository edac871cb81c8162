# src/artchain_validator/main.py
"""Main entry point for the ArtChain validator."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from artchain_validator.api.v1 import admin_router, system_router, validate_router
from artchain_validator.core.errors import ValidatorError
from artchain_validator.core.logging_config import configure_logging
from artchain_validator.core.settings import settings
from artchain_validator.services.oracle import get_validator

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="ArtChain Validator API",
    description="Allowlist, dedup and nonce checks for NFT mint permits, signed with EIP-712",
    version=settings.app_version,
)

# Clients post to /validate at the root; the versioned surface mirrors it
app.include_router(validate_router)
app.include_router(validate_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.middleware("http")
async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %d (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.exception_handler(ValidatorError)
async def validator_error_handler(request: Request, exc: ValidatorError) -> JSONResponse:
    """Map validation errors to their status class and a stable error code."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc), "code": exc.code},
    )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging(settings.log_level)
    # Build eagerly so bad key or address configuration fails the boot
    get_validator()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "EIP-712 mint permit validator",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "artchain_validator.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
