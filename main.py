"""Tutoring Center Back-Office - FastAPI Application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import DirectoryError, LeaveValidationError
from app.core.logging import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Include API routes
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.exception_handler(LeaveValidationError)
async def leave_validation_error_handler(request: Request, exc: LeaveValidationError) -> JSONResponse:
    """Refused leave operations carry a stable code next to the message."""
    logger.info("Leave operation refused on %s: %s (%s)", request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())


@app.exception_handler(DirectoryError)
async def directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
