"""
Global exception handlers.

HTTPException and request validation keep FastAPI's defaults. Anything else
is logged and answered with a generic 500 that does not leak internals.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from vw_exposure_shared.schemas.common import ErrorBody, ErrorResponse

log = structlog.get_logger()


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        log.error(
            "request.unhandled_error",
            path=request.url.path,
            error=str(exc),
            exc_info=exc,
        )
        body = ErrorResponse(
            error=ErrorBody(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )
