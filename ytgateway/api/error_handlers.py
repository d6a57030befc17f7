"""Error Handlers — global exception handlers for the gateway API.

Invariants:
    - GatewayError → its own to_response() envelope and http_status
    - Exception (catch-all) → {error, message}, never leaks internal details

Design Decisions:
    - Extracted from main.py; main.py only calls register_error_handlers()
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ytgateway.core.errors import ClientInputError, GatewayError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_RESPONSE = {
    "error": "Internal server error",
    "message": "An unexpected error occurred",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gateway_error_handler(app)
    _register_generic_error_handler(app)


def _register_gateway_error_handler(app: FastAPI) -> None:
    """Register gateway domain/process error handler."""

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        """Render client and extractor errors."""
        log = logger.warning if isinstance(exc, ClientInputError) else logger.error
        log(
            f"GatewayError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "action": exc.context.action,
                "exit_code": exc.context.exit_code,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=INTERNAL_ERROR_RESPONSE,
        )
