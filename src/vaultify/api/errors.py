"""Exception handlers mapping the service error taxonomy to JSON responses."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vaultify.platform.logging import logger
from vaultify.shared.errors import ExternalServiceError, VaultifyError

GENERIC_ERROR: str = "Internal server error"


def error_response(status_code: int, reason: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": reason})


async def _handle_service_error(request: Request, exc: VaultifyError) -> JSONResponse:
    if isinstance(exc, ExternalServiceError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.reason)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.reason)
    return error_response(exc.status_code, exc.reason)


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s invalid body: %s", request.method, request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the exception handlers for the API."""

    app.add_exception_handler(VaultifyError, _handle_service_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_request_validation)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _handle_unexpected_error)


__all__ = ["error_response", "setup_exception_handlers"]
