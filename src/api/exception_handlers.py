"""Exception handlers for the FastAPI application."""

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode
from infrastructure.identity.provider import IdentityNotFoundError

logger = structlog.get_logger()


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions.

        Server-side failures were already logged where they were detected;
        the request id is returned so operators can correlate them.
        """
        request_id = getattr(request.state, "request_id", "unknown")
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            status_code=exc.status_code,
            message=exc.message,
        )
        details = exc.details
        if exc.status_code >= 500:
            details = {**(details or {}), "request_id": request_id}
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error_code": exc.error_code.value,
                "message": exc.message,
                "details": details,
            },
        )

    @app.exception_handler(httpx.HTTPError)
    @app.exception_handler(IdentityNotFoundError)
    async def identity_provider_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle identity provider failures that propagated unmodified."""
        request_id = getattr(request.state, "request_id", "unknown")
        upstream_status = None
        if isinstance(exc, httpx.HTTPStatusError):
            upstream_status = exc.response.status_code
        logger.error(
            "identity_provider_error",
            error=str(exc),
            error_type=type(exc).__name__,
            upstream_status=upstream_status,
            request_id=request_id,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error_code": ErrorCode.IDENTITY_PROVIDER_ERROR.value,
                "message": "User registration failed: identity provider error",
                "details": {"request_id": request_id},
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error_code": "HTTP_ERROR",
                "message": exc.detail,
                "details": None,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = [
            {
                "field": ".".join(str(x) for x in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        # Raw errors echo the submitted input, which may include passwords
        logger.info("validation_error", fields=[e["field"] for e in errors])
        return JSONResponse(
            status_code=422,
            content={
                "error_code": ErrorCode.VALIDATION_ERROR.value,
                "message": "Request validation failed",
                "details": errors,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "An unexpected error occurred"
        if not settings.is_production:
            message = str(exc)

        return JSONResponse(
            status_code=500,
            content={
                "error_code": ErrorCode.INTERNAL_ERROR.value,
                "message": message,
                "details": {"request_id": request_id},
            },
        )
