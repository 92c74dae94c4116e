"""
Exception handlers.

Serialize every failure into the uniform error envelope. Raw exception
text is never returned; unexpected errors are logged and reported as a
generic INTERNAL_ERROR.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from marquee_core import get_logger
from marquee_core.errors import CatalogError, ErrorCode, ErrorKind
from marquee_core.schemas import ErrorBody, ErrorResponse

from .config import settings

logger = get_logger(__name__)

_HTTP_CODES: dict[int, str] = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def error_response(
    status_code: int,
    message: str,
    code: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build an error envelope response."""
    body = ErrorResponse(error=ErrorBody(message=message, code=code, details=details))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


def validation_details(errors: list[Any]) -> list[dict[str, str]]:
    """
    Flatten pydantic errors into field/message pairs.

    Args:
        errors: Error list from ValidationError.errors() or RequestValidationError.errors().

    Returns:
        List of {"field", "message"} dictionaries.
    """
    details = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        details.append({"field": ".".join(location), "message": str(error.get("msg", ""))})
    return details


def catalog_validation_error(exc: ValidationError, message: str, code: str) -> CatalogError:
    """Convert a pydantic ValidationError into a VALIDATION CatalogError."""
    return CatalogError(
        ErrorKind.VALIDATION,
        message,
        code=code,
        details=validation_details(exc.errors(include_url=False)),
    )


async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
    status_code = exc.status_code
    extra = {"path": request.url.path, "method": request.method, "code": exc.code}
    if status_code >= 500:
        logger.error("Request failed: %s", exc.message, extra=extra, exc_info=exc.__cause__)
    else:
        logger.warning("Request rejected: %s", exc.message, extra=extra)
    return error_response(status_code, exc.message, exc.code, exc.details)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(
        "Request validation failed", extra={"path": request.url.path, "method": request.method}
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        ErrorCode.VALIDATION_ERROR,
        validation_details(list(exc.errors())),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Route {request.url.path} not found"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = f"Method {request.method} not allowed on {request.url.path}"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message, code, headers=exc.headers)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error", extra={"path": request.url.path, "method": request.method}
    )
    details = {"type": type(exc).__name__} if settings.debug else None
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        ErrorCode.INTERNAL_ERROR,
        details,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install envelope-producing exception handlers on an app."""
    app.add_exception_handler(CatalogError, handle_catalog_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
