"""
FastAPI exception handlers for structured error responses.

Converts TutorhubException instances (and the framework's own exceptions)
into the minimal {"error_code", "message"} JSON body sent to clients.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback
import logging

from tutorhub_backend.exceptions.exceptions import (
    TutorhubException,
    BadRequestException,
    InternalServerException,
)
from tutorhub_backend.settings import settings
from tutorhub_backend.utils.alerts import create_failure_alert


logger = logging.getLogger(__name__)


async def tutorhub_exception_handler(request: Request, exc: TutorhubException) -> JSONResponse:
    """
    Handle TutorhubException instances.

    Debug information (file paths, function names, line numbers) is only
    included when DEBUG_MODE is a development mode.
    """
    include_debug = settings.include_debug_info

    error_response = exc.to_error_response(include_debug=include_debug)

    log_error(request, exc)

    response_data = {
        "error_code": error_response.error_code,
        "message": error_response.message,
    }

    if include_debug and error_response.debug:
        response_data["debug"] = error_response.debug.model_dump(exclude_none=True)

    headers = dict(exc.headers or {})
    if exc.context.get("error_key"):
        headers.update(create_failure_alert(exc.context.get("entity_name"), exc.context["error_key"]))

    return JSONResponse(
        status_code=exc.status_code,
        content=response_data,
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Convert request validation errors into a 400 with per-field details."""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(x) for x in error["loc"][1:])  # Skip 'body'/'query' prefix
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    exception = BadRequestException(
        detail="Request validation failed",
        context={"validation_errors": errors}
    )
    error_response = exception.to_error_response()

    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={"validation_errors": errors}
    )

    response_data = {
        "error_code": error_response.error_code,
        "message": error_response.message,
    }

    if errors:
        response_data["details"] = {"validation_errors": errors}

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=response_data,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Map plain HTTPExceptions (e.g. unknown routes) onto TutorhubException types."""
    from tutorhub_backend.exceptions.exceptions import (
        UnauthorizedException,
        ForbiddenException,
        NotFoundException,
        ConflictException,
    )

    exception_map = {
        status.HTTP_400_BAD_REQUEST: BadRequestException,
        status.HTTP_401_UNAUTHORIZED: UnauthorizedException,
        status.HTTP_403_FORBIDDEN: ForbiddenException,
        status.HTTP_404_NOT_FOUND: NotFoundException,
        status.HTTP_409_CONFLICT: ConflictException,
    }

    exception_class = exception_map.get(exc.status_code)
    if exception_class is None:
        # Statuses without a registry entry (405, 429, ...) keep their code
        return JSONResponse(
            status_code=exc.status_code,
            content={"error_code": f"HTTP_{exc.status_code}", "message": str(exc.detail)},
            headers=getattr(exc, "headers", None) or {},
        )

    tutorhub_exc = exception_class(
        detail=exc.detail,
        headers=getattr(exc, "headers", None),
    )

    return await tutorhub_exception_handler(request, tutorhub_exc)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions with traceback and return a generic 500."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc,
    )

    exception = InternalServerException(
        detail="An unexpected error occurred",
        context={
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        }
    )

    include_debug = settings.include_debug_info
    if include_debug:
        exception.context["traceback"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )

    error_response = exception.to_error_response(include_debug=include_debug)

    response_data = {
        "error_code": error_response.error_code,
        "message": error_response.message,
    }

    if include_debug and error_response.debug:
        response_data["debug"] = error_response.debug.model_dump(exclude_none=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response_data,
    )


def log_error(request: Request, exception: TutorhubException) -> None:
    """Log a handled error; level follows the status code."""
    log_data = {
        "error_code": exception.error_code,
        "status_code": exception.status_code,
        "method": request.method,
        "path": request.url.path,
        "user_id": exception.user_id,
        "function": exception.function_name,
        "context": exception.context,
    }

    if exception.status_code >= 500:
        logger.error(
            f"Server error: {exception.error_code}",
            extra=log_data,
            exc_info=True,
        )
    elif exception.status_code >= 400:
        logger.warning(
            f"Client error: {exception.error_code}",
            extra=log_data,
        )
    else:
        logger.info(
            f"Error: {exception.error_code}",
            extra=log_data,
        )


def register_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(TutorhubException, tutorhub_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Registered custom exception handlers")
