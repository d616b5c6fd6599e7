from http import HTTPStatus
from mentorhub.common.fast_api_response_wrapper import api_response
from mentorhub.common.errors import (
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
)
from mentorhub.common.logger import get_logger
from fastapi import Request, FastAPI
from fastapi.exceptions import RequestValidationError

logger = get_logger()


async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler used to convert Python exceptions into a unified API response.
    It also performs structured logging while preventing sensitive information from leaking
    to the client.
    """

    # ValidationError is a ValueError and ExternalServiceError is a RuntimeError,
    # so both fall into the generic cases below.
    match exc:
        case UnauthorizedError():
            status = HTTPStatus.UNAUTHORIZED
        case ForbiddenError():
            status = HTTPStatus.FORBIDDEN
        case NotFoundError():
            status = HTTPStatus.NOT_FOUND
        case ConflictError():
            status = HTTPStatus.CONFLICT
        case ValueError() | RequestValidationError():
            status = HTTPStatus.BAD_REQUEST
        case RuntimeError():
            status = HTTPStatus.SERVICE_UNAVAILABLE
        case _:
            status = HTTPStatus.INTERNAL_SERVER_ERROR

    # /api/<area>/... -> area
    parts = request.url.path.strip("/").split("/")
    area = parts[1] if len(parts) > 1 else "unknown"
    is_server_error = status >= 500

    log_msg = str(exc)

    if is_server_error:
        user_message = "Internal Server Error. Please contact support."
    elif isinstance(exc, RequestValidationError):
        first_error = exc.errors()[0]
        user_message = (
            f"Validation Error: {first_error.get('loc', [])[-1]} - "
            f"{first_error.get('msg')}"
        )
    else:
        user_message = str(exc)

    # Full stack traces are logged only for server-side errors.
    log_method = logger.error if is_server_error else logger.warning
    log_method(
        "[%s] %s on area [%s]: %s",
        "Server Error" if is_server_error else "Client Error",
        type(exc).__name__,
        area,
        log_msg,
        exc_info=is_server_error,
    )

    return api_response(
        success=False,
        message=user_message,
        status_code=status,
    )


def register_exception_handlers(app: FastAPI):
    """
    Registers the global exception handlers on the provided FastAPI application.
    This ensures unexpected exceptions are consistently processed and returned
    in the standard API response format.

    Domain errors are registered explicitly so they are answered by the
    exception middleware; only the bare `Exception` entry falls through to
    Starlette's server error middleware.
    """
    for exc_cls in (
        Exception,
        RequestValidationError,
        UnauthorizedError,
        ForbiddenError,
        NotFoundError,
        ConflictError,
        ValueError,
        RuntimeError,
    ):
        app.add_exception_handler(exc_cls, global_exception_handler)
