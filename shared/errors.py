"""Error taxonomy shared by every service, plus the handlers that turn
errors into the `{success, message}` response envelope."""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class BazaarError(Exception):
    """Base exception for all domain errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(BazaarError):
    """Malformed or missing input, bad enum value, out-of-range field."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class AuthenticationError(BazaarError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized, token failed"


class AuthorizationError(BazaarError):
    """Raised when the actor does not own the resource it is acting on."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized to perform this action"


class NotFoundError(BazaarError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(BazaarError):
    """The operation is not allowed in the resource's current state."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InvalidTransitionError(ConflictError):
    """Raised when an order status change is not in the legal graph."""

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Cannot change status from {from_status} to {to_status}")


class InternalError(BazaarError):
    pass


def _envelope(message: str, errors: list | None = None) -> dict:
    content = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return content


async def bazaar_error_handler(request: Request, exc: BazaarError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error("internal_error", path=request.url.path, error=str(exc))
        # Never leak storage details to the client
        return JSONResponse(status_code=exc.status_code, content=_envelope(InternalError.default_message))
    return JSONResponse(status_code=exc.status_code, content=_envelope(exc.message, exc.errors))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        errors.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(ValidationError.default_message, errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(InternalError.default_message),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BazaarError, bazaar_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
