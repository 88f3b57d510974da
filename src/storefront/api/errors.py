"""Exception-to-response mapping.

Every error body has the shape ``{"error": "message"}`` or, for field-level
failures, ``{"error": {"field": ["message", ...]}}``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.exceptions import AccessDeniedError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _error(status_code: int, error) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error})


def _not_found_message(exc: ObjectNotFoundError) -> str:
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict) and messages.get("_entity"):
        return str(messages["_entity"])
    return "Not found"


def _request_field_errors(exc: RequestValidationError) -> dict:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" location segment
        location = [str(part) for part in error.get("loc", ())[1:]] or ["request"]
        errors.setdefault(".".join(location), []).append(error.get("msg", "Invalid value"))
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return _error(400, exc.messages)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return _error(400, _request_field_errors(exc))

    @app.exception_handler(ObjectNotFoundError)
    async def handle_not_found(request: Request, exc: ObjectNotFoundError):
        return _error(404, _not_found_message(exc))

    @app.exception_handler(AccessDeniedError)
    async def handle_access_denied(request: Request, exc: AccessDeniedError):
        return _error(403, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception(
            "Unhandled error",
            method=request.method,
            path=request.url.path,
            error_type=type(exc).__name__,
            user_id=getattr(request.state, "user_id", None),
        )
        return _error(500, "Internal server error")
