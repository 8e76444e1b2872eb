"""Map exceptions to the ``{"success": false, "error": ...}`` envelope."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.errors import StorefrontError

logger = structlog.get_logger(__name__)


def error_response(status_code: int, message: str, details=None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content)


def _first_message(messages: dict) -> str:
    for field_name, errors in messages.items():
        if isinstance(errors, (list, tuple)) and errors:
            return str(errors[0]) if field_name.startswith("_") else f"{field_name}: {errors[0]}"
        if errors:
            return f"{field_name}: {errors}"
    return "Invalid input"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("storefront_error", path=request.url.path, error=exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        messages = exc.messages if isinstance(exc.messages, dict) else {"_input": [str(exc.messages)]}
        return error_response(400, _first_message(messages), details=messages)

    @app.exception_handler(ObjectNotFoundError)
    async def not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return error_response(404, "Resource not found")

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()]
        message = "Invalid input"
        if errors:
            location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
            message = f"{location}: {errors[0].get('msg')}" if location else str(errors[0].get("msg"))
        return error_response(400, message, details=errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
        return error_response(500, "Server Error")
