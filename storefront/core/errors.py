# storefront/core/errors.py
"""
Error taxonomy of the storefront.

Services and routers raise these; the handlers registered in main.py turn
them into `{"error": "<message>"}` responses with the matching status code.
Upstream details never reach the client, they are logged where caught.
"""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(StorefrontError):
    status_code = 400
    default_message = "Invalid request"


class ProductNotFoundError(StorefrontError):
    status_code = 404
    default_message = "Product not found"


class AIServiceUnavailableError(StorefrontError):
    status_code = 502
    default_message = "AI service unavailable"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return _error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Bad bodies are input errors (400), never FastAPI's default 422
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"Invalid field '{loc}': {first.get('msg')}" if loc else "Invalid request body"
    logger.info("%s %s -> 400 %s", request.method, request.url.path, message)
    return _error_response(400, message)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, "Internal server error")
