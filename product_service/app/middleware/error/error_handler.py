"""
Error handling for Product Service.
Maps every failure to the uniform error envelope:
{timestamp, status, error, message, path, errors?}.
"""

from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...core.exceptions import ProductNotFoundError, ProductValidationError
from ...core.setting import get_settings
from ...models.base import utc_now
from ...schemas.product import ErrorResponse
from ...utils.logging import setup_product_logging as setup_logging

logger = setup_logging(
    "product_service.error_handler", log_level=get_settings().LOG_LEVEL
)

VALIDATION_FAILED = "Validation Failed"
INVALID_INPUT_MESSAGE = "Invalid input data"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _format_request_errors(exc: RequestValidationError) -> List[str]:
    """Render schema errors as ``"<field>: <reason>"`` like field validation does"""
    messages: List[str] = []
    for error in exc.errors():
        # Drop the leading "body" segment, keep nested positions
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field_name = ".".join(location) or "body"
        messages.append(f"{field_name}: {error.get('msg', 'Invalid value')}")
    return messages


def build_error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    errors: Optional[List[str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    payload = ErrorResponse(
        timestamp=utc_now(),
        status=status_code,
        error=error,
        message=message,
        path=request.url.path,
        errors=errors,
    )
    content: Dict[str, Any] = payload.model_dump(mode="json", exclude_none=True)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


class ProductServiceErrorHandler:
    """Centralized exception-to-response mapping for every route."""

    @staticmethod
    def setup_error_handlers(app: FastAPI) -> None:
        @app.exception_handler(ProductValidationError)
        async def product_validation_handler(
            request: Request, exc: ProductValidationError
        ) -> JSONResponse:
            logger.warning(
                "Validation error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "validation_errors": exc.errors,
                },
            )
            return build_error_response(
                request, 400, VALIDATION_FAILED, INVALID_INPUT_MESSAGE, exc.errors
            )

        @app.exception_handler(RequestValidationError)
        async def request_validation_handler(
            request: Request, exc: RequestValidationError
        ) -> JSONResponse:
            errors = _format_request_errors(exc)
            logger.warning(
                "Request validation error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "validation_errors": errors,
                },
            )
            return build_error_response(
                request, 400, VALIDATION_FAILED, INVALID_INPUT_MESSAGE, errors
            )

        @app.exception_handler(ProductNotFoundError)
        async def product_not_found_handler(
            request: Request, exc: ProductNotFoundError
        ) -> JSONResponse:
            logger.warning(
                f"Product not found: {exc}",
                extra={"path": request.url.path, "method": request.method},
            )
            return build_error_response(request, 404, "Not Found", str(exc))

        @app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(
            request: Request, exc: StarletteHTTPException
        ) -> JSONResponse:
            return build_error_response(
                request,
                exc.status_code,
                _reason_phrase(exc.status_code),
                str(exc.detail),
                headers=exc.headers,
            )

        @app.exception_handler(Exception)
        async def unexpected_exception_handler(
            request: Request, exc: Exception
        ) -> JSONResponse:
            logger.error(
                "Unexpected error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                },
                exc_info=exc,
            )
            return build_error_response(
                request, 500, "Internal Server Error", UNEXPECTED_ERROR_MESSAGE
            )


def setup_product_error_handling(app: FastAPI) -> None:
    """Register the product service exception handlers on ``app``."""
    ProductServiceErrorHandler.setup_error_handlers(app)
    logger.info("Product Service error handling configured")
