"""
Exception types and HTTP error helpers.

Storage and services raise the domain exceptions below; the API layer turns
them into HTTP responses. Every error response body has the same shape:
{"message": "<text>"}.
"""
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class InvoicelyError(Exception):
    """Base class for domain errors."""


class NotFoundError(InvoicelyError):
    """Raised when an entity addressed by id does not exist."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")
        self.resource = resource


class ValidationError(InvoicelyError):
    """Raised when a payload is well-formed but breaks a business rule."""


class BusinessError:
    """HTTPException factories with consistent logging."""

    @staticmethod
    def bad_request(detail: str) -> HTTPException:
        """
        400 for input validation / business logic errors.

        OK to include specific details here since user caused the issue.
        Examples: "Invoice not found", "Quantity must be greater than 0"
        """
        logger.info(f"Bad request: {detail}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

    @staticmethod
    def not_found(resource: str = "Resource") -> HTTPException:
        logger.info(f"Not found: {resource}")
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )

    @staticmethod
    def server_error(original_error: Exception = None) -> HTTPException:
        """
        Generic 500 - logs actual error internally, hides from user.
        """
        if original_error:
            logger.error(
                f"Internal server error: {type(original_error).__name__}: {str(original_error)}",
                exc_info=True
            )
        else:
            logger.error("Internal server error occurred", exc_info=True)

        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred. Please try again later.",
        )


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Collapse pydantic's error list into one readable line."""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        msg = err.get("msg", "Invalid value")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers producing {"message": ...} bodies."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _format_validation_errors(exc)
        logger.info(f"Validation failed on {request.method} {request.url.path}: {message}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})

    @app.exception_handler(InvoicelyError)
    async def domain_exception_handler(request: Request, exc: InvoicelyError):
        # Missing entities surface as 400, same as other client mistakes
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An internal error occurred. Please try again later."},
        )
