"""
Error taxonomy and the handlers that render it.

Every error leaves the API as ``{"error": message}`` with the status code of
its class. Services raise these directly; anything else that escapes a
handler is logged and turned into a 500.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from projtrackr.config.settings import settings

logger = logging.getLogger(__name__)


class ProjTrackrError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(status_code=self.status_code, detail=message or self.default_message)


class ValidationError(ProjTrackrError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthorized(ProjTrackrError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(ProjTrackrError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ProviderError(ProjTrackrError):
    """The identity provider rejected the request (duplicate email, weak password, ...)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Identity provider rejected the request"


class InternalError(ProjTrackrError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers so no error leaves the app without an {"error": ...} body."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _format_validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        if settings.is_production:
            return JSONResponse(status_code=500, content={"error": "Internal server error"})
        return JSONResponse(status_code=500, content={"error": str(exc)})
