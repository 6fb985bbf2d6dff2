"""Error Handlers — global exception handlers for the Forms API.

Invariants:
    - FormsError → Error envelope with its code and http_status
    - RequestValidationError (path/query parsing) → Error envelope, one problem per field
    - Exception (catch-all) → generic 500 envelope, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (FormsError), validation (Pydantic), catch-all (Exception)
    - Handlers normally answer FormsError themselves (request pipeline); the global
      layer covers anything raised outside it, e.g. dependency setup
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from forms_api.core import envelope
from forms_api.core.errors import FormsError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_forms_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _register_forms_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(FormsError)
    async def forms_error_handler(request: Request, exc: FormsError):
        """Handle all Forms API domain/infrastructure errors."""
        logger.error(
            f"FormsError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "request_id": _request_id(request),
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"request_id": _request_id(request)},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"request_id": _request_id(request)},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=envelope.error(["internal error"], "INTERNAL_ERROR"),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build the Error envelope for parameter validation failures."""
    problems = [
        f"field {e['loc'][-1]} is not valid" for e in exc.errors()
    ] or ["invalid request"]
    return envelope.error(problems, "VALIDATION_ERROR")
