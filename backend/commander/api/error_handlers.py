"""Error Handlers — global exception handlers for the Commander API.

Invariants:
    - CommanderError → its own envelope and status: 404 missing command, 422 rejected
      patch, 500 invalid repository argument, 503 store failure
    - RequestValidationError → 400 listing each offending body/path/query field by its JSON name
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks exception text or traces
    - Duplicate howTo/line is NOT handled here: routes answer it with {"message": ...}

Design Decisions:
    - Log level follows severity: client mistakes are warnings, store and programming
      errors are errors with the request path attached
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from commander.core.errors import CommanderError, ErrorSeverity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.WARNING,
    ErrorSeverity.CRITICAL: logging.ERROR,
}

# FastAPI prefixes request-validation locations with where the value came from
_REQUEST_SOURCES = ("body", "path", "query")


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_commander_error_handler(app)
    _register_request_validation_handler(app)
    _register_unexpected_error_handler(app)


def _register_commander_error_handler(app: FastAPI) -> None:

    @app.exception_handler(CommanderError)
    async def commander_error_handler(request: Request, exc: CommanderError):
        """Missing command, rejected patch, invalid repository argument, or store failure."""
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"{request.method} {request.url.path} failed with {exc.code}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "command_id": exc.context.command_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_request_validation_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Malformed command body, out-of-range id, or bad query string."""
        details = _validation_details(exc)
        logger.warning(
            f"Rejected {request.method} {request.url.path}: "
            f"{', '.join(d['field'] for d in details)}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "The command request is invalid",
                    "category": "validation",
                    "severity": ErrorSeverity.ERROR.value,
                    "details": details,
                },
            },
        )


def _register_unexpected_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        """Anything the repository and session manager did not classify."""
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _validation_details(exc: RequestValidationError) -> list[dict]:
    """One entry per invalid field, located by JSON name ('howTo', 'command_id')."""
    details = []
    for e in exc.errors():
        loc = [str(part) for part in e["loc"]]
        if len(loc) > 1 and loc[0] in _REQUEST_SOURCES:
            source, loc = loc[0], loc[1:]
        else:
            source = loc[0] if loc else "body"
        details.append({
            "field": ".".join(loc) or source,
            "source": source,
            "message": e["msg"],
            "type": e["type"],
        })
    return details
