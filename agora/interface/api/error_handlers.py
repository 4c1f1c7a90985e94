"""Exception handlers rendering the error envelope.

Routes translate domain errors into ``HTTPException``; these handlers only
decide how failures look on the wire. Bad input (400) is flagged as a form
error so clients can show it next to the form.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from agora.interface.api.response import ErrorResponse


def _error(status_code: int, message: str) -> JSONResponse:
    is_form_error = status_code == status.HTTP_400_BAD_REQUEST
    body = ErrorResponse(error=message, is_form_error=is_form_error or None)
    return JSONResponse(status_code=status_code, content=body.to_content())


def _describe(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts) or "Invalid request"


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = _describe(exc)
    logfire.info("Malformed request", path=request.url.path, error=message)
    return _error(status.HTTP_400_BAD_REQUEST, message)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logfire.exception("Unhandled error", path=request.url.path, error=str(exc))
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on an app.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected)
