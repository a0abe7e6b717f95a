"""Envelope helpers — translate results and domain exceptions into API responses."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from static_cms.application.schemas import ApiResponse
from static_cms.domain.exceptions import (
    EntityNotFoundError,
    EntityNotPublishedError,
    InvalidRetentionError,
    StaticBuildError,
    StaticWriteError,
    TemplateError,
    ThemeSwitchError,
)

logger = logging.getLogger(__name__)

# Checked in order; subclasses before their bases.
_ERROR_KINDS: list[tuple[type[Exception], str, int]] = [
    (EntityNotFoundError, "not_found", status.HTTP_404_NOT_FOUND),
    (EntityNotPublishedError, "not_published", status.HTTP_409_CONFLICT),
    (TemplateError, "template_error", status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StaticWriteError, "io_failure", status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StaticBuildError, "build_failed", status.HTTP_500_INTERNAL_SERVER_ERROR),
    (InvalidRetentionError, "invalid_request", status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ThemeSwitchError, "invalid_request", status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ValueError, "invalid_request", status.HTTP_422_UNPROCESSABLE_ENTITY),
]

# Exceptions endpoints translate into an error envelope instead of raising.
HANDLED_ERRORS: tuple[type[Exception], ...] = tuple(exc for exc, _, _ in _ERROR_KINDS)


def ok(data: Any = None, message: str = "success") -> ApiResponse:
    return ApiResponse(code=status.HTTP_200_OK, message=message, data=data)


def error_response(exc: Exception) -> JSONResponse:
    """Map a domain exception onto ``(error kind, HTTP status)`` and wrap it."""
    for exc_type, kind, http_status in _ERROR_KINDS:
        if isinstance(exc, exc_type):
            break
    else:
        kind, http_status = "build_failed", status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.info("Request failed (%s): %s", kind, exc)
    return _envelope(http_status, kind, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed paths, queries and bodies as ``invalid_request`` envelopes."""
    message = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return _envelope(status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid_request", message)


def _envelope(http_status: int, kind: str, message: str) -> JSONResponse:
    body = ApiResponse(code=http_status, message=message, data=None, error=kind)
    return JSONResponse(status_code=http_status, content=body.model_dump(mode="json"))
