# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Global Error Handler
Converts all unhandled exceptions into structured JSON error responses.
Registered on the FastAPI app in main.py.

The exception classes below are raised by the filtering core as well;
each subclasses the builtin it refines so library callers can catch
ValueError / IndexError without importing this module.
"""

from __future__ import annotations

import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from gms_filter.utils.logger import get_logger

log = get_logger(__name__)


class GridPreconditionError(ValueError):
    """Raised when a grid cannot be built (zero-sized image or grid)."""


class MatchIndexError(IndexError):
    """Raised when a putative match references a keypoint that does not exist."""


class ImageLoadError(ValueError):
    """Raised when an image file cannot be read or decoded."""


class RequestTooLargeError(ValueError):
    """Raised when a filter request exceeds the configured keypoint limit."""


def _error_body(code: str, message: str, detail: str | None = None) -> dict:
    body = {"error": {"code": code, "message": message}}
    if detail:
        body["error"]["detail"] = detail
    return body


def register_error_handlers(app: FastAPI) -> None:
    """
    Register all global exception handlers on the FastAPI application.
    Call this in main.py after creating the app instance.
    """

    @app.exception_handler(GridPreconditionError)
    async def grid_precondition_handler(
        req: Request, exc: GridPreconditionError
    ) -> JSONResponse:
        log.warning("grid_precondition_error", path=str(req.url), error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body(
                code="GRID_PRECONDITION_ERROR",
                message=str(exc),
            ),
        )

    @app.exception_handler(MatchIndexError)
    async def match_index_handler(
        req: Request, exc: MatchIndexError
    ) -> JSONResponse:
        log.warning("match_index_error", path=str(req.url), error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body(
                code="MATCH_INDEX_ERROR",
                message=str(exc),
            ),
        )

    @app.exception_handler(RequestTooLargeError)
    async def request_too_large_handler(
        req: Request, exc: RequestTooLargeError
    ) -> JSONResponse:
        log.warning("request_too_large", path=str(req.url), error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content=_error_body(
                code="REQUEST_TOO_LARGE",
                message=str(exc),
            ),
        )

    @app.exception_handler(Exception)
    async def generic_handler(req: Request, exc: Exception) -> JSONResponse:
        tb = traceback.format_exc()
        log.error(
            "unhandled_exception",
            path=str(req.url),
            error=str(exc),
            exc_type=type(exc).__name__,
            traceback=tb,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred.",
            ),
        )
