"""Exceptions shared by the persistence, service and HTTP layers.

``StoreError`` and ``UniqueConstraintViolation`` come out of the query
executor and describe failures of the relational store. ``NotFoundError``
and ``ConflictError`` are raised by the service layer so that it can
signal outcomes without knowing about HTTP status codes; the FastAPI
application turns them into JSON responses.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a statement cannot be executed against the store."""


class UniqueConstraintViolation(StoreError):
    """Raised when a statement violates a uniqueness constraint."""


class ServiceError(Exception):
    code = "ERROR"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content={"error": {"code": self.code, "message": self.message}},
        )


class NotFoundError(ServiceError):
    """Raised when a resource owned by the current user cannot be found."""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, message: str = "Not found.") -> None:
        super().__init__(message)


class ConflictError(ServiceError):
    """Raised when a uniqueness rule would be broken."""

    code = "CONFLICT"
    status_code = 409


class UnauthorizedError(ServiceError):
    """Raised when a request needs a signed-in user or credentials are wrong."""

    code = "UNAUTHORIZED"
    status_code = 401


def register_error_handlers(app: FastAPI) -> None:
    """Register JSON error handlers on the given FastAPI app."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, err: ServiceError):
        return err.to_response()

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, err: StoreError):
        logger.error(
            "store error while handling %s %s",
            request.method,
            request.url.path,
            exc_info=err,
        )
        return JSONResponse(
            status_code=500,
            content={"error": {"code": "STORE_ERROR", "message": "Something went wrong."}},
        )
