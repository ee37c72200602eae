"""
errors.py — Application error taxonomy
Services raise these; the handlers registered on the app turn them into
JSON responses with the matching status code.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class JournalError(Exception):
    """Base class for errors the HTTP layer can report to the caller."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class NotFoundError(JournalError):
    status_code = 404


class ConflictError(JournalError):
    status_code = 409


class InvalidCatalogDataError(JournalError):
    """An achievement definition with a threshold that can never be evaluated."""

    status_code = 422


class TransientStorageError(JournalError):
    """A transactional write did not complete and was rolled back. Safe to retry."""

    status_code = 503


class AIUnavailableError(JournalError):
    status_code = 503


def register_error_handlers(app: FastAPI):
    """Install the JSON error handler for every JournalError subclass."""

    @app.exception_handler(JournalError)
    async def journal_error_handler(request: Request, exc: JournalError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
