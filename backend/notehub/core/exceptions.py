"""
Custom exception classes for unified error handling.

Every AppBaseError carries its own HTTP status; `register_exception_handlers`
turns them into `{"error": ..., "detail": ..., "type": ...}` JSON bodies.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppBaseError(Exception):
    """Base exception for all application errors."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class MissingFileError(AppBaseError):
    """Raised when an upload request carries no file part."""
    def __init__(self, message: str = "No file uploaded."):
        super().__init__(message=message)


class UnsupportedFileTypeError(AppBaseError):
    """Raised when the uploaded file is not a PDF."""
    def __init__(self, content_type: str | None):
        super().__init__(
            message="Only PDF files are allowed!",
            detail=f"Received content type: {content_type or 'unknown'}",
        )


class FileTooLargeError(AppBaseError):
    """Raised when the uploaded file exceeds MAX_UPLOAD_BYTES."""
    status_code = 413

    def __init__(self, max_bytes: int):
        super().__init__(
            message="File too large.",
            detail=f"Maximum upload size is {max_bytes // (1024 * 1024)}MB.",
        )


class InvalidBranchError(AppBaseError):
    """Raised when the branch is not one of the known disciplines."""
    def __init__(self, branch: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid branch '{branch}'.",
            detail=f"Must be one of: {', '.join(allowed)}",
        )


class ContentFlaggedError(AppBaseError):
    """Raised when topic/description fails the keyword moderation check."""
    def __init__(self, field: str | None = None):
        super().__init__(
            message="Content flagged by moderation system.",
            detail=f"Field '{field}' contains a banned term." if field else None,
        )


class StoreError(AppBaseError):
    """Raised when the note store or blob store fails.

    The underlying error message is passed through to the caller unchanged.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message=message, detail=detail)


# ── FastAPI handlers ─────────────────────────────────────

def register_exception_handlers(app: FastAPI) -> None:
    """Render AppBaseError and request-validation failures as JSON errors."""

    @app.exception_handler(AppBaseError)
    async def app_error_handler(request: Request, exc: AppBaseError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        else:
            logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "detail": exc.detail,
                "type": type(exc).__name__,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        missing = [".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()]
        logger.warning(f"Invalid request on {request.url.path}: {missing}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request.",
                "detail": f"Missing or invalid fields: {', '.join(missing)}",
                "type": "RequestValidationError",
            },
        )
