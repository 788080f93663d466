# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code, an HTTP status and, where
# possible, a suggestion telling the caller how to recover.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class UserbaseException(Exception):
    """
    Base exception for the Userbase API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "USERBASE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Avatar Exceptions
# =============================================================================

class AvatarNotFoundError(UserbaseException):
    """Raised when no avatar record exists for a subject."""

    def __init__(self, subject_id: str):
        super().__init__(
            message=f"User avatar not found: {subject_id}",
            code="AVATAR_NOT_FOUND",
            status_code=404,
            suggestion="Request GET /users/{id}/avatar to populate the avatar first",
            details={"subject_id": subject_id}
        )


class AvatarConflictError(UserbaseException):
    """Raised when an avatar record already exists for a subject."""

    def __init__(self, subject_id: str):
        super().__init__(
            message=f"User avatar already exists: {subject_id}",
            code="AVATAR_CONFLICT",
            status_code=409,
            suggestion="Delete the existing avatar with DELETE /users/{id}/avatar before uploading a new one",
            details={"subject_id": subject_id}
        )


class OriginUnavailableError(UserbaseException):
    """Raised when an upstream origin can't be reached or returns a non-success status."""

    def __init__(self, url: str, error: str, upstream_status: int | None = None):
        details: dict[str, Any] = {"url": url, "error": error}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(
            message=f"Upstream origin unavailable: {error}",
            code="ORIGIN_UNAVAILABLE",
            status_code=502,
            suggestion="The upstream service failed, not your request. Try again later",
            details=details
        )


class StorageError(UserbaseException):
    """Raised when blob or metadata storage I/O fails."""

    def __init__(self, operation: str, target: str, error: str):
        super().__init__(
            message=f"Storage {operation} failed for {target}: {error}",
            code="STORAGE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation, "target": target, "error": error}
        )


# =============================================================================
# User Exceptions
# =============================================================================

class UserNotFoundError(UserbaseException):
    """Raised when a user ID doesn't exist in the user directory."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the user_id is correct",
            details={"user_id": user_id}
        )


class UserAlreadyExistsError(UserbaseException):
    """Raised when creating a user whose email is already registered."""

    def __init__(self, email: str):
        super().__init__(
            message="User with email already exists",
            code="USER_ALREADY_EXISTS",
            status_code=409,
            suggestion="Use a different email address",
            details={"email": email}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(UserbaseException):
    """Raised when uploaded avatar content type is not allowed."""

    def __init__(self, content_type: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid avatar type: {content_type}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these content types are supported: {', '.join(allowed)}",
            details={"content_type": content_type, "allowed_types": allowed}
        )


class FileTooLargeError(UserbaseException):
    """Raised when uploaded avatar exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def userbase_exception_handler(
    request: Request,
    exc: UserbaseException
) -> JSONResponse:
    """
    Convert UserbaseException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
