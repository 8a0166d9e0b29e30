"""
Custom Exception Classes for VidShare

This module defines the error taxonomy used by the services. Every error
carries an HTTP status code and a machine-readable error code so the
handlers in ``exception_handlers`` can shape a consistent JSON response.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in the ``error_code`` field."""

    # Authentication / authorization
    AUTH_FAILED = "AUTH_FAILED"
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    AUTH_TOKEN_INVALID = "AUTH_TOKEN_INVALID"
    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"

    # Resources
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_USER_NOT_FOUND = "RESOURCE_USER_NOT_FOUND"
    RESOURCE_VIDEO_NOT_FOUND = "RESOURCE_VIDEO_NOT_FOUND"
    RESOURCE_CHANNEL_NOT_FOUND = "RESOURCE_CHANNEL_NOT_FOUND"
    RESOURCE_PLAYLIST_NOT_FOUND = "RESOURCE_PLAYLIST_NOT_FOUND"

    # Validation
    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_INVALID_ID = "VALIDATION_INVALID_ID"
    VALIDATION_DUPLICATE_RESOURCE = "VALIDATION_DUPLICATE_RESOURCE"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Server
    DATABASE_ERROR = "DATABASE_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class VidShareError(Exception):
    """Base exception class for all VidShare errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Authentication & Authorization Exceptions
# ============================================================================


class AuthenticationError(VidShareError):
    """Raised when no valid identity accompanies a request that needs one"""

    def __init__(
        self,
        message: str = "Authentication required",
        details: dict[str, Any] | None = None,
        error_code: ErrorCode = ErrorCode.AUTH_FAILED,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code=error_code,
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid"""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message=message, error_code=ErrorCode.AUTH_INVALID_CREDENTIALS)


class TokenExpiredError(AuthenticationError):
    """Raised when JWT token has expired"""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message=message, error_code=ErrorCode.AUTH_TOKEN_EXPIRED)


class InvalidTokenError(AuthenticationError):
    """Raised when JWT token is invalid"""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message=message, error_code=ErrorCode.AUTH_TOKEN_INVALID)


class AuthorizationError(VidShareError):
    """Raised when user lacks permission for an action"""

    def __init__(
        self,
        message: str = "You do not have permission to perform this action",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code=ErrorCode.AUTH_PERMISSION_DENIED,
        )


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(VidShareError):
    """Base class for resource not found errors"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Any | None = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    ):
        message = f"{resource_type} not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
            error_code=error_code,
        )


class UserNotFoundError(ResourceNotFoundError):
    """Raised when a user is not found"""

    def __init__(self, user_id: Any | None = None):
        super().__init__(resource_type="User", resource_id=user_id, error_code=ErrorCode.RESOURCE_USER_NOT_FOUND)


class VideoNotFoundError(ResourceNotFoundError):
    """Raised when a video is not found"""

    def __init__(self, video_id: Any | None = None):
        super().__init__(resource_type="Video", resource_id=video_id, error_code=ErrorCode.RESOURCE_VIDEO_NOT_FOUND)


class ChannelNotFoundError(ResourceNotFoundError):
    """Raised when a channel is not found"""

    def __init__(self, user_id: Any | None = None):
        super().__init__(
            resource_type="Channel", resource_id=user_id, error_code=ErrorCode.RESOURCE_CHANNEL_NOT_FOUND
        )


class PlaylistNotFoundError(ResourceNotFoundError):
    """Raised when a playlist is not found"""

    def __init__(self, playlist_id: Any | None = None):
        super().__init__(
            resource_type="Playlist", resource_id=playlist_id, error_code=ErrorCode.RESOURCE_PLAYLIST_NOT_FOUND
        )


# ============================================================================
# Validation & Business Logic Exceptions
# ============================================================================


class ValidationError(VidShareError):
    """Raised when input validation fails"""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_FAILED,
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=error_details,
            error_code=error_code,
        )


class InvalidIdentifierError(ValidationError):
    """Raised when an identifier is not syntactically valid"""

    def __init__(self, resource_type: str, value: Any):
        super().__init__(
            message=f"Invalid {resource_type.lower()} ID format",
            field=f"{resource_type.lower()}_id",
            details={"value": str(value)},
            error_code=ErrorCode.VALIDATION_INVALID_ID,
        )


class DuplicateResourceError(VidShareError):
    """Raised when attempting to create a duplicate resource"""

    def __init__(self, resource_type: str, field: str, value: Any):
        super().__init__(
            message=f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            details={"resource_type": resource_type, "field": field, "value": value},
            error_code=ErrorCode.VALIDATION_DUPLICATE_RESOURCE,
        )


class ConcurrentModificationError(VidShareError):
    """Raised when a conditional update keeps losing to concurrent writers"""

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            message=f"{resource_type} was modified concurrently, please retry",
            status_code=status.HTTP_409_CONFLICT,
            details={"resource_type": resource_type, "resource_id": resource_id},
            error_code=ErrorCode.CONCURRENT_MODIFICATION,
        )


# ============================================================================
# Database & Service Exceptions
# ============================================================================


class DatabaseError(VidShareError):
    """Raised when a database operation fails"""

    def __init__(self, message: str = "A database error occurred", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code=ErrorCode.DATABASE_ERROR,
        )
