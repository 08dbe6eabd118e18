"""
Error Handling Module

Defines domain exceptions and error categories for the application.
Domain exceptions are pure and have no external dependencies.
Application exceptions bridge them to user-facing messages and HTTP responses.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    FILE_NOT_FOUND = "file_not_found"
    INVALID_PASSWORD = "invalid_password"
    FILE_GONE = "file_gone"
    FILE_TOO_LARGE = "file_too_large"
    INVALID_REQUEST = "invalid_request"
    SYSTEM_ERROR = "system_error"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.FILE_NOT_FOUND: {
        "title": "File Not Found",
        "message": "No file is shared under this code, or it has expired.",
        "action": "Check the code for typos or ask the sender to upload the file again.",
    },
    ErrorCategory.INVALID_PASSWORD: {
        "title": "Incorrect Password",
        "message": "This file is password protected and the password did not match.",
        "action": "Ask the sender for the correct password and try again.",
    },
    ErrorCategory.FILE_GONE: {
        "title": "File Already Retrieved",
        "message": "This file has already been retrieved and destroyed.",
        "action": "Ask the sender to share the file again.",
    },
    ErrorCategory.FILE_TOO_LARGE: {
        "title": "File Too Large",
        "message": "The uploaded file exceeds the maximum allowed size.",
        "action": "Compress the file or split it into smaller parts.",
    },
    ErrorCategory.INVALID_REQUEST: {
        "title": "Invalid Request",
        "message": "The request is missing required information or contains invalid data.",
        "action": "Please check your input and try again.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions are pure and have no external dependencies.
    They can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error


class FileNotFoundError(DomainError):
    """Raised when a share code is unknown, malformed or already reaped."""
    pass


class InvalidPasswordError(DomainError):
    """Raised when a protected file is requested with the wrong password."""
    pass


class FileGoneError(DomainError):
    """
    Raised when a file existed but its download quota is exhausted.

    Distinct from FileNotFoundError because the code did resolve.
    """
    pass


class PayloadTooLargeError(DomainError):
    """Raised when an upload stream exceeds the configured size ceiling."""

    def __init__(self, max_bytes: int, original_error: Exception = None):
        super().__init__(
            f"Upload exceeds the limit of {max_bytes} bytes", original_error
        )
        self.max_bytes = max_bytes


class RegistryFullError(DomainError):
    """Raised when no free share code could be found."""
    pass


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    Bridges domain errors with user-facing error messages and HTTP responses.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
    ):
        self.category = category
        self.technical_message = technical_message or ""

        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API response."""
        return {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    The technical message is kept on the error object for logging and is
    never part of the response body.

    Args:
        category: Error category
        technical_message: Technical error details for logging
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message)
    return error.to_dict(), status_code
