#roilens/domain/common/errors.py

"""
Domain-specific error types for standardized error handling.

Every failure that crosses a component boundary is described by a DomainError
carried inside a failed Result. The only errors that are raised instead are
wrapped in a DomainException (currently just invalid queue payloads).
"""
from enum import Enum
from typing import Optional, Dict, Any


class ErrorCategory(Enum):
    """Categories of errors in the application."""
    VALIDATION = "Validation"
    CONFIGURATION = "Configuration"
    PLATFORM = "Platform"
    RESOURCE = "Resource"
    TRANSIENT = "Transient"
    UPSTREAM = "Upstream"
    UI = "UI"
    UNKNOWN = "Unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"
    CRITICAL = "Critical"


class ErrorCode:
    """Stable codes for programmatic handling of known failures."""
    INVALID_IMAGE_DATA = "invalid_image_data"
    NO_REGION_DEFINED = "no_region_defined"
    NO_API_KEY = "no_api_key"
    MISSING_CREDENTIALS_OR_IMAGES = "missing_credentials_or_images"
    EMPTY_QUEUE = "empty_queue"
    SOURCE_NOT_FOUND = "source_not_found"
    NO_DISPLAY = "no_display"
    CAPTURE_FAILED = "capture_failed"
    SELECTION_CANCELLED = "selection_cancelled"
    SELECTION_CLOSED = "selection_closed"
    SELECTION_FAILED = "selection_failed"
    EMPTY_RESPONSE = "empty_response"
    INVALID_CREDENTIAL = "invalid_credential"
    RATE_LIMITED = "rate_limited"
    MODEL_UNAVAILABLE = "model_unavailable"
    UPSTREAM_FAILURE = "upstream_failure"
    DISPATCH_IN_PROGRESS = "dispatch_in_progress"


class DomainError:
    """
    Base class for domain-specific errors.

    This provides structured error information that can be used
    for consistent error handling, logging, and user feedback.
    """

    def __init__(self,
                 message: str,
                 category: ErrorCategory = ErrorCategory.UNKNOWN,
                 severity: ErrorSeverity = ErrorSeverity.ERROR,
                 code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None):
        """
        Initialize a domain error.

        Args:
            message: Human-readable error message
            category: Error category
            severity: Error severity
            code: Optional error code from ErrorCode
            details: Optional additional error details
            inner_error: Optional original exception
        """
        self.message = message
        self.category = category
        self.severity = severity
        self.code = code
        self.details = details or {}
        self.inner_error = inner_error

    def __str__(self) -> str:
        return f"{self.category.value} Error: {self.message}"


class ValidationError(DomainError):
    """Error for malformed input (bad queue payload, malformed region)."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, inner_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            code=code,
            details=details,
            inner_error=inner_error
        )


class ConfigurationError(DomainError):
    """Error for something the user has not set up yet (no region, no API key)."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, inner_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.ERROR,
            code=code,
            details=details,
            inner_error=inner_error
        )


class PlatformError(DomainError):
    """Error for display or windowing system issues."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, inner_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.PLATFORM,
            severity=ErrorSeverity.ERROR,
            code=code,
            details=details,
            inner_error=inner_error
        )


class ResourceError(DomainError):
    """Error for resource access or availability issues (capture sources, bitmaps)."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, inner_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.RESOURCE,
            severity=ErrorSeverity.ERROR,
            code=code,
            details=details,
            inner_error=inner_error
        )


class TransientError(DomainError):
    """Error the caller may retry later, e.g. a rate limit."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, inner_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.TRANSIENT,
            severity=ErrorSeverity.WARNING,
            code=code,
            details=details,
            inner_error=inner_error
        )


class UpstreamError(DomainError):
    """Error reported by the external model service."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, inner_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.UPSTREAM,
            severity=ErrorSeverity.ERROR,
            code=code,
            details=details,
            inner_error=inner_error
        )


class UIError(DomainError):
    """Error for UI-related issues, including an abandoned region selection."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, inner_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.UI,
            severity=ErrorSeverity.WARNING,
            code=code,
            details=details,
            inner_error=inner_error
        )


class DomainException(Exception):
    """Raised form of a DomainError, for programming errors by the caller."""

    def __init__(self, error: DomainError):
        super().__init__(error.message)
        self.error = error


class InvalidInputException(DomainException):
    """Raised when a caller hands a component data it must never accept."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(ValidationError(message=message, code=code, details=details))
