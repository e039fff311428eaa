"""
Error types for the ourmemories application.

Every error raised by the services carries:

- a category and severity, for logging and for the UI error panel
- a short machine-readable ``code`` (``missing_required_fields``, ``photo_not_found``, ...)
- a ``user_message`` safe to show in the Streamlit UI
- the HTTP ``status_code`` the JSON API answers with

Subclasses only declare these defaults; construction and logging live in
OurMemoriesError.
"""

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from .logging_config import get_logger, log_error

logger = get_logger(__name__)


class ErrorCategory(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UPLOAD = "upload"
    STORAGE = "storage"
    CONFIGURATION = "configuration"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


USER_MESSAGES = {
    ErrorCategory.VALIDATION: "Please check the information you entered.",
    ErrorCategory.NOT_FOUND: "That photo could not be found.",
    ErrorCategory.UPLOAD: "The photo could not be uploaded. Please try again.",
    ErrorCategory.STORAGE: "The photo collection could not be read or saved.",
    ErrorCategory.CONFIGURATION: "The application is not configured correctly.",
    ErrorCategory.SYSTEM: "A system error occurred.",
    ErrorCategory.UNKNOWN: "An unexpected error occurred.",
}


@dataclass
class ErrorInfo:
    """Snapshot of an error for display and reporting."""

    category: ErrorCategory
    severity: ErrorSeverity
    code: str
    message: str
    user_message: str
    details: dict[str, Any]
    timestamp: datetime
    status_code: int = 500

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        data["severity"] = self.severity.value
        data["timestamp"] = self.timestamp.isoformat()
        return data


class OurMemoriesError(Exception):
    """
    Base class for application errors.

    Keyword arguments override the class defaults, which lets the error
    classifier build ad-hoc SYSTEM or UNKNOWN errors without a subclass.
    The error is logged once, when it is created.
    """

    category = ErrorCategory.UNKNOWN
    severity = ErrorSeverity.MEDIUM
    default_code: str | None = None
    status_code = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
        *,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category
        if severity is not None:
            self.severity = severity
        if status_code is not None:
            self.status_code = status_code
        self.code = code or self.default_code or f"{self.category.value}_error"
        self.user_message = user_message or USER_MESSAGES[self.category]
        self.details = details or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(UTC)

        context = {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "status_code": self.status_code,
            **self.details,
        }
        if original_exception is not None:
            context["original_exception"] = repr(original_exception)
        log_error(self, context)

    def get_error_info(self) -> ErrorInfo:
        return ErrorInfo(
            category=self.category,
            severity=self.severity,
            code=self.code,
            message=self.message,
            user_message=self.user_message,
            details=self.details,
            timestamp=self.timestamp,
            status_code=self.status_code,
        )

    def to_response(self) -> dict[str, Any]:
        """JSON body returned by the API: success flag, message, code and any details."""
        body: dict[str, Any] = {"success": False, "error": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(OurMemoriesError):
    """Bad or missing input."""

    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.LOW
    default_code = "validation_failed"
    status_code = 400


class NotFoundError(OurMemoriesError):
    """Unknown photo id."""

    category = ErrorCategory.NOT_FOUND
    severity = ErrorSeverity.LOW
    default_code = "photo_not_found"
    status_code = 404

    def __init__(self, message: str = "Photo not found", resource_id: str | None = None, **kwargs: Any):
        details = {"resource_id": resource_id} if resource_id else None
        super().__init__(message, details=details, **kwargs)


class UploadError(OurMemoriesError):
    """The media service rejected or failed an upload."""

    category = ErrorCategory.UPLOAD
    default_code = "upload_failed"


class StorageReadError(OurMemoriesError):
    """A backing file exists but cannot be read or parsed."""

    category = ErrorCategory.STORAGE
    severity = ErrorSeverity.HIGH
    default_code = "storage_read_failed"


class StorageWriteError(OurMemoriesError):
    """A backing file could not be written."""

    category = ErrorCategory.STORAGE
    severity = ErrorSeverity.HIGH
    default_code = "storage_write_failed"


class ConfigurationError(OurMemoriesError):
    """Required configuration, such as the Cloudinary credentials, is missing."""

    category = ErrorCategory.CONFIGURATION
    severity = ErrorSeverity.CRITICAL
    default_code = "configuration_missing"


class ErrorHandler:
    """Turns any exception into ErrorInfo for the Streamlit error panel, counting codes as it goes."""

    def __init__(self) -> None:
        self.error_counts: dict[str, int] = {}

    def handle_error(self, error: Exception, context: dict[str, Any] | None = None) -> ErrorInfo:
        if not isinstance(error, OurMemoriesError):
            error = self._classify_error(error, context or {})

        error_info = error.get_error_info()
        self._track_error(error_info.code)
        return error_info

    def _classify_error(self, error: Exception, context: dict[str, Any]) -> OurMemoriesError:
        details = {"original_type": type(error).__name__, **context}

        # JSONDecodeError is a ValueError; check it first
        if isinstance(error, json.JSONDecodeError):
            return StorageReadError(str(error), details=details, original_exception=error)
        if isinstance(error, OSError):
            return OurMemoriesError(
                str(error),
                details=details,
                original_exception=error,
                category=ErrorCategory.SYSTEM,
                severity=ErrorSeverity.CRITICAL,
            )
        if isinstance(error, (ValueError, TypeError)):
            return ValidationError(str(error), details=details, original_exception=error)
        return OurMemoriesError(str(error), details=details, original_exception=error)

    def _track_error(self, error_code: str) -> None:
        count = self.error_counts.get(error_code, 0) + 1
        self.error_counts[error_code] = count
        if count % 10 == 0:
            logger.warning("frequent_error_detected", error_code=error_code, count=count)

    def get_error_statistics(self) -> dict[str, int]:
        return dict(self.error_counts)

    def reset_statistics(self) -> None:
        self.error_counts.clear()


error_handler = ErrorHandler()


def handle_error(error: Exception, context: dict[str, Any] | None = None) -> ErrorInfo:
    """Classify an exception with the shared handler."""
    return error_handler.handle_error(error, context)


def get_error_handler() -> ErrorHandler:
    return error_handler
