"""Error Hierarchy - typed, categorized exceptions for all EventDesk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400) abort a write before anything is persisted
    - Conflicts (409) and not-found (404) are reported distinctly from validation
    - Infrastructure errors (5xx) never leak driver details to the client

Design Decisions:
    - Single hierarchy with EventDeskError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class EventDeskError(Exception):
    """Base exception for all EventDesk errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "field": self.context.field,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Validation Errors (400) ────────────────────────────────────

class RecordValidationError(EventDeskError):
    """A candidate record failed normalization or validation."""
    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        field: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class MissingRequiredFieldError(RecordValidationError):
    """Required string field absent, non-string, or blank."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        super().__init__(
            f'Field "{field}" is required and must be a non-empty string.',
            "MISSING_REQUIRED_FIELD", field, context,
        )


class InvalidDateError(RecordValidationError):
    """Date string could not be parsed into a calendar day."""
    def __init__(self, value: object, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid date {value!r}. Expected an ISO-8601 date (YYYY-MM-DD).",
            "INVALID_DATE", "date", context,
        )
        self.value = value


class InvalidTimeFormatError(RecordValidationError):
    """Time string is not an H:MM / HH:MM pair."""
    def __init__(self, value: object, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid time format {value!r}. Expected HH:MM (24-hour).",
            "INVALID_TIME_FORMAT", "time", context,
        )
        self.value = value


class InvalidTimeRangeError(RecordValidationError):
    """Hour or minute outside the 24-hour clock."""
    def __init__(self, value: object, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid time value {value!r}. Hours must be 0-23 and minutes 0-59.",
            "INVALID_TIME_RANGE", "time", context,
        )
        self.value = value


class InvalidEventDateError(RecordValidationError):
    """Event date rejected by the date normalizer."""
    def __init__(self, reason: RecordValidationError, context: ErrorContext | None = None):
        super().__init__(reason.message, "INVALID_EVENT_DATE", "date", context)
        self.reason = reason


class InvalidEventTimeError(RecordValidationError):
    """Event time rejected by the time normalizer."""
    def __init__(self, reason: RecordValidationError, context: ErrorContext | None = None):
        super().__init__(reason.message, "INVALID_EVENT_TIME", "time", context)
        self.reason = reason


class InvalidAgendaError(RecordValidationError):
    """Agenda is not a non-empty list of non-empty strings."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Agenda must be a non-empty array of non-empty strings.",
            "INVALID_AGENDA", "agenda", context,
        )


class InvalidTagsError(RecordValidationError):
    """Tags is not a non-empty list of non-empty strings."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Tags must be a non-empty array of non-empty strings.",
            "INVALID_TAGS", "tags", context,
        )


class InvalidSlugError(RecordValidationError):
    """Slug is empty, contains characters outside [a-z0-9-], or has stray hyphens."""
    def __init__(self, message: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message or "Slug must be lowercase letters and numbers separated by single hyphens.",
            "INVALID_SLUG", "slug", context,
        )


class InvalidEmailFormatError(RecordValidationError):
    """Email does not have a local@domain.tld shape."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email is not in a valid format.",
            "INVALID_EMAIL_FORMAT", "email", context,
        )


# ─── Conflict / Not Found ───────────────────────────────────────

class DuplicateSlugError(EventDeskError):
    """Another event already owns this slug."""
    def __init__(self, slug: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = "slug"
        ctx.resource_id = slug
        super().__init__(
            f"An event with slug '{slug}' already exists",
            "DUPLICATE_SLUG", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.slug = slug


class ResourceNotFoundError(EventDeskError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class EventNotFoundError(ResourceNotFoundError):
    """Event referenced by slug or id does not exist."""
    def __init__(self, event_ref: str, context: ErrorContext | None = None):
        super().__init__("Event", event_ref, context)
        self.code = "EVENT_NOT_FOUND"


# ─── Infrastructure Errors (5xx) ────────────────────────────────

class DatabaseError(EventDeskError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ImageUploadError(EventDeskError):
    """Image host rejected or failed the upload."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Image upload failed: {message}",
            "IMAGE_UPLOAD_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
