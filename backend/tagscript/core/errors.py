"""Error Hierarchy — typed, categorized exceptions for all TagScript failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are recoverable; model/infrastructure errors (500-level) are not
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TagScriptError base: one FastAPI handler catches all
    - ErrorContext as dataclass: carries chunk position without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
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
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    chunk_index: int | None = None
    total_chunks: int | None = None
    user_message: str | None = None
    retry_after_ms: int | None = None


class TagScriptError(Exception):
    """Base exception for all TagScript errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "chunk_index": self.context.chunk_index,
                    "total_chunks": self.context.total_chunks,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Input Errors (400-level) ───────────────────────────────────

class EmptyTranscriptError(TagScriptError):
    """Transcript missing or whitespace-only."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Transcript cannot be empty",
            "EMPTY_TRANSCRIPT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class UnsupportedFileTypeError(TagScriptError):
    """Uploaded file is not a .txt or .srt transcript."""
    def __init__(self, filename: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unsupported transcript file '{filename}'. Upload a .txt or .srt file.",
            "UNSUPPORTED_FILE_TYPE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 415,
        )
        self.filename = filename


class TranscriptTooLargeError(TagScriptError):
    """Uploaded transcript exceeds the configured byte limit."""
    def __init__(self, size: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Transcript too long ({size} bytes, limit {limit}). "
            "Use a shorter transcript or split it into smaller parts.",
            "TRANSCRIPT_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 413,
        )
        self.size = size
        self.limit = limit


# ─── Model / Infrastructure Errors (500-level) ──────────────────

class AnalysisParseError(TagScriptError):
    """Model response contained no parseable JSON object."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ANALYSIS_PARSE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )


class IncompleteAnalysisError(TagScriptError):
    """Final report is missing tags, chapters, or ad_safety."""
    def __init__(self, missing: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Incomplete analysis result from model (missing: {', '.join(missing)})",
            "INCOMPLETE_ANALYSIS", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 500,
        )
        self.missing = missing


class AnthropicAPIError(TagScriptError):
    """Anthropic API call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        if api_error_type == "rate_limit":
            ctx.user_message = ctx.user_message or (
                "Rate limit exceeded. Please try again in a moment."
            )
        category = (
            ErrorCategory.TIMEOUT if api_error_type == "timeout"
            else ErrorCategory.EXTERNAL_API
        )
        super().__init__(
            f"Anthropic API error ({api_error_type}): {message}",
            "ANTHROPIC_API_ERROR", category,
            ErrorSeverity.CRITICAL, ctx,
            429 if api_error_type == "rate_limit" else 503,
        )
        self.api_error_type = api_error_type
