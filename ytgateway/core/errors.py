"""Error Hierarchy — typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client input errors (400) serialize as {error, details?} and never touch the subprocess
    - Extractor errors (500) serialize as {success: false, error, details?}
    - Extractor errors always carry their diagnostics (stderr or raw output)

Design Decisions:
    - Single hierarchy with GatewayError base: one FastAPI handler maps them all
    - ErrorContext as dataclass: log fields travel with the error, not with the response
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    EXTERNAL_PROCESS = "external_process"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context surfaced in server logs, never in responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    action: str | None = None
    exit_code: int | None = None
    debug_info: dict[str, Any] | None = None


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to the downstream-failure envelope."""
        body: dict[str, Any] = {"success": False, "error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# ─── Client Input Errors (400-level) ────────────────────────────

class ClientInputError(GatewayError):
    """Request rejected before any subprocess is spawned."""

    def __init__(
        self, message: str, code: str, details: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400, details,
        )

    def to_response(self) -> dict:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidActionError(ClientInputError):
    """`action` query parameter missing or unsupported."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid action. Use 'search', 'info', or 'download'.",
            "INVALID_ACTION", context=context,
        )


class InvalidJSONBodyError(ClientInputError):
    """Request body is not JSON, or parses to an empty value."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid JSON in request body", "INVALID_JSON", context=context,
        )


class InvalidRequestParamsError(ClientInputError):
    """Body parsed but failed schema validation.

    `field_errors` maps a field name to the list of its messages.
    """
    def __init__(
        self, field_errors: dict[str, list[str]],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "Invalid request parameters", "VALIDATION_ERROR",
            details=field_errors, context=context,
        )
        self.field_errors = field_errors


# ─── Extractor Errors (500-level) ───────────────────────────────

class ExtractorLaunchError(GatewayError):
    """The executable could not be spawned."""
    def __init__(self, os_message: str, context: ErrorContext | None = None):
        super().__init__(
            "Failed to start yt-dlp process", "EXTRACTOR_LAUNCH_FAILED",
            ErrorCategory.EXTERNAL_PROCESS, ErrorSeverity.CRITICAL,
            context, 500, os_message,
        )


class ExtractorExitError(GatewayError):
    """The process ran and exited non-zero."""
    def __init__(
        self, exit_code: int, stderr: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.exit_code = exit_code
        super().__init__(
            f"yt-dlp process exited with code {exit_code}",
            "EXTRACTOR_EXIT_NONZERO", ErrorCategory.EXTERNAL_PROCESS,
            ErrorSeverity.ERROR, ctx, 500, stderr,
        )
        self.exit_code = exit_code


class ExtractorNoOutputError(GatewayError):
    """Exit code 0 but nothing usable on stdout."""
    def __init__(self, stderr: str, context: ErrorContext | None = None):
        super().__init__(
            "No output from yt-dlp", "EXTRACTOR_NO_OUTPUT",
            ErrorCategory.EXTERNAL_PROCESS, ErrorSeverity.ERROR,
            context, 500, stderr or "Process completed with no output",
        )


class ExtractorOutputParseError(GatewayError):
    """stdout was not valid JSON; raw output attached for diagnosis."""
    def __init__(
        self, parse_message: str, raw_output: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "Error parsing yt-dlp output", "EXTRACTOR_BAD_OUTPUT",
            ErrorCategory.EXTERNAL_PROCESS, ErrorSeverity.ERROR,
            context, 500, parse_message,
        )
        self.raw_output = raw_output

    def to_response(self) -> dict:
        body = super().to_response()
        body["rawOutput"] = self.raw_output
        return body


class ExtractorTimeoutError(GatewayError):
    """Process exceeded the configured wall-clock limit and was killed."""
    def __init__(
        self, timeout_seconds: float, stderr: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"yt-dlp process timed out after {timeout_seconds:g}s",
            "EXTRACTOR_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, context, 500, stderr,
        )
        self.timeout_seconds = timeout_seconds


class ExtractorOutputTooLargeError(GatewayError):
    """Combined stdout/stderr exceeded the configured cap; process was killed."""
    def __init__(
        self, limit_bytes: int, stderr: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"yt-dlp output exceeded {limit_bytes} bytes",
            "EXTRACTOR_OUTPUT_TOO_LARGE", ErrorCategory.EXTERNAL_PROCESS,
            ErrorSeverity.ERROR, context, 500, stderr,
        )
        self.limit_bytes = limit_bytes
