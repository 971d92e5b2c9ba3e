"""Error Hierarchy — typed exceptions for collaborator-boundary failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - The reducer never raises these: only collaborators and the runtime do
    - to_log_extra() produces the structured fields consumed by JSONFormatter

Design Decisions:
    - Single hierarchy with CodepadError base: the runtime catches one type per command
    - ErrorContext as dataclass: observability without coupling to logging
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_SERVICE = "external_service"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context attached to an error for debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    revision_id: str | None = None
    command: str | None = None
    debug_info: dict[str, Any] | None = None


class CodepadError(Exception):
    """Base exception for all workspace collaborator failures."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_log_extra(self) -> dict:
        """Structured logging fields for this error."""
        return {
            "error_code": self.code,
            "revision_id": self.context.revision_id,
            "command": self.context.command,
        }


class RevisionNotFoundError(CodepadError):
    """The remote store has no revision with this id."""
    def __init__(self, revision_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.revision_id = revision_id
        super().__init__(
            f"Revision '{revision_id}' not found",
            "REVISION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx,
        )
        self.revision_id = revision_id


class MalformedPayloadError(CodepadError):
    """A collaborator returned data that failed schema validation."""
    def __init__(self, message: str, source: str, context: ErrorContext | None = None):
        super().__init__(
            f"Malformed payload from {source}: {message}",
            "MALFORMED_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.source = source


class CollaboratorError(CodepadError):
    """An external collaborator (store, compiler, formatter) failed."""
    def __init__(self, message: str, collaborator: str, context: ErrorContext | None = None):
        super().__init__(
            f"{collaborator} failed: {message}",
            "COLLABORATOR_ERROR", ErrorCategory.EXTERNAL_SERVICE,
            ErrorSeverity.ERROR, context,
        )
        self.collaborator = collaborator


class CollaboratorTimeoutError(CodepadError):
    """An external collaborator did not answer in time."""
    def __init__(self, collaborator: str, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"{collaborator} timed out after {timeout_seconds}s",
            "COLLABORATOR_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.WARNING, context,
        )
        self.collaborator = collaborator
        self.timeout_seconds = timeout_seconds
