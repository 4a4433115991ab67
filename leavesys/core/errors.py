"""Error Hierarchy — typed, categorized exceptions for every sync-engine failure mode.

Invariants:
    - Every error has a code (str), kind (ErrorKind), severity (ErrorSeverity)
    - Remote failures are converted into one of CONNECTIVITY / REFRESH / VALIDATION / ACTION
      at the loader/coordinator boundary — raw transport errors never reach the view layer
    - `message` is what the user sees; RemoteStore messages are carried verbatim
    - to_response() produces the REST envelope; to_notice() produces the UI envelope

Design Decisions:
    - Single hierarchy with LeaveSysError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorKind(str, Enum):
    """How the boundary surfaces the failure."""
    CONNECTIVITY = "connectivity"   # full-view error state, nothing to show
    REFRESH = "refresh"             # advisory, last good snapshot retained
    VALIDATION = "validation"       # inline at the form, draft intact
    ACTION = "action"               # transient notice, no state change
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    endpoint: str | None = None
    status_code: int | None = None
    epoch: int | None = None
    debug_info: dict[str, Any] | None = None


class LeaveSysError(Exception):
    """Base exception for all LeaveSys errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "kind": self.kind.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "endpoint": self.context.endpoint,
                    "status_code": self.context.status_code,
                    "epoch": self.context.epoch,
                },
            }
        }

    def to_notice(self) -> dict:
        """Convert to the envelope the interaction boundary displays."""
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "recoverable": self.severity in (
                ErrorSeverity.INFO, ErrorSeverity.WARNING, ErrorSeverity.ERROR,
            ),
        }


# ─── Sync Errors ────────────────────────────────────────────────

class ConnectivityError(LeaveSysError):
    """Initial load failed — no committed snapshot exists yet."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONNECTIVITY_ERROR", ErrorKind.CONNECTIVITY,
            ErrorSeverity.CRITICAL, context, 503,
        )


class RefreshError(LeaveSysError):
    """A later load failed — the last good snapshot is retained."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "REFRESH_ERROR", ErrorKind.REFRESH,
            ErrorSeverity.WARNING, context, 503,
        )


# ─── Mutation Errors ────────────────────────────────────────────

class ValidationError(LeaveSysError):
    """RemoteStore rejected a create request."""
    def __init__(
        self, message: str, context: ErrorContext | None = None,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            message, code, ErrorKind.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class RequestConstructionError(ValidationError):
    """Request could not be built locally — nothing was sent."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(message, context, code="REQUEST_CONSTRUCTION_ERROR")
        self.field = field


class ActionError(LeaveSysError):
    """Status change or detail fetch failed — no local state change."""
    def __init__(
        self, message: str, context: ErrorContext | None = None,
        http_status: int = 409,
    ):
        super().__init__(
            message, "ACTION_ERROR", ErrorKind.ACTION,
            ErrorSeverity.WARNING, context, http_status,
        )


# ─── Internal Errors ────────────────────────────────────────────

class DuplicateEntityError(LeaveSysError):
    """RemoteStore returned a collection with repeated ids."""
    def __init__(self, entity: str, entity_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Duplicate {entity} id {entity_id} in collection",
            "DUPLICATE_ENTITY", ErrorKind.INTERNAL,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.entity = entity
        self.entity_id = entity_id
