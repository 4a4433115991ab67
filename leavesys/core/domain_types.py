"""Domain Types — identity types and closed enums shared across the codebase.

Invariants:
    - EmployeeId and LeaveId wrap int — RemoteStore identifiers are integers
    - LeaveStatus is closed: PENDING is initial, APPROVED and REJECTED are terminal
    - Only PENDING → APPROVED and PENDING → REJECTED are valid transitions

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (RemoteStore speaks strings)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EmployeeId = NewType("EmployeeId", int)
LeaveId = NewType("LeaveId", int)


# ─── Constants ───────────────────────────────────────────────────

UNKNOWN_EMPLOYEE_NAME = "Unknown"
UPCOMING_LEAVES_LIMIT = 5


# ─── Enums ───────────────────────────────────────────────────────

class LeaveStatus(str, Enum):
    """Leave request lifecycle — maps to RemoteStore `status` field."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING

    def can_transition_to(self, target: "LeaveStatus") -> bool:
        return self is LeaveStatus.PENDING and target.is_terminal


DECISION_STATUSES = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})


class ActiveView(str, Enum):
    """Top-level views the interaction boundary can show."""
    DASHBOARD = "dashboard"
    EMPLOYEES = "employees"
    LEAVES = "leaves"


class Screen(str, Enum):
    """What the boundary renders as a whole, derived from sync state."""
    LOADING = "loading"
    CONNECTION_ERROR = "connection_error"
    READY = "ready"


class LoadOutcome(str, Enum):
    """Result of one SnapshotLoader cycle."""
    COMMITTED = "committed"
    STALE = "stale"
    FAILED = "failed"
