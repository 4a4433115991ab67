"""Request Guards — checks that run before a mutation request is sent.

Invariants:
    - A failed guard means no network call is made
    - coerce_employee_id accepts positive ints and ASCII digit strings only
    - check_status_change allows PENDING → APPROVED | REJECTED and nothing else

Design Decisions:
    - Only shape the request: dates, names and reasons pass through untouched,
      RemoteStore owns field validation
"""

import re

from leavesys.core.domain_types import DECISION_STATUSES, EmployeeId, LeaveStatus
from leavesys.core.errors import ActionError, RequestConstructionError
from leavesys.core.models import LeaveRequest, Snapshot

_DIGITS = re.compile(r"[0-9]+")


def coerce_employee_id(value: object) -> EmployeeId:
    """Coerce a form value to an employee identifier.

    Raises RequestConstructionError for blanks, non-numeric text, floats, bools
    and ids below 1.
    """
    if isinstance(value, bool):
        raise RequestConstructionError(
            "Select an employee before submitting", field="employee_id",
        )
    if isinstance(value, int):
        employee_id = value
    else:
        text = value.strip() if isinstance(value, str) else ""
        if not _DIGITS.fullmatch(text):
            raise RequestConstructionError(
                f"Invalid employee id: {value!r}", field="employee_id",
            )
        employee_id = int(text)
    if employee_id < 1:
        raise RequestConstructionError(
            f"Invalid employee id: {value!r}", field="employee_id",
        )
    return EmployeeId(employee_id)


def parse_decision(value: object) -> LeaveStatus:
    """Map a requested status to a decision status (APPROVED / REJECTED)."""
    raw = value.value if isinstance(value, LeaveStatus) else str(value)
    try:
        status = LeaveStatus(raw.strip().upper())
    except ValueError:
        raise ActionError(f"Unknown leave status: {value!r}", http_status=400)
    if status not in DECISION_STATUSES:
        raise ActionError(
            f"Leave status can only be set to APPROVED or REJECTED, not {status.value}",
            http_status=400,
        )
    return status


def check_status_change(
    snapshot: Snapshot, leave_id: int, target: LeaveStatus,
) -> LeaveRequest:
    """Return the leave if `target` is a valid transition from its committed status."""
    leave = snapshot.leave(leave_id)
    if leave is None:
        raise ActionError(f"Leave request {leave_id} not found", http_status=404)
    if not leave.status.can_transition_to(target):
        raise ActionError(
            f"Leave request {leave_id} is already {leave.status.value}",
        )
    return leave
