"""Derived Views — dashboard aggregates, table rows, and lookups computed from a Snapshot.

Invariants:
    - Every function is pure: same Snapshot (and `now`) → same result
    - upcoming_leaves: APPROVED only, start_date >= today, ascending by (start_date, id),
      at most UPCOMING_LEAVES_LIMIT entries
    - resolve_employee_name returns UNKNOWN_EMPLOYEE_NAME for dangling references
    - Nothing here is cached or stored; callers recompute on every render

Design Decisions:
    - `now` passed explicitly (never read from the clock): deterministic tests
    - Ties on start_date broken by id: stable ordering independent of fetch order
"""

from dataclasses import dataclass
from datetime import date, datetime

from leavesys.core.domain_types import (
    UNKNOWN_EMPLOYEE_NAME,
    UPCOMING_LEAVES_LIMIT,
    LeaveStatus,
)
from leavesys.core.models import Employee, LeaveRequest, Snapshot


@dataclass(frozen=True)
class LeaveRow:
    """A leave joined with its employee name, as the leaves table shows it."""
    leave: LeaveRequest
    employee_name: str

    @property
    def actionable(self) -> bool:
        # Approve/reject are only offered on PENDING requests
        return self.leave.is_pending


@dataclass(frozen=True)
class DashboardSummary:
    total_employees: int
    pending_requests: int
    upcoming: tuple[LeaveRow, ...]

    @property
    def upcoming_count(self) -> int:
        return len(self.upcoming)


def truncate_to_day(now: date | datetime) -> date:
    """Start of the reference day. Accepts date or datetime."""
    if isinstance(now, datetime):
        return now.date()
    return now


def pending_count(snapshot: Snapshot) -> int:
    return sum(1 for leave in snapshot.leaves if leave.status is LeaveStatus.PENDING)


def total_employees(snapshot: Snapshot) -> int:
    return len(snapshot.employees)


def upcoming_leaves(
    snapshot: Snapshot,
    now: date | datetime,
    limit: int = UPCOMING_LEAVES_LIMIT,
) -> list[LeaveRequest]:
    """Approved leaves starting today or later, soonest first."""
    today = truncate_to_day(now)
    upcoming = [
        leave for leave in snapshot.leaves
        if leave.status is LeaveStatus.APPROVED and leave.start_date >= today
    ]
    upcoming.sort(key=lambda leave: (leave.start_date, leave.id))
    return upcoming[:max(limit, 0)]


def resolve_employee_name(snapshot: Snapshot, employee_id: int) -> str:
    employee = snapshot.employee(employee_id)
    if employee is None:
        return UNKNOWN_EMPLOYEE_NAME
    return employee.name


def leave_rows(
    snapshot: Snapshot,
    status: LeaveStatus | None = None,
    employee_id: int | None = None,
) -> list[LeaveRow]:
    """Leaves in snapshot order, optionally filtered, with employee names."""
    names = {e.id: e.name for e in snapshot.employees}
    return [
        LeaveRow(leave, names.get(leave.employee_id, UNKNOWN_EMPLOYEE_NAME))
        for leave in snapshot.leaves
        if (status is None or leave.status is status)
        and (employee_id is None or leave.employee_id == employee_id)
    ]


def employee_rows(
    snapshot: Snapshot, department: str | None = None,
) -> list[Employee]:
    """Employees in snapshot order, optionally filtered by department."""
    if not department:
        return list(snapshot.employees)
    wanted = department.strip().casefold()
    return [e for e in snapshot.employees if e.department.casefold() == wanted]


def dashboard_summary(
    snapshot: Snapshot,
    now: date | datetime,
    limit: int = UPCOMING_LEAVES_LIMIT,
) -> DashboardSummary:
    upcoming = tuple(
        LeaveRow(leave, resolve_employee_name(snapshot, leave.employee_id))
        for leave in upcoming_leaves(snapshot, now, limit)
    )
    return DashboardSummary(
        total_employees=total_employees(snapshot),
        pending_requests=pending_count(snapshot),
        upcoming=upcoming,
    )
