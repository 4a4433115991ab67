"""Shared builders for core tests — small, explicit domain values."""

from datetime import date

from leavesys.core.domain_types import EmployeeId, LeaveId, LeaveStatus
from leavesys.core.models import Employee, LeaveRequest


def employee(id=1, name="Ann", department="Engineering", balance=None):
    return Employee(
        id=EmployeeId(id), name=name, email=f"{name.lower()}@example.com",
        department=department, joining_date=date(2020, 1, 1),
        leave_balance=balance,
    )


def leave(
    id=10, employee_id=1, start=date(2024, 1, 10), end=None,
    status=LeaveStatus.PENDING, reason="Trip",
):
    return LeaveRequest(
        id=LeaveId(id), employee_id=EmployeeId(employee_id),
        start_date=start, end_date=end or start, reason=reason, status=status,
    )
