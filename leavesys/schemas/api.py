"""API Schemas — request bodies and response shapes for the HTTP surface.

Invariants:
    - Request bodies accept snake_case and the RemoteStore camelCase names
    - LeaveCreate.employee_id accepts only a JSON integer or string (no bool/float
      coercion); digit checking happens in request_guards
    - Responses are built from core values only (never from wire records)

Design Decisions:
    - from_domain classmethods keep route handlers free of field-by-field mapping
"""

from dataclasses import asdict
from datetime import date

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

from leavesys.core.derived_views import DashboardSummary, LeaveRow
from leavesys.core.domain_types import Screen
from leavesys.core.models import Employee
from leavesys.core.ui_state import EmployeeDraft, LeaveDraft, UiState


class _Body(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests -----------------------------------------------------------------

class EmployeeCreate(_Body):
    name: str = ""
    email: str = ""
    department: str = ""
    joining_date: str = ""

    def to_draft(self) -> EmployeeDraft:
        return EmployeeDraft(
            name=self.name, email=self.email,
            department=self.department, joining_date=self.joining_date,
        )


class LeaveCreate(_Body):
    employee_id: StrictInt | StrictStr = ""
    start_date: str = ""
    end_date: str = ""
    reason: str = ""

    def to_draft(self) -> LeaveDraft:
        return LeaveDraft(
            employee_id=str(self.employee_id), start_date=self.start_date,
            end_date=self.end_date, reason=self.reason,
        )


class StatusChange(BaseModel):
    status: str


# --- Responses ----------------------------------------------------------------

class EmployeeOut(BaseModel):
    id: int
    name: str
    email: str
    department: str
    joining_date: date
    leave_balance: int | None = None

    @classmethod
    def from_domain(cls, employee: Employee) -> "EmployeeOut":
        return cls(
            id=employee.id, name=employee.name, email=employee.email,
            department=employee.department, joining_date=employee.joining_date,
            leave_balance=employee.leave_balance,
        )


class LeaveOut(BaseModel):
    id: int
    employee_id: int
    employee_name: str
    start_date: date
    end_date: date
    reason: str
    status: str
    actionable: bool

    @classmethod
    def from_row(cls, row: LeaveRow) -> "LeaveOut":
        leave = row.leave
        return cls(
            id=leave.id, employee_id=leave.employee_id,
            employee_name=row.employee_name,
            start_date=leave.start_date, end_date=leave.end_date,
            reason=leave.reason, status=leave.status.value,
            actionable=row.actionable,
        )


class DashboardOut(BaseModel):
    total_employees: int
    pending_requests: int
    upcoming_count: int
    upcoming: list[LeaveOut]

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> "DashboardOut":
        return cls(
            total_employees=summary.total_employees,
            pending_requests=summary.pending_requests,
            upcoming_count=summary.upcoming_count,
            upcoming=[LeaveOut.from_row(r) for r in summary.upcoming],
        )


class LoadResultOut(BaseModel):
    outcome: str
    epoch: int
    error: dict | None = None


class UiOut(BaseModel):
    screen: str
    active_view: str
    employee_form_open: bool
    leave_form_open: bool
    details_open: bool
    employee_draft: dict
    leave_draft: dict
    selected_employee: EmployeeOut | None = None
    error: str | None = None
    notice: str | None = None

    @classmethod
    def from_state(cls, ui: UiState, screen: Screen) -> "UiOut":
        return cls(
            screen=screen.value,
            active_view=ui.active_view.value,
            employee_form_open=ui.employee_form_open,
            leave_form_open=ui.leave_form_open,
            details_open=ui.details_open,
            employee_draft=asdict(ui.employee_draft),
            leave_draft=asdict(ui.leave_draft),
            selected_employee=(
                EmployeeOut.from_domain(ui.selected_employee)
                if ui.selected_employee else None
            ),
            error=ui.error,
            notice=ui.notice,
        )
