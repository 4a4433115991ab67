"""UI State — transient, non-authoritative interaction state owned by one controller.

Invariants:
    - Never holds entity data beyond the employee detail being viewed
    - Closing a form resets its draft and clears the inline error
    - A failed submission keeps the form open with its draft intact

Design Decisions:
    - Explicit object passed to the controller instead of a shared global bag
    - Drafts keep raw form strings; coercion happens in request_guards
"""

from dataclasses import dataclass, field, fields, replace

from leavesys.core.domain_types import ActiveView
from leavesys.core.models import Employee


@dataclass(frozen=True)
class EmployeeDraft:
    name: str = ""
    email: str = ""
    department: str = ""
    joining_date: str = ""


@dataclass(frozen=True)
class LeaveDraft:
    employee_id: str = ""
    start_date: str = ""
    end_date: str = ""
    reason: str = ""


def edit_draft(draft, **changes):
    """Return a copy of `draft` with `changes` applied. Unknown fields raise."""
    known = {f.name for f in fields(draft)}
    unknown = set(changes) - known
    if unknown:
        raise ValueError(f"Unknown draft field(s): {', '.join(sorted(unknown))}")
    return replace(draft, **{k: "" if v is None else str(v) for k, v in changes.items()})


@dataclass
class UiState:
    """Per-controller interaction state — pure dataclass, no IO."""

    active_view: ActiveView = ActiveView.DASHBOARD

    # Modal visibility
    employee_form_open: bool = False
    leave_form_open: bool = False
    details_open: bool = False

    # In-progress form values
    employee_draft: EmployeeDraft = field(default_factory=EmployeeDraft)
    leave_draft: LeaveDraft = field(default_factory=LeaveDraft)

    # Fresh detail fetched for the details modal
    selected_employee: Employee | None = None

    # Inline form / connection error, and transient action notice
    error: str | None = None
    notice: str | None = None

    def close_employee_form(self) -> None:
        self.employee_form_open = False
        self.employee_draft = EmployeeDraft()
        self.error = None

    def close_leave_form(self) -> None:
        self.leave_form_open = False
        self.leave_draft = LeaveDraft()
        self.error = None

    def close_details(self) -> None:
        self.details_open = False
        self.selected_employee = None
