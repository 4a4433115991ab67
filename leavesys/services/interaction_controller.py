"""Interaction Controller — boundary that turns user actions into coordinator calls.

Invariants:
    - Owns UiState only; never writes the Snapshot
    - Failed submission: form stays open, draft intact, error set to the message
    - Successful submission: draft reset, form closed, error cleared
    - Status-change and detail failures set a transient notice, nothing else
    - screen() is CONNECTION_ERROR only while nothing has ever been committed

Design Decisions:
    - Errors come back as LeaveSysError and are turned into strings here, at the edge;
      ActionResult still carries the error so an HTTP caller can render its envelope
    - now is injectable for dashboard(): the controller never hides a clock read from tests
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from leavesys.core.derived_views import (
    DashboardSummary,
    LeaveRow,
    dashboard_summary,
    employee_rows,
    leave_rows,
)
from leavesys.core.domain_types import ActiveView, LeaveStatus, Screen
from leavesys.core.errors import ActionError, ErrorKind, LeaveSysError, ValidationError
from leavesys.core.models import Employee, LeaveRequest, Snapshot
from leavesys.core.ui_state import EmployeeDraft, LeaveDraft, UiState, edit_draft
from leavesys.services.mutation_coordinator import MutationCoordinator
from leavesys.services.snapshot_loader import LoadResult, SnapshotLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one user action. `record` may be None on success."""
    error: LeaveSysError | None = None
    record: Employee | LeaveRequest | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class InteractionController:
    """Single owner of transient UI state."""

    def __init__(
        self,
        loader: SnapshotLoader,
        coordinator: MutationCoordinator,
        upcoming_limit: int = 5,
    ):
        self.loader = loader
        self.coordinator = coordinator
        self.upcoming_limit = upcoming_limit
        self.ui = UiState()

    @property
    def snapshot(self) -> Snapshot:
        return self.loader.snapshot

    # --- Sync -----------------------------------------------------------------

    async def start(self) -> LoadResult:
        """Initial load."""
        return await self.refresh()

    async def refresh(self) -> LoadResult:
        result = await self.loader.load()
        self._absorb_load(result)
        return result

    def screen(self) -> Screen:
        state = self.loader.state
        if state.has_committed:
            return Screen.READY
        if state.loading:
            return Screen.LOADING
        if state.error is not None and state.error.kind is ErrorKind.CONNECTIVITY:
            return Screen.CONNECTION_ERROR
        return Screen.LOADING

    # --- Navigation -----------------------------------------------------------

    def select_view(self, view: ActiveView | str) -> None:
        self.ui.active_view = ActiveView(view)

    def dismiss_notice(self) -> None:
        self.ui.notice = None

    # --- Employee form --------------------------------------------------------

    def open_employee_form(self) -> None:
        self.ui.employee_form_open = True

    def close_employee_form(self) -> None:
        self.ui.close_employee_form()

    def edit_employee_draft(self, **fields) -> EmployeeDraft:
        self.ui.employee_draft = edit_draft(self.ui.employee_draft, **fields)
        return self.ui.employee_draft

    async def submit_employee(self, draft: EmployeeDraft | None = None) -> ActionResult:
        """Submit the employee form, or `draft` filled in one step."""
        if draft is not None:
            self.ui.employee_form_open = True
            self.ui.employee_draft = draft
        self.ui.error = None
        try:
            created = await self.coordinator.create_employee(self.ui.employee_draft)
        except ValidationError as e:
            self.ui.error = e.message
            return ActionResult(error=e)
        self.ui.close_employee_form()
        self._absorb_resync()
        return ActionResult(record=created)

    # --- Leave form -----------------------------------------------------------

    def open_leave_form(self) -> None:
        self.ui.leave_form_open = True

    def close_leave_form(self) -> None:
        self.ui.close_leave_form()

    def edit_leave_draft(self, **fields) -> LeaveDraft:
        self.ui.leave_draft = edit_draft(self.ui.leave_draft, **fields)
        return self.ui.leave_draft

    async def submit_leave(self, draft: LeaveDraft | None = None) -> ActionResult:
        """Submit the leave form, or `draft` filled in one step."""
        if draft is not None:
            self.ui.leave_form_open = True
            self.ui.leave_draft = draft
        self.ui.error = None
        try:
            created = await self.coordinator.apply_leave(self.ui.leave_draft)
        except ValidationError as e:
            self.ui.error = e.message
            return ActionResult(error=e)
        self.ui.close_leave_form()
        self._absorb_resync()
        return ActionResult(record=created)

    # --- Leave actions --------------------------------------------------------

    async def approve_leave(self, leave_id: int) -> ActionResult:
        return await self.set_leave_status(leave_id, LeaveStatus.APPROVED)

    async def reject_leave(self, leave_id: int) -> ActionResult:
        return await self.set_leave_status(leave_id, LeaveStatus.REJECTED)

    async def set_leave_status(
        self, leave_id: int, status: LeaveStatus | str,
    ) -> ActionResult:
        try:
            updated = await self.coordinator.set_leave_status(leave_id, status)
        except ActionError as e:
            self.ui.notice = e.message
            return ActionResult(error=e)
        self._absorb_resync()
        return ActionResult(record=updated)

    # --- Employee details -----------------------------------------------------

    async def open_employee_details(self, employee_id: int) -> ActionResult:
        try:
            employee = await self.coordinator.fetch_employee_detail(employee_id)
        except ActionError as e:
            self.ui.notice = e.message
            return ActionResult(error=e)
        self.ui.selected_employee = employee
        self.ui.details_open = True
        return ActionResult(record=employee)

    def close_employee_details(self) -> None:
        self.ui.close_details()

    # --- Views ----------------------------------------------------------------

    def dashboard(self, now: date | datetime | None = None) -> DashboardSummary:
        return dashboard_summary(
            self.snapshot, now or datetime.now(), self.upcoming_limit,
        )

    def employees(self, department: str | None = None) -> list[Employee]:
        return employee_rows(self.snapshot, department)

    def leaves(
        self, status: LeaveStatus | None = None, employee_id: int | None = None,
    ) -> list[LeaveRow]:
        return leave_rows(self.snapshot, status, employee_id)

    # --- Error absorption -----------------------------------------------------

    def _absorb_resync(self) -> None:
        result = self.coordinator.last_resync
        if result is not None:
            self._absorb_load(result)

    def _absorb_load(self, result: LoadResult) -> None:
        if result.committed:
            if self.ui.error and not self._any_form_open():
                self.ui.error = None
            return
        error = self.loader.state.error
        if result.error is None or error is not result.error:
            return  # stale; a newer load owns the state
        self._surface(error)

    def _surface(self, error: LeaveSysError) -> None:
        logger.info(
            f"Surfacing {error.kind.value} error: {error.message}",
            extra={"error_code": error.code},
        )
        if error.kind is ErrorKind.CONNECTIVITY:
            self.ui.error = error.message
        else:
            self.ui.notice = error.message

    def _any_form_open(self) -> bool:
        return self.ui.employee_form_open or self.ui.leave_form_open
