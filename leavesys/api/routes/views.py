"""View Routes — read-only derived views over the committed Snapshot.

Invariants:
    - Every view is recomputed from the current Snapshot on each request
    - Views require a committed Snapshot (ConnectivityError otherwise)
    - Employee details are fetched fresh from RemoteStore, never from the Snapshot
      and recorded as the selected employee in UiState
"""

import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query

from leavesys.api.dependencies import get_runtime, require_snapshot
from leavesys.core.derived_views import (
    dashboard_summary,
    employee_rows,
    leave_rows,
)
from leavesys.core.domain_types import LeaveStatus
from leavesys.schemas.api import (
    DashboardOut,
    EmployeeOut,
    LeaveOut,
    LoadResultOut,
    UiOut,
)
from leavesys.services.runtime import Runtime

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["views"])


@router.get("/dashboard", response_model=DashboardOut)
async def get_dashboard(
    today: date | None = Query(None),
    runtime: Runtime = Depends(require_snapshot),
):
    """Totals, pending count and the next approved leaves."""
    summary = dashboard_summary(
        runtime.loader.snapshot,
        today or datetime.now(),
        runtime.controller.upcoming_limit,
    )
    return DashboardOut.from_summary(summary)


@router.get("/employees", response_model=list[EmployeeOut])
async def list_employees(
    department: str | None = Query(None),
    runtime: Runtime = Depends(require_snapshot),
):
    return [
        EmployeeOut.from_domain(e)
        for e in employee_rows(runtime.loader.snapshot, department)
    ]


@router.get("/leaves", response_model=list[LeaveOut])
async def list_leaves(
    status: LeaveStatus | None = Query(None),
    employee_id: int | None = Query(None),
    runtime: Runtime = Depends(require_snapshot),
):
    rows = leave_rows(runtime.loader.snapshot, status, employee_id)
    return [LeaveOut.from_row(r) for r in rows]


@router.get("/employees/{employee_id}/details", response_model=EmployeeOut)
async def get_employee_details(
    employee_id: int, runtime: Runtime = Depends(get_runtime),
):
    """Employee with the authoritative leave balance; opens the details view."""
    result = await runtime.controller.open_employee_details(employee_id)
    if result.error is not None:
        raise result.error
    return EmployeeOut.from_domain(result.record)


@router.post("/refresh", response_model=LoadResultOut)
async def refresh(runtime: Runtime = Depends(get_runtime)):
    """Run one full load cycle and report its outcome."""
    result = await runtime.controller.refresh()
    return LoadResultOut(
        outcome=result.outcome.value,
        epoch=result.epoch,
        error=result.error.to_notice() if result.error else None,
    )


@router.get("/ui", response_model=UiOut)
async def get_ui_state(runtime: Runtime = Depends(get_runtime)):
    """Screen and transient UI state held by the controller."""
    controller = runtime.controller
    return UiOut.from_state(controller.ui, controller.screen())
