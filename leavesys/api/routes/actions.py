"""Action Routes — user actions forwarded through the InteractionController.

Invariants:
    - A mutation response is sent only after its resync has completed
    - Failures are absorbed into UiState (error / notice) and still rendered
      as the error envelope
    - Rejections return the RemoteStore message; nothing changes locally
    - Status changes are limited to PENDING → APPROVED | REJECTED
    - A success whose echoed record was unusable answers with a null record
"""

import logging

from fastapi import APIRouter, Depends, status

from leavesys.api.dependencies import get_runtime
from leavesys.core.derived_views import LeaveRow, resolve_employee_name
from leavesys.core.models import LeaveRequest
from leavesys.schemas.api import (
    EmployeeCreate,
    EmployeeOut,
    LeaveCreate,
    LeaveOut,
    LoadResultOut,
    StatusChange,
)
from leavesys.services.interaction_controller import ActionResult
from leavesys.services.runtime import Runtime

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["actions"])


def _raise_on_error(result: ActionResult) -> None:
    if result.error is not None:
        raise result.error


def _resync_out(runtime: Runtime) -> dict | None:
    result = runtime.coordinator.last_resync
    if result is None:
        return None
    return LoadResultOut(
        outcome=result.outcome.value,
        epoch=result.epoch,
        error=result.error.to_notice() if result.error else None,
    ).model_dump()


def _leave_out(runtime: Runtime, leave: LeaveRequest | None) -> dict | None:
    if leave is None:
        return None
    name = resolve_employee_name(runtime.loader.snapshot, leave.employee_id)
    return LeaveOut.from_row(LeaveRow(leave, name)).model_dump(mode="json")


@router.post("/employees", status_code=status.HTTP_201_CREATED)
async def create_employee(
    body: EmployeeCreate, runtime: Runtime = Depends(get_runtime),
):
    result = await runtime.controller.submit_employee(body.to_draft())
    _raise_on_error(result)
    employee = result.record
    return {
        "employee": (
            EmployeeOut.from_domain(employee).model_dump(mode="json")
            if employee else None
        ),
        "resync": _resync_out(runtime),
    }


@router.post("/leaves", status_code=status.HTTP_201_CREATED)
async def apply_leave(
    body: LeaveCreate, runtime: Runtime = Depends(get_runtime),
):
    result = await runtime.controller.submit_leave(body.to_draft())
    _raise_on_error(result)
    return {
        "leave": _leave_out(runtime, result.record),
        "resync": _resync_out(runtime),
    }


@router.put("/leaves/{leave_id}/status")
async def set_leave_status(
    leave_id: int, body: StatusChange, runtime: Runtime = Depends(get_runtime),
):
    result = await runtime.controller.set_leave_status(leave_id, body.status)
    _raise_on_error(result)
    return {
        "leave": _leave_out(runtime, result.record),
        "resync": _resync_out(runtime),
    }
