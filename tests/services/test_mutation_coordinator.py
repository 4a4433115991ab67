"""Mutation Coordinator — create/status requests followed by resync.

Tests cover:
    - Successful mutations resync the Snapshot (no optimistic edits)
    - Rejections surface RemoteStore's message verbatim, Snapshot untouched
    - Fallback messages when RemoteStore gives none
    - Guards stop invalid requests before anything is sent
    - A failed resync after a successful mutation does not fail the mutation
"""

import pytest

from leavesys.core.domain_types import LeaveStatus, LoadOutcome
from leavesys.core.errors import (
    ActionError,
    RefreshError,
    RequestConstructionError,
    ValidationError,
)
from leavesys.core.ui_state import EmployeeDraft, LeaveDraft
from leavesys.services.mutation_coordinator import (
    ADD_EMPLOYEE_FAILED,
    APPLY_LEAVE_FAILED,
    FETCH_DETAIL_FAILED,
    UPDATE_STATUS_FAILED,
)

BOB = EmployeeDraft(
    name="Bob", email="bob@example.com",
    department="Sales", joining_date="2024-05-01",
)


# --- create_employee ----------------------------------------------------------

async def test_create_employee_resyncs(fake_store, loader, coordinator):
    await loader.load()
    created = await coordinator.create_employee(BOB)
    assert created.name == "Bob"
    assert coordinator.last_resync.committed
    assert [e.name for e in loader.snapshot.employees] == ["Ann", "Bob"]


async def test_create_employee_rejection_is_verbatim(fake_store, loader, coordinator):
    await loader.load()
    before = loader.snapshot
    duplicate = EmployeeDraft(
        name="Ann", email="ann@example.com",
        department="Engineering", joining_date="2024-05-01",
    )
    with pytest.raises(ValidationError) as exc:
        await coordinator.create_employee(duplicate)
    assert exc.value.message == "Email already exists"
    assert exc.value.context.status_code == 400
    assert loader.snapshot is before
    assert coordinator.last_resync is None


async def test_create_employee_fallback_message(fake_store, coordinator):
    fake_store.reject("POST", "/employees", 500, {})
    with pytest.raises(ValidationError) as exc:
        await coordinator.create_employee(BOB)
    assert exc.value.message == ADD_EMPLOYEE_FAILED


async def test_create_employee_transport_failure(fake_store, coordinator):
    fake_store.down = True
    with pytest.raises(ValidationError) as exc:
        await coordinator.create_employee(BOB)
    assert exc.value.message == ADD_EMPLOYEE_FAILED


async def test_blank_draft_is_sent_as_is(fake_store, coordinator):
    fake_store.reject("POST", "/employees", 400, {"message": "Name is required"})
    with pytest.raises(ValidationError, match="Name is required"):
        await coordinator.create_employee(EmployeeDraft())
    assert fake_store.mutations() == [("POST", "/employees", {
        "name": "", "email": "", "department": "", "joiningDate": "",
    })]


# --- apply_leave --------------------------------------------------------------

async def test_apply_leave_sends_integer_employee_id(fake_store, loader, coordinator):
    await loader.load()
    draft = LeaveDraft(employee_id="1", start_date="2024-06-01", end_date="2024-06-03", reason="Beach")
    created = await coordinator.apply_leave(draft)
    assert created.status is LeaveStatus.PENDING
    assert fake_store.mutations() == [("POST", "/leaves", {
        "employeeId": 1, "startDate": "2024-06-01",
        "endDate": "2024-06-03", "reason": "Beach",
    })]
    assert loader.snapshot.leave(created.id) is not None


async def test_apply_leave_non_numeric_id_sends_nothing(fake_store, coordinator):
    with pytest.raises(RequestConstructionError):
        await coordinator.apply_leave(LeaveDraft(employee_id="abc"))
    assert fake_store.requests == []


async def test_apply_leave_blank_id_sends_nothing(fake_store, coordinator):
    with pytest.raises(ValidationError):
        await coordinator.apply_leave(LeaveDraft())
    assert fake_store.requests == []


async def test_apply_leave_rejection(fake_store, coordinator):
    fake_store.reject("POST", "/leaves", 400, {"message": "End date before start date"})
    with pytest.raises(ValidationError) as exc:
        await coordinator.apply_leave(LeaveDraft(employee_id="1"))
    assert exc.value.message == "End date before start date"


async def test_apply_leave_fallback(fake_store, coordinator):
    fake_store.reject("POST", "/leaves", 500, None)
    with pytest.raises(ValidationError) as exc:
        await coordinator.apply_leave(LeaveDraft(employee_id=1))
    assert exc.value.message == APPLY_LEAVE_FAILED


# --- set_leave_status ---------------------------------------------------------

async def test_approve_resyncs(fake_store, loader, coordinator):
    await loader.load()
    await coordinator.set_leave_status(10, LeaveStatus.APPROVED)
    assert loader.snapshot.leave(10).status is LeaveStatus.APPROVED
    assert coordinator.last_resync.committed


async def test_status_string_accepted(fake_store, loader, coordinator):
    await loader.load()
    await coordinator.set_leave_status(10, "rejected")
    assert fake_store.mutations() == [("PUT", "/leaves/10/status", {"status": "REJECTED"})]


async def test_status_rejection_leaves_snapshot_pending(fake_store, loader, coordinator):
    await loader.load()
    fake_store.reject("PUT", "/leaves/10/status", 500, {"message": "Database locked"})
    with pytest.raises(ActionError) as exc:
        await coordinator.set_leave_status(10, LeaveStatus.APPROVED)
    assert exc.value.message == "Database locked"
    assert loader.snapshot.leave(10).status is LeaveStatus.PENDING
    assert coordinator.last_resync is None
    assert loader.state.committed_epoch == 1


async def test_status_transport_failure_fallback(fake_store, loader, coordinator):
    await loader.load()
    fake_store.down = True
    with pytest.raises(ActionError) as exc:
        await coordinator.set_leave_status(10, LeaveStatus.REJECTED)
    assert exc.value.message == UPDATE_STATUS_FAILED


async def test_decided_leave_is_not_sent(fake_store, loader, coordinator):
    fake_store.leaves[0]["status"] = "APPROVED"
    await loader.load()
    with pytest.raises(ActionError, match="already APPROVED"):
        await coordinator.set_leave_status(10, LeaveStatus.REJECTED)
    assert fake_store.mutations() == []


async def test_unknown_leave_is_not_sent(fake_store, loader, coordinator):
    await loader.load()
    with pytest.raises(ActionError) as exc:
        await coordinator.set_leave_status(99, LeaveStatus.APPROVED)
    assert exc.value.http_status == 404
    assert fake_store.mutations() == []


async def test_pending_is_not_a_decision(fake_store, loader, coordinator):
    await loader.load()
    with pytest.raises(ActionError):
        await coordinator.set_leave_status(10, "PENDING")
    assert fake_store.mutations() == []


async def test_resync_failure_does_not_fail_mutation(fake_store, loader, coordinator):
    await loader.load()
    fake_store.reject("GET", "/leaves", 500, {"message": "boom"})
    updated = await coordinator.set_leave_status(10, LeaveStatus.APPROVED)
    assert updated.status is LeaveStatus.APPROVED
    assert coordinator.last_resync.outcome is LoadOutcome.FAILED
    assert isinstance(loader.state.error, RefreshError)
    # Snapshot only changes through a successful load
    assert loader.snapshot.leave(10).status is LeaveStatus.PENDING


# --- fetch_employee_detail ----------------------------------------------------

async def test_fetch_detail_returns_balance(coordinator):
    employee = await coordinator.fetch_employee_detail(1)
    assert employee.leave_balance == 18


async def test_fetch_detail_not_found(coordinator):
    with pytest.raises(ActionError) as exc:
        await coordinator.fetch_employee_detail(42)
    assert exc.value.http_status == 404
    assert exc.value.message == "Employee not found"


async def test_fetch_detail_unreachable(fake_store, coordinator):
    fake_store.down = True
    with pytest.raises(ActionError) as exc:
        await coordinator.fetch_employee_detail(1)
    assert exc.value.http_status == 502
    assert exc.value.message == FETCH_DETAIL_FAILED


# --- Accepted mutations without a usable record -------------------------------

async def test_create_employee_empty_reply_still_resyncs(fake_store, loader, coordinator):
    await loader.load()
    fake_store.echo("POST", "/employees", None)
    assert await coordinator.create_employee(BOB) is None
    assert coordinator.last_resync.committed
    assert [e.name for e in loader.snapshot.employees] == ["Ann", "Bob"]


async def test_apply_leave_text_reply_still_resyncs(fake_store, loader, coordinator):
    await loader.load()
    fake_store.echo("POST", "/leaves", "Created")
    draft = LeaveDraft(employee_id="1", start_date="2024-06-01", end_date="2024-06-01", reason="")
    assert await coordinator.apply_leave(draft) is None
    assert coordinator.last_resync.committed
    assert len(loader.snapshot.leaves) == 2


async def test_status_change_ack_reply_still_resyncs(fake_store, loader, coordinator):
    await loader.load()
    fake_store.echo("PUT", "/leaves/10/status", {"success": True})
    assert await coordinator.set_leave_status(10, LeaveStatus.APPROVED) is None
    assert coordinator.last_resync.committed
    assert loader.snapshot.leave(10).status is LeaveStatus.APPROVED
