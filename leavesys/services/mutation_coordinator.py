"""Mutation Coordinator — sends create/status requests, then resyncs the Snapshot.

Invariants:
    - No optimistic edits: the Snapshot changes only through SnapshotLoader.load()
    - A rejected request leaves the Snapshot untouched and surfaces RemoteStore's message verbatim
    - Guards (employee id coercion, status transition) fail before any network call
    - A resync failure after a successful mutation is recorded by the loader, not raised
    - Any 2xx answer is a success and is always followed by a resync, even when
      RemoteStore echoes no usable record (the returned value is then None)

Design Decisions:
    - Fire-and-forget across mutations: no queue, no cancellation, no retry
    - fetch_employee_detail bypasses the Snapshot: balance must be current when viewed
"""

import logging

from leavesys.core.domain_types import LeaveStatus
from leavesys.core.errors import ActionError, ErrorContext, ValidationError
from leavesys.core.models import Employee, LeaveRequest
from leavesys.core.request_guards import (
    check_status_change,
    coerce_employee_id,
    parse_decision,
)
from leavesys.core.ui_state import EmployeeDraft, LeaveDraft
from leavesys.infrastructure.remote_store import (
    RemoteRejectedError,
    RemoteStoreClient,
    RemoteStoreError,
)
from leavesys.schemas.remote import (
    NewEmployeePayload,
    NewLeavePayload,
    StatusUpdatePayload,
)
from leavesys.services.snapshot_loader import LoadResult, SnapshotLoader

logger = logging.getLogger(__name__)

ADD_EMPLOYEE_FAILED = "Failed to add employee"
APPLY_LEAVE_FAILED = "Failed to apply for leave"
UPDATE_STATUS_FAILED = "Failed to update leave status"
FETCH_DETAIL_FAILED = "Could not fetch latest employee details."


class MutationCoordinator:
    """Issues RemoteStore mutations and resyncs on success."""

    def __init__(self, store: RemoteStoreClient, loader: SnapshotLoader):
        self.store = store
        self.loader = loader
        self.last_resync: LoadResult | None = None

    async def create_employee(self, draft: EmployeeDraft) -> Employee | None:
        payload = NewEmployeePayload(
            name=draft.name,
            email=draft.email,
            department=draft.department,
            joining_date=draft.joining_date,
        )
        try:
            created = await self.store.create_employee(payload)
        except RemoteStoreError as e:
            raise ValidationError(
                _user_message(e, ADD_EMPLOYEE_FAILED), _context(e),
            ) from e
        logger.info(
            "Employee created",
            extra={"employee_id": created.id if created else None},
        )
        await self._resync()
        return created

    async def apply_leave(self, draft: LeaveDraft) -> LeaveRequest | None:
        # Raises RequestConstructionError before anything is sent
        employee_id = coerce_employee_id(draft.employee_id)
        payload = NewLeavePayload(
            employee_id=employee_id,
            start_date=draft.start_date,
            end_date=draft.end_date,
            reason=draft.reason,
        )
        try:
            created = await self.store.create_leave(payload)
        except RemoteStoreError as e:
            raise ValidationError(
                _user_message(e, APPLY_LEAVE_FAILED), _context(e),
            ) from e
        logger.info(
            "Leave request created",
            extra={
                "leave_id": created.id if created else None,
                "employee_id": employee_id,
            },
        )
        await self._resync()
        return created

    async def set_leave_status(
        self, leave_id: int, new_status: LeaveStatus | str,
    ) -> LeaveRequest | None:
        """Approve or reject a PENDING leave. Authoritative only after resync."""
        target = parse_decision(new_status)
        check_status_change(self.loader.snapshot, leave_id, target)
        try:
            updated = await self.store.update_leave_status(
                leave_id, StatusUpdatePayload(status=target),
            )
        except RemoteStoreError as e:
            raise ActionError(
                _user_message(e, UPDATE_STATUS_FAILED), _context(e),
            ) from e
        logger.info(
            f"Leave status set to {target.value}", extra={"leave_id": leave_id},
        )
        await self._resync()
        return updated

    async def fetch_employee_detail(self, employee_id: int) -> Employee:
        """Read the employee with its authoritative leave balance."""
        try:
            return await self.store.get_employee_balance(employee_id)
        except RemoteStoreError as e:
            raise ActionError(
                _user_message(e, FETCH_DETAIL_FAILED), _context(e),
                http_status=404 if e.status_code == 404 else 502,
            ) from e

    async def _resync(self) -> LoadResult:
        self.last_resync = await self.loader.load()
        return self.last_resync


def _user_message(e: RemoteStoreError, fallback: str) -> str:
    """RemoteStore's own message for rejections, the fallback otherwise."""
    if isinstance(e, RemoteRejectedError):
        return e.envelope.message_or(fallback)
    return fallback


def _context(e: RemoteStoreError) -> ErrorContext:
    return ErrorContext(
        endpoint=e.endpoint,
        status_code=e.status_code,
        debug_info={"cause": e.message},
    )
