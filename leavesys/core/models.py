"""Domain Models — immutable value objects for employees, leaves, and the Snapshot.

Invariants:
    - Employee and LeaveRequest are frozen — recreated on every load, never edited
    - Snapshot ids are unique per collection (build() rejects duplicates)
    - A Snapshot is replaced wholesale, never patched: employees and leaves
      always come from the same fetch cycle
    - LeaveRequest.employee_id may dangle; lookups tolerate it

Design Decisions:
    - Tuples over lists: a Snapshot cannot be mutated in place by accident
    - Decoding lives in schemas/remote.py: core stays free of wire concerns
"""

from dataclasses import dataclass
from datetime import date

from leavesys.core.domain_types import EmployeeId, LeaveId, LeaveStatus
from leavesys.core.errors import DuplicateEntityError


@dataclass(frozen=True)
class Employee:
    id: EmployeeId
    name: str
    email: str
    department: str
    joining_date: date
    # Bulk list shape omits it; the balance endpoint is authoritative
    leave_balance: int | None = None


@dataclass(frozen=True)
class LeaveRequest:
    id: LeaveId
    employee_id: EmployeeId
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING

    @property
    def is_pending(self) -> bool:
        return self.status is LeaveStatus.PENDING


@dataclass(frozen=True)
class Snapshot:
    """Last successfully fetched state. Pure value, no IO."""

    employees: tuple[Employee, ...] = ()
    leaves: tuple[LeaveRequest, ...] = ()

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    @classmethod
    def build(cls, employees, leaves) -> "Snapshot":
        """Build from any iterables, enforcing id uniqueness."""
        employees = tuple(employees)
        leaves = tuple(leaves)
        _check_unique("employee", (e.id for e in employees))
        _check_unique("leave", (l.id for l in leaves))
        return cls(employees=employees, leaves=leaves)

    @property
    def is_empty(self) -> bool:
        return not self.employees and not self.leaves

    def employee(self, employee_id: int) -> Employee | None:
        return next((e for e in self.employees if e.id == employee_id), None)

    def leave(self, leave_id: int) -> LeaveRequest | None:
        return next((l for l in self.leaves if l.id == leave_id), None)


def _check_unique(entity: str, ids) -> None:
    seen: set[int] = set()
    for entity_id in ids:
        if entity_id in seen:
            raise DuplicateEntityError(entity, entity_id)
        seen.add(entity_id)
