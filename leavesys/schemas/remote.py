"""RemoteStore Schemas — decode/encode the RemoteStore JSON contract.

Invariants:
    - Wire names are camelCase (joiningDate, employeeId, ...); Python names are snake_case
    - Date fields decode to datetime.date with no timezone conversion:
      "2024-03-10" and "2024-03-10T23:30:00Z" both decode to 2024-03-10
    - Outgoing payloads serialize dates exactly as the form provided them
    - ErrorEnvelope.message is carried verbatim; a malformed body yields an empty envelope

Design Decisions:
    - One shared ErrorEnvelope for every non-success response
    - Unknown wire fields ignored: RemoteStore may add fields without breaking loads
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from leavesys.core.domain_types import EmployeeId, LeaveId, LeaveStatus
from leavesys.core.models import Employee, LeaveRequest


def _calendar_date(value: Any) -> Any:
    """Keep the calendar day as written: drop any time component before parsing."""
    if isinstance(value, str) and len(value) > 10 and value[10] in "Tt ":
        return value[:10]
    return value


class RemoteModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True,
        frozen=True, extra="ignore",
    )


# --- Inbound records ----------------------------------------------------------

class EmployeeRecord(RemoteModel):
    """Employee as returned by GET /employees and GET /employees/{id}/balance."""
    id: int
    name: str
    email: str = ""
    department: str = ""
    joining_date: date
    leave_balance: int | None = Field(None, ge=0)

    @field_validator("joining_date", mode="before")
    @classmethod
    def strip_time(cls, v: Any) -> Any:
        return _calendar_date(v)

    def to_domain(self) -> Employee:
        return Employee(
            id=EmployeeId(self.id),
            name=self.name,
            email=self.email,
            department=self.department,
            joining_date=self.joining_date,
            leave_balance=self.leave_balance,
        )


class LeaveRecord(RemoteModel):
    """Leave request as returned by GET /leaves and the leave mutations."""
    id: int
    employee_id: int
    start_date: date
    end_date: date
    reason: str = ""
    status: LeaveStatus = LeaveStatus.PENDING

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def strip_time(cls, v: Any) -> Any:
        return _calendar_date(v)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    def to_domain(self) -> LeaveRequest:
        return LeaveRequest(
            id=LeaveId(self.id),
            employee_id=EmployeeId(self.employee_id),
            start_date=self.start_date,
            end_date=self.end_date,
            reason=self.reason,
            status=self.status,
        )


EmployeeList = TypeAdapter(list[EmployeeRecord])
LeaveList = TypeAdapter(list[LeaveRecord])


class ErrorEnvelope(RemoteModel):
    """Body of every non-success RemoteStore response."""
    message: str | None = None

    @classmethod
    def from_body(cls, body: Any) -> "ErrorEnvelope":
        if not isinstance(body, dict):
            return cls()
        message = body.get("message")
        return cls(message=message if isinstance(message, str) and message else None)

    def message_or(self, fallback: str) -> str:
        return self.message or fallback


# --- Outbound payloads --------------------------------------------------------

class NewEmployeePayload(RemoteModel):
    """POST /employees body."""
    name: str
    email: str
    department: str
    joining_date: str


class NewLeavePayload(RemoteModel):
    """POST /leaves body — employeeId must already be an integer."""
    employee_id: int
    start_date: str
    end_date: str
    reason: str


class StatusUpdatePayload(RemoteModel):
    """PUT /leaves/{id}/status body."""
    status: LeaveStatus


def to_wire(payload: RemoteModel) -> dict:
    return payload.model_dump(mode="json", by_alias=True)
