"""RemoteStore Schemas — date handling, aliases, envelopes.

Tests cover:
    - Dates decode as calendar days with no timezone shift
    - camelCase wire names and snake_case Python names both populate
    - Status values are normalized to LeaveStatus
    - ErrorEnvelope tolerates any body shape
"""

from datetime import date

import pytest
from pydantic import ValidationError

from leavesys.core.domain_types import LeaveStatus
from leavesys.schemas.remote import (
    EmployeeList,
    EmployeeRecord,
    ErrorEnvelope,
    LeaveRecord,
    NewLeavePayload,
    to_wire,
)


def _leave(**overrides):
    body = {
        "id": 10, "employeeId": 1, "startDate": "2024-03-10",
        "endDate": "2024-03-12", "reason": "Trip", "status": "PENDING",
    }
    body.update(overrides)
    return LeaveRecord.model_validate(body)


def test_plain_date_round_trips():
    record = _leave()
    assert record.start_date == date(2024, 3, 10)
    assert record.start_date.isoformat() == "2024-03-10"


@pytest.mark.parametrize("raw", [
    "2024-03-10T23:30:00Z",
    "2024-03-10T00:00:00.000+05:30",
    "2024-03-10 08:00:00",
])
def test_timestamps_keep_calendar_day(raw):
    assert _leave(startDate=raw).start_date == date(2024, 3, 10)


def test_status_normalized():
    assert _leave(status="approved").status is LeaveStatus.APPROVED


def test_unknown_status_rejected():
    with pytest.raises(ValidationError):
        _leave(status="CANCELLED")


def test_extra_fields_ignored():
    assert _leave(createdAt="2024-01-01").id == 10


def test_employee_list_decodes_and_maps_to_domain():
    [record] = EmployeeList.validate_python([{
        "id": 1, "name": "Ann", "email": "ann@example.com",
        "department": "Engineering", "joiningDate": "2023-01-02T00:00:00Z",
        "leaveBalance": 12,
    }])
    employee = record.to_domain()
    assert employee.joining_date == date(2023, 1, 2)
    assert employee.leave_balance == 12


def test_negative_balance_rejected():
    with pytest.raises(ValidationError):
        EmployeeRecord.model_validate({
            "id": 1, "name": "Ann", "joiningDate": "2023-01-02", "leaveBalance": -1,
        })


def test_snake_case_names_populate():
    record = LeaveRecord(
        id=1, employee_id=2, start_date=date(2024, 1, 1), end_date=date(2024, 1, 2),
    )
    assert record.employee_id == 2
    assert record.status is LeaveStatus.PENDING


@pytest.mark.parametrize("body, expected", [
    ({"message": "Email already exists"}, "Email already exists"),
    ({"message": ""}, None),
    ({"message": 42}, None),
    ({"error": "x"}, None),
    ("plain text", None),
    (None, None),
    ([1, 2], None),
])
def test_error_envelope_from_any_body(body, expected):
    assert ErrorEnvelope.from_body(body).message == expected


def test_message_or_fallback():
    assert ErrorEnvelope().message_or("Failed to add employee") == "Failed to add employee"
    assert ErrorEnvelope(message="Nope").message_or("x") == "Nope"


def test_to_wire_uses_camel_case():
    payload = NewLeavePayload(
        employee_id=3, start_date="2024-06-01", end_date="2024-06-02", reason="",
    )
    assert to_wire(payload) == {
        "employeeId": 3, "startDate": "2024-06-01", "endDate": "2024-06-02", "reason": "",
    }
