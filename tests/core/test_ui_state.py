"""UI State — draft editing and form/modal reset behavior.

Tests cover:
    - edit_draft returns a new draft and rejects unknown fields
    - Closing a form resets its draft and the inline error
    - Closing details drops the selected employee
"""

import pytest

from leavesys.core.domain_types import ActiveView
from leavesys.core.ui_state import EmployeeDraft, LeaveDraft, UiState, edit_draft
from tests.core.factories import employee


def test_defaults():
    ui = UiState()
    assert ui.active_view is ActiveView.DASHBOARD
    assert not ui.employee_form_open
    assert ui.employee_draft == EmployeeDraft()
    assert ui.leave_draft == LeaveDraft()
    assert ui.error is None and ui.notice is None


def test_edit_draft_returns_new_value():
    draft = EmployeeDraft()
    edited = edit_draft(draft, name="Ann", department="Eng")
    assert edited.name == "Ann"
    assert draft.name == ""


def test_edit_draft_stringifies_values():
    assert edit_draft(LeaveDraft(), employee_id=5).employee_id == "5"
    assert edit_draft(LeaveDraft(), reason=None).reason == ""


def test_edit_draft_rejects_unknown_fields():
    with pytest.raises(ValueError, match="salary"):
        edit_draft(EmployeeDraft(), salary="1")


def test_close_employee_form_resets_draft_and_error():
    ui = UiState(employee_form_open=True, error="Email taken")
    ui.employee_draft = edit_draft(ui.employee_draft, name="Ann")
    ui.close_employee_form()
    assert not ui.employee_form_open
    assert ui.employee_draft == EmployeeDraft()
    assert ui.error is None


def test_close_leave_form_resets_draft_and_error():
    ui = UiState(leave_form_open=True, error="bad")
    ui.leave_draft = edit_draft(ui.leave_draft, reason="Trip")
    ui.close_leave_form()
    assert not ui.leave_form_open
    assert ui.leave_draft == LeaveDraft()
    assert ui.error is None


def test_close_details():
    ui = UiState(details_open=True, selected_employee=employee())
    ui.close_details()
    assert not ui.details_open
    assert ui.selected_employee is None
