# tests/test_form_state.py

from __future__ import annotations

import pytest

from slack_taskbot.interactions.form_state import (
    FieldKind,
    decode_field,
    field_value,
    find_selected_user,
    iter_fields,
    snapshot_from_body,
)


def test_find_selected_user_in_any_block() -> None:
    snapshot = {
        "custom_message_block": {"custom_message": {"type": "plain_text_input", "value": "hi"}},
        "whatever_block": {"picker": {"type": "users_select", "selected_user": "U123"}},
    }
    assert find_selected_user(snapshot) == "U123"


def test_find_selected_user_skips_empty_pickers() -> None:
    snapshot = {
        "a": {"p1": {"type": "users_select", "selected_user": None}},
        "b": {"p2": {"type": "users_select", "selected_user": ""}},
        "c": {"p3": {"type": "users_select", "selected_user": "U9"}},
    }
    assert find_selected_user(snapshot) == "U9"


def test_find_selected_user_checks_kind_tag() -> None:
    # A text field carrying a selected_user key is still a text field.
    snapshot = {"a": {"x": {"type": "plain_text_input", "selected_user": "U1", "value": "U1"}}}
    assert find_selected_user(snapshot) is None


@pytest.mark.parametrize(
    "snapshot",
    [
        None,
        {},
        [],
        "values",
        {"block": None},
        {"block": "not a dict"},
        {"block": {"action": None}},
        {"block": {"action": {"selected_user": "U1"}}},
        {"block": {"action": {"type": 7, "selected_user": "U1"}}},
        {"block": {"action": {"type": "users_select"}}},
        {"block": {"action": {"type": "users_select", "selected_user": ["U1"]}}},
    ],
)
def test_find_selected_user_tolerates_partial_state(snapshot) -> None:
    assert find_selected_user(snapshot) is None


def test_decode_option_pickers() -> None:
    fv = decode_field({"type": "external_select", "selected_option": {"value": "42"}})
    assert fv.kind is FieldKind.EXTERNAL_OPTION
    assert fv.value == "42"

    empty = decode_field({"type": "external_select", "selected_option": None})
    assert empty.kind is FieldKind.EXTERNAL_OPTION
    assert not empty.is_set

    assert decode_field({"type": "datepicker", "selected_date": "2025-01-01"}).kind is FieldKind.UNKNOWN


def test_field_value_and_iter_fields() -> None:
    snapshot = {
        "task_block": {"task_input": {"type": "plain_text_input", "value": "Ship report"}},
        "date_block": {"date_input": {"type": "plain_text_input", "value": None}},
    }
    assert field_value(snapshot, "task_block", "task_input").value == "Ship report"
    assert field_value(snapshot, "date_block", "date_input").value is None
    assert field_value(snapshot, "missing", "task_input").kind is FieldKind.UNKNOWN

    ids = [(b, a) for b, a, _ in iter_fields(snapshot)]
    assert ids == [("task_block", "task_input"), ("date_block", "date_input")]


def test_snapshot_from_body() -> None:
    values = {"b": {"a": {"type": "users_select", "selected_user": "U1"}}}
    assert snapshot_from_body({"view": {"state": {"values": values}}}) is values
    assert snapshot_from_body({"view": {"state": None}}) is None
    assert snapshot_from_body({}) is None
    assert snapshot_from_body(None) is None
