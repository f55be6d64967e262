"""Field schema tests: label derivation and control-kind selection."""

from __future__ import annotations

import re

import pytest

from handoffdesk.form.schema import (
    FIELD_SCHEMA,
    LONG_TEXT_FIELDS,
    SECTION_LAYOUT,
    ORIENTATION_GROUP,
    field_spec,
    format_label,
    orientation_specs,
)
from handoffdesk.report.model import orientation_field_ids, record_field_ids


@pytest.mark.parametrize(
    "field_id, expected",
    [
        ("patientName", "Patient Name"),
        ("appointmentsToday", "Appointments Today"),
        ("appointmentsUpcoming", "Appointments Upcoming"),
        ("bowelBladder", "Bowel Bladder"),
        ("transportArranged", "Transport Arranged"),
        ("codeStatus", "Code Status"),
        ("nurse", "Nurse"),
        ("io", "Io"),
    ],
)
def test_format_label_examples(field_id, expected):
    assert format_label(field_id) == expected


def test_format_label_inserts_space_before_every_capital():
    for field_id in record_field_ids():
        label = format_label(field_id)
        expected = re.sub(r"([A-Z])", r" \1", field_id)
        expected = expected[0].upper() + expected[1:]
        assert label == expected


def test_fixed_selects_take_precedence():
    assert field_spec("date").kind == "date"

    shift = field_spec("shift")
    assert shift.kind == "select"
    assert [value for value, _ in shift.options] == ["", "Day", "Evening", "Night"]

    code = field_spec("codeStatus")
    assert code.kind == "select"
    assert [value for value, _ in code.options] == ["", "R1", "R2", "R3", "M1", "M2", "C1", "C2"]

    isolation = field_spec("isolation")
    assert isolation.kind == "select"
    assert [value for value, _ in isolation.options] == [
        "None",
        "Contact",
        "Droplet",
        "Airborne",
        "Contact/Droplet",
        "Other",
    ]


def test_boolean_fields_render_as_checkboxes():
    for field_id in ("fallRisk", "bedAlarm", "transportArranged", *orientation_field_ids()):
        assert FIELD_SCHEMA[field_id].kind == "checkbox", field_id


def test_long_text_fields_render_as_textareas_with_rows():
    for field_id in LONG_TEXT_FIELDS:
        spec = FIELD_SCHEMA[field_id]
        assert spec.kind == "textarea", field_id
        assert spec.rows == (3 if field_id == "notes" else 2)


def test_remaining_fields_are_single_line_text():
    for field_id in ("nurse", "patientName", "room"):
        assert FIELD_SCHEMA[field_id].kind == "text"


def test_label_override_keeps_kind_and_options():
    spec = field_spec("codeStatus", "Code Status")
    assert spec.label == "Code Status"
    assert spec.kind == "select"
    assert spec.options == FIELD_SCHEMA["codeStatus"].options


def test_unknown_field_raises():
    with pytest.raises(KeyError):
        field_spec("bloodType")


def test_orientation_specs_are_capitalized_checkboxes():
    specs = orientation_specs()
    assert [spec.field_id for spec in specs] == list(orientation_field_ids())
    assert [spec.label for spec in specs] == ["Person", "Place", "Time", "Situation"]
    assert all(spec.is_orientation for spec in specs)


def test_section_layout_covers_every_field_once():
    titles = [title for title, _ in SECTION_LAYOUT]
    assert titles == ["Situation", "Background", "Assessment", "Recommendation"]
    laid_out = [field_id for _, entries in SECTION_LAYOUT for field_id, _ in entries]
    assert len(laid_out) == len(set(laid_out))
    expected = set(record_field_ids()) - {"orientation"} | {ORIENTATION_GROUP}
    assert set(laid_out) == expected
