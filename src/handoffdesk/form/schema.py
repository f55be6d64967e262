"""Declarative field schema driving the handoff form controls."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple

from handoffdesk.report.model import (
    ORIENTATION_KEYS,
    ORIENTATION_PREFIX,
    OrientationFlags,
    blank_record,
    field_attr,
    record_field_ids,
)

FieldKind = Literal["text", "textarea", "select", "checkbox", "date"]

SelectOption = Tuple[str, str]

_LABEL_BOUNDARY_RE = re.compile(r"([A-Z])")

SHIFT_OPTIONS: Tuple[SelectOption, ...] = (
    ("", "Select Shift"),
    ("Day", "Day"),
    ("Evening", "Evening"),
    ("Night", "Night"),
)
CODE_STATUS_OPTIONS: Tuple[SelectOption, ...] = (("", "Select Code Status"),) + tuple(
    (code, code) for code in ("R1", "R2", "R3", "M1", "M2", "C1", "C2")
)
ISOLATION_OPTIONS: Tuple[SelectOption, ...] = tuple(
    (value, value)
    for value in ("None", "Contact", "Droplet", "Airborne", "Contact/Droplet", "Other")
)

LONG_TEXT_FIELDS = frozenset(
    {
        "history",
        "diagnosis",
        "allergies",
        "vitals",
        "pain",
        "mobility",
        "wounds",
        "meds",
        "io",
        "bowelBladder",
        "tasks",
        "prns",
        "appointmentsToday",
        "appointmentsUpcoming",
        "notes",
    }
)

_FIXED_SELECTS: Dict[str, Tuple[SelectOption, ...]] = {
    "shift": SHIFT_OPTIONS,
    "codeStatus": CODE_STATUS_OPTIONS,
    "isolation": ISOLATION_OPTIONS,
}


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """How a single field is rendered: kind plus its kind-specific extras."""

    field_id: str
    kind: FieldKind
    label: str
    options: Tuple[SelectOption, ...] = ()
    rows: int = 0

    @property
    def is_orientation(self) -> bool:
        return self.field_id.startswith(ORIENTATION_PREFIX)


def format_label(field_id: str) -> str:
    """Derive a display label: ``patientName`` becomes ``Patient Name``."""
    spaced = _LABEL_BOUNDARY_RE.sub(r" \1", field_id)
    return spaced[:1].upper() + spaced[1:]


def _resolve_kind(field_id: str, default_value: object) -> FieldSpec:
    label = format_label(field_id)
    if field_id == "date":
        return FieldSpec(field_id, "date", label)
    if field_id in _FIXED_SELECTS:
        return FieldSpec(field_id, "select", label, options=_FIXED_SELECTS[field_id])
    if isinstance(default_value, bool):
        return FieldSpec(field_id, "checkbox", label)
    if field_id in LONG_TEXT_FIELDS:
        return FieldSpec(field_id, "textarea", label, rows=3 if field_id == "notes" else 2)
    return FieldSpec(field_id, "text", label)


def _build_schema() -> Dict[str, FieldSpec]:
    defaults = blank_record()
    schema: Dict[str, FieldSpec] = {}
    for field_id in record_field_ids():
        default_value = getattr(defaults, field_attr(field_id))
        if isinstance(default_value, OrientationFlags):
            continue
        schema[field_id] = _resolve_kind(field_id, default_value)
    for key in ORIENTATION_KEYS:
        flag_id = f"{ORIENTATION_PREFIX}{key}"
        schema[flag_id] = FieldSpec(flag_id, "checkbox", key.capitalize())
    return schema


FIELD_SCHEMA: Dict[str, FieldSpec] = _build_schema()

ORIENTATION_GROUP = "orientation"
ORIENTATION_CAPTION = "Alert and Oriented To:"

# (section title, ((field id, label override), ...)); ORIENTATION_GROUP marks the checkbox grid.
SECTION_LAYOUT: Tuple[Tuple[str, Tuple[Tuple[str, Optional[str]], ...]], ...] = (
    (
        "Situation",
        (
            ("nurse", None),
            ("date", None),
            ("shift", None),
            ("patientName", "Patient Name"),
            ("room", None),
            ("diagnosis", None),
            ("codeStatus", "Code Status"),
            ("allergies", None),
            ("isolation", None),
        ),
    ),
    (
        "Background",
        (
            ("history", "Brief History"),
            ("fallRisk", "Falls Risk"),
            ("bedAlarm", "Bed Alarm On"),
        ),
    ),
    (
        "Assessment",
        (
            (ORIENTATION_GROUP, None),
            ("vitals", None),
            ("pain", None),
            ("mobility", None),
            ("wounds", None),
            ("meds", "Medications Given/Due"),
            ("io", "Intake / Output"),
            ("bowelBladder", "Bowel / Bladder"),
        ),
    ),
    (
        "Recommendation",
        (
            ("tasks", "Tasks/Plan"),
            ("prns", "PRNs Given/Available"),
            ("appointmentsToday", "Appointments Today"),
            ("appointmentsUpcoming", "Upcoming Appointments"),
            ("transportArranged", "Transport Arranged"),
            ("notes", "Additional Notes"),
        ),
    ),
)


def field_spec(field_id: str, label: Optional[str] = None) -> FieldSpec:
    """Return the ``FieldSpec`` for ``field_id``, applying ``label`` when given.

    Raises ``KeyError`` for identifiers outside the record.
    """
    spec = FIELD_SCHEMA[field_id]
    if label:
        return FieldSpec(spec.field_id, spec.kind, label, spec.options, spec.rows)
    return spec


def orientation_specs() -> Tuple[FieldSpec, ...]:
    return tuple(FIELD_SCHEMA[f"{ORIENTATION_PREFIX}{key}"] for key in ORIENTATION_KEYS)


__all__ = [
    "CODE_STATUS_OPTIONS",
    "FIELD_SCHEMA",
    "FieldKind",
    "FieldSpec",
    "ISOLATION_OPTIONS",
    "LONG_TEXT_FIELDS",
    "ORIENTATION_CAPTION",
    "ORIENTATION_GROUP",
    "SECTION_LAYOUT",
    "SHIFT_OPTIONS",
    "field_spec",
    "format_label",
    "orientation_specs",
]
