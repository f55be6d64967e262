"""Shift-handoff record structures for SBAR report output."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Tuple, Union

FieldValue = Union[str, bool]

ORIENTATION_KEYS: Tuple[str, ...] = ("person", "place", "time", "situation")
ORIENTATION_PREFIX = "orientation."

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True, slots=True)
class OrientationFlags:
    """Alert & oriented checklist, in the fixed person/place/time/situation order."""

    person: bool = False
    place: bool = False
    time: bool = False
    situation: bool = False


@dataclass(frozen=True, slots=True)
class ShiftRecord:
    """One end-of-shift handoff document grouped by SBAR section."""

    # Situation
    nurse: str = ""
    date: str = ""
    shift: str = ""
    patient_name: str = ""
    room: str = ""
    diagnosis: str = ""
    code_status: str = ""
    allergies: str = ""
    isolation: str = "None"
    # Background
    history: str = ""
    fall_risk: bool = False
    bed_alarm: bool = False
    # Assessment
    orientation: OrientationFlags = field(default_factory=OrientationFlags)
    vitals: str = ""
    pain: str = ""
    mobility: str = ""
    wounds: str = ""
    meds: str = ""
    io: str = ""
    bowel_bladder: str = ""
    # Recommendation
    tasks: str = ""
    prns: str = ""
    appointments_today: str = ""
    appointments_upcoming: str = ""
    transport_arranged: bool = False
    notes: str = ""


def blank_record() -> ShiftRecord:
    """Return the record a freshly mounted form starts from."""
    return ShiftRecord()


def field_attr(field_id: str) -> str:
    """Map a camelCase field identifier to its ``ShiftRecord`` attribute name."""
    return _CAMEL_BOUNDARY_RE.sub("_", field_id).lower()


def field_id_for(attr: str) -> str:
    head, *rest = attr.split("_")
    return head + "".join(part.capitalize() for part in rest)


def record_field_ids() -> Tuple[str, ...]:
    """Return the top-level field identifiers in declaration order."""
    return tuple(field_id_for(item.name) for item in fields(ShiftRecord))


def orientation_field_ids() -> Tuple[str, ...]:
    return tuple(f"{ORIENTATION_PREFIX}{key}" for key in ORIENTATION_KEYS)


__all__ = [
    "FieldValue",
    "ORIENTATION_KEYS",
    "ORIENTATION_PREFIX",
    "OrientationFlags",
    "ShiftRecord",
    "blank_record",
    "field_attr",
    "field_id_for",
    "orientation_field_ids",
    "record_field_ids",
]
