"""SBAR end-of-shift report text, formatted for clipboard and TXT output."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from handoffdesk.fs.exports import safe_write_text

from .model import ORIENTATION_KEYS, OrientationFlags, ShiftRecord

HEADER_MARKER = "**"
SECTION_TITLES = ("SITUATION", "BACKGROUND", "ASSESSMENT", "RECOMMENDATION")
NOT_ORIENTED = "Not oriented"

# Unicode space separators, line terminators and BOM; \x1c-\x1f and \x85 are kept.
_TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


@dataclass(frozen=True, slots=True)
class ReportLine:
    """One display line of a formatted report."""

    text: str
    is_header: bool = False


def format_report(record: ShiftRecord) -> str:
    """Return the SBAR report text for ``record``."""
    situation = [
        f"Nurse: {record.nurse} | Date: {record.date} | Shift: {record.shift}",
        f"Patient: {record.patient_name} | Room: {record.room}",
        f"Diagnosis: {record.diagnosis}",
        (
            f"Code Status: {_or(record.code_status, 'N/A')} | "
            f"Allergies: {_or(record.allergies, 'None known')} | "
            f"Isolation: {record.isolation}"
        ),
    ]
    background = [
        f"History: {_or(record.history, 'N/A')}",
        f"Fall Risk: {_yes_no(record.fall_risk)} | Bed Alarm: {_on_off(record.bed_alarm)}",
    ]
    assessment = [
        f"Alert & Oriented To: {format_orientation(record.orientation)}",
        f"Vitals: {_or(record.vitals, 'N/A')}",
        f"Pain: {_or(record.pain, 'N/A')}",
        f"Mobility: {_or(record.mobility, 'N/A')}",
        f"Wounds: {_or(record.wounds, 'N/A')}",
        f"Medications Given/Due: {_or(record.meds, 'N/A')}",
        f"I/O: {_or(record.io, 'N/A')}",
        f"Bowel/Bladder: {_or(record.bowel_bladder, 'N/A')}",
    ]
    recommendation = [
        f"Tasks/Plan: {_or(record.tasks, 'N/A')}",
        f"PRNs Given/Available: {_or(record.prns, 'N/A')}",
        f"Appointments Today: {_or(record.appointments_today, 'None')}",
        f"Upcoming Appointments: {_or(record.appointments_upcoming, 'None')}",
        f"Transport Arranged: {_yes_no(record.transport_arranged)}",
        f"Notes: {_or(record.notes, 'None')}",
    ]

    blocks: List[str] = []
    for title, body in zip(SECTION_TITLES, (situation, background, assessment, recommendation)):
        blocks.append("\n".join([_header(title), *body]))
    return "\n\n".join(blocks).strip(_TRIM_CHARS)


def format_orientation(orientation: OrientationFlags) -> str:
    """Summarise the oriented-to flags, e.g. ``Person, Time``."""
    oriented = [key.capitalize() for key in ORIENTATION_KEYS if getattr(orientation, key)]
    if not oriented:
        return NOT_ORIENTED
    return ", ".join(oriented)


def split_report(text: str) -> List[List[ReportLine]]:
    """Split report text into sections of display lines.

    Header lines come back with their ``**`` markers stripped.
    """
    sections: List[List[ReportLine]] = []
    for block in text.split("\n\n"):
        lines: List[ReportLine] = []
        for line in block.split("\n"):
            if is_header_line(line):
                lines.append(ReportLine(line[len(HEADER_MARKER) : -len(HEADER_MARKER)], True))
            else:
                lines.append(ReportLine(line))
        sections.append(lines)
    return sections


def is_header_line(line: str) -> bool:
    return (
        len(line) >= 2 * len(HEADER_MARKER)
        and line.startswith(HEADER_MARKER)
        and line.endswith(HEADER_MARKER)
    )


def write_report(record: ShiftRecord, out_path: Path) -> Path:
    """Write the report TXT to ``out_path`` and return the final path."""
    return safe_write_text(out_path, format_report(record))


def _header(title: str) -> str:
    return f"{HEADER_MARKER}{title}{HEADER_MARKER}"


def _or(value: str, fallback: str) -> str:
    return value or fallback


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _on_off(flag: bool) -> str:
    return "On" if flag else "Off"


__all__ = [
    "HEADER_MARKER",
    "NOT_ORIENTED",
    "ReportLine",
    "SECTION_TITLES",
    "format_orientation",
    "format_report",
    "is_header_line",
    "split_report",
    "write_report",
]
