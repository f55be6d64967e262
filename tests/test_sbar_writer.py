"""SBAR report formatter tests."""

from __future__ import annotations

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from handoffdesk.form.state import apply_change
from handoffdesk.report.model import OrientationFlags, ShiftRecord, blank_record
from handoffdesk.report.sbar_writer import (
    format_orientation,
    format_report,
    is_header_line,
    split_report,
    write_report,
)

FILLED_REPORT = """**SITUATION**
Nurse: RN Ortiz | Date: 2026-10-19 | Shift: Night
Patient: Jane Doe | Room: 214-B
Diagnosis: CHF exacerbation
Code Status: R1 | Allergies: PCN | Isolation: Contact

**BACKGROUND**
History: HTN, DM2
Fall Risk: Yes | Bed Alarm: On

**ASSESSMENT**
Alert & Oriented To: Person, Place, Time, Situation
Vitals: BP 128/76 HR 82
Pain: 2/10 left hip
Mobility: Walker, assist x1
Wounds: Sacral stage 2, dressing changed
Medications Given/Due: Furosemide 40 mg 0600
I/O: 900/1400
Bowel/Bladder: Continent

**RECOMMENDATION**
Tasks/Plan: Daily weight
PRNs Given/Available: Tylenol 650 at 0200
Appointments Today: Echo 1100
Upcoming Appointments: Cardiology 10/24
Transport Arranged: Yes
Notes: Family visiting at 1000"""


def _filled_record() -> ShiftRecord:
    return ShiftRecord(
        nurse="RN Ortiz",
        date="2026-10-19",
        shift="Night",
        patient_name="Jane Doe",
        room="214-B",
        diagnosis="CHF exacerbation",
        code_status="R1",
        allergies="PCN",
        isolation="Contact",
        history="HTN, DM2",
        fall_risk=True,
        bed_alarm=True,
        orientation=OrientationFlags(True, True, True, True),
        vitals="BP 128/76 HR 82",
        pain="2/10 left hip",
        mobility="Walker, assist x1",
        wounds="Sacral stage 2, dressing changed",
        meds="Furosemide 40 mg 0600",
        io="900/1400",
        bowel_bladder="Continent",
        tasks="Daily weight",
        prns="Tylenol 650 at 0200",
        appointments_today="Echo 1100",
        appointments_upcoming="Cardiology 10/24",
        transport_arranged=True,
        notes="Family visiting at 1000",
    )


class FormatReportTests(unittest.TestCase):
    def test_filled_record_matches_expected_layout(self) -> None:
        self.assertEqual(format_report(_filled_record()), FILLED_REPORT)

    def test_blank_record_fallbacks(self) -> None:
        text = format_report(blank_record())
        for fragment in (
            "Allergies: None known",
            "Fall Risk: No",
            "Bed Alarm: Off",
            "Alert & Oriented To: Not oriented",
            "Appointments Today: None",
            "Upcoming Appointments: None",
            "Transport Arranged: No",
            "Notes: None",
            "Code Status: N/A",
            "History: N/A",
            "I/O: N/A",
            "Isolation: None",
        ):
            self.assertIn(fragment, text)
        self.assertIn("Diagnosis: \n", text)
        self.assertIn("Nurse:  | Date:  | Shift: \n", text)

    def test_exactly_four_headers_in_order(self) -> None:
        for record in (blank_record(), _filled_record()):
            lines = format_report(record).splitlines()
            headers = [line for line in lines if is_header_line(line)]
            self.assertEqual(
                headers,
                ["**SITUATION**", "**BACKGROUND**", "**ASSESSMENT**", "**RECOMMENDATION**"],
            )

    def test_sections_separated_by_single_blank_line(self) -> None:
        text = format_report(_filled_record())
        self.assertEqual(len(text.split("\n\n")), 4)
        self.assertNotIn("\n\n\n", text)
        self.assertEqual(text, text.strip())

    def test_trailing_whitespace_trim_set(self) -> None:
        trimmed = apply_change(blank_record(), "notes", "Call family\ufeff\u2003\n")
        self.assertTrue(format_report(trimmed).endswith("Notes: Call family"))

        for control in ("\x1c", "\x1f", "\x85"):
            kept = apply_change(blank_record(), "notes", f"Call family{control}")
            self.assertTrue(format_report(kept).endswith(f"Notes: Call family{control}"))

    def test_format_is_deterministic_and_idempotent(self) -> None:
        record = _filled_record()
        first = format_report(record)
        self.assertEqual(first, format_report(record))
        self.assertEqual(first, format_report(_filled_record()))

    def test_edits_flow_into_report(self) -> None:
        record = apply_change(blank_record(), "allergies", "Latex")
        record = apply_change(record, "bedAlarm", True)
        text = format_report(record)
        self.assertIn("Allergies: Latex", text)
        self.assertIn("Bed Alarm: On", text)


class FormatOrientationTests(unittest.TestCase):
    def test_fixed_enumeration_order(self) -> None:
        flags = OrientationFlags(person=True, place=False, time=True, situation=False)
        self.assertEqual(format_orientation(flags), "Person, Time")

    def test_order_independent_of_update_sequence(self) -> None:
        record = apply_change(blank_record(), "orientation.time", True)
        record = apply_change(record, "orientation.person", True)
        self.assertEqual(format_orientation(record.orientation), "Person, Time")

    def test_none_true_is_not_oriented(self) -> None:
        self.assertEqual(format_orientation(OrientationFlags()), "Not oriented")

    def test_single_flag(self) -> None:
        self.assertEqual(format_orientation(OrientationFlags(situation=True)), "Situation")


class SplitReportTests(unittest.TestCase):
    def test_split_marks_headers_and_strips_markers(self) -> None:
        sections = split_report(format_report(blank_record()))
        self.assertEqual(len(sections), 4)
        titles = [section[0].text for section in sections]
        self.assertEqual(titles, ["SITUATION", "BACKGROUND", "ASSESSMENT", "RECOMMENDATION"])
        for section in sections:
            self.assertTrue(section[0].is_header)
            self.assertFalse(any(line.is_header for line in section[1:]))
        self.assertEqual(sections[1][1].text, "History: N/A")

    def test_bare_marker_pair_is_not_a_header(self) -> None:
        self.assertFalse(is_header_line("**"))
        self.assertFalse(is_header_line("*"))
        self.assertTrue(is_header_line("****"))


class WriteReportTests(unittest.TestCase):
    def test_write_report_writes_exact_text(self) -> None:
        record = _filled_record()
        with TemporaryDirectory() as tmpdir:
            out_path = Path(tmpdir) / "nested" / "report.txt"
            final_path = write_report(record, out_path)
            self.assertEqual(final_path, out_path)
            self.assertEqual(final_path.read_text(encoding="utf-8"), format_report(record))


if __name__ == "__main__":
    unittest.main()
