"""Headless runner and CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from handoffdesk.app import main
from handoffdesk.cli import create_headless_options, parse_arguments
from handoffdesk.headless import HeadlessOptions, build_record, execute_headless, parse_assignment
from handoffdesk.logs.rotating import get_logger
from handoffdesk.report.sbar_writer import format_report


def test_parse_assignment_keeps_text_verbatim():
    assert parse_assignment("patientName=Jane Doe") == ("patientName", "Jane Doe")
    assert parse_assignment("vitals=BP 120/80 = stable") == ("vitals", "BP 120/80 = stable")
    assert parse_assignment("notes=") == ("notes", "")


@pytest.mark.parametrize("token, expected", [("yes", True), ("On", True), ("1", True), ("no", False), ("off", False)])
def test_parse_assignment_coerces_checkbox_tokens(token, expected):
    assert parse_assignment(f"fallRisk={token}") == ("fallRisk", expected)
    assert parse_assignment(f"orientation.place={token}") == ("orientation.place", expected)


@pytest.mark.parametrize("raw", ["patientName", "bloodType=O+", "bedAlarm=maybe", "orientation.mood=yes"])
def test_parse_assignment_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        parse_assignment(raw)


def test_build_record_applies_changes_in_order():
    record = build_record([("room", "101"), ("room", "102"), ("orientation.time", True)])
    assert record.room == "102"
    assert record.orientation.time is True
    assert record.orientation.person is False


def test_execute_headless_formats_and_writes(tmp_path: Path):
    output = tmp_path / "exports" / "handoff.txt"
    options = HeadlessOptions(
        assignments=[("patientName", "Jane Doe"), ("transportArranged", True)],
        output=output,
        log_dir=tmp_path / "logs",
    )
    result = execute_headless(options)

    assert result.exit_code == 0
    assert result.txt_path == output
    assert "Patient: Jane Doe | Room: " in result.report_text
    assert "Transport Arranged: Yes" in result.report_text
    assert output.read_text(encoding="utf-8") == result.report_text
    assert result.report_text == format_report(result.record)
    assert result.log_file.parent == (tmp_path / "logs").resolve()


def test_repeated_runs_release_their_log_files(tmp_path: Path):
    base_logger = get_logger()
    handlers_before = list(base_logger.handlers)

    results = [
        execute_headless(
            HeadlessOptions(
                assignments=[("room", f"10{index}")],
                log_dir=tmp_path,
                log_file=tmp_path / f"run{index}.log",
            )
        )
        for index in range(3)
    ]

    assert base_logger.handlers == handlers_before
    for index, result in enumerate(results):
        assert result.log_file == (tmp_path / f"run{index}.log").resolve()
        lines = result.log_file.read_text(encoding="utf-8").splitlines()
        assert sum("Headless start" in line for line in lines) == 1


def test_create_headless_options_from_args(tmp_path: Path):
    args, extras = parse_arguments(
        [
            "--headless",
            "--set",
            "nurse=RN Ortiz",
            "--set",
            "bedAlarm=yes",
            "--log-dir",
            str(tmp_path),
            "-style",
            "fusion",
        ]
    )
    options = create_headless_options(args)
    assert options.assignments == [("nurse", "RN Ortiz"), ("bedAlarm", True)]
    assert options.output is None
    assert extras == ["-style", "fusion"]


def test_create_headless_options_requires_flag():
    args, _ = parse_arguments([])
    with pytest.raises(ValueError):
        create_headless_options(args)


def test_main_headless_prints_report(tmp_path: Path, capsys):
    exit_code = main(
        ["--headless", "--set", "allergies=Latex", "--log-dir", str(tmp_path)]
    )
    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out.startswith("**SITUATION**")
    assert "Allergies: Latex" in captured.out


def test_main_headless_invalid_field_exits_2(tmp_path: Path, capsys):
    exit_code = main(["--headless", "--set", "bloodType=O+", "--log-dir", str(tmp_path)])
    captured = capsys.readouterr()
    assert exit_code == 2
    assert "HEADLESS_MISS reason=invalid_args" in captured.out
    assert "bloodType" in captured.err
