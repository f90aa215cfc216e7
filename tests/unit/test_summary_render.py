from __future__ import annotations

import re

from simple_csv_importer.models.import_result import ImportResult, ImportStatus
from simple_csv_importer.services.summary import render_summary_line

"""Unit tests for SUMMARY line rendering."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+file=(\S+)\s+status=([0-9]+)\s+encoding=(\S+)\s+extracted=([0-9]+)\s+"
    r"invalid=([0-9]+)\s+warnings=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_render_summary_line_success():
    result = ImportResult(
        status=ImportStatus.SUCCESS,
        extracted=({"name": "Alice"}, {"name": "Bob"}),
        encoding="shift_jis",
    )
    line = render_summary_line("users.csv", result, 2.0)

    match = SUMMARY_PATTERN.match(line)
    assert match, f"SUMMARY line should match regex: {line}"
    assert match.group(2) == "200"
    assert match.group(3) == "shift_jis"
    assert match.group(4) == "2"
    assert match.group(7) == "2"


def test_render_summary_line_partial():
    result = ImportResult(
        status=ImportStatus.PARTIALLY_ERROR,
        extracted=({"name": "Alice"},),
        invalid={3: ("age must be numeric",)},
        warnings=("Row 3: failed to extract the result of the line.",),
        encoding="utf-8",
    )
    line = render_summary_line("users.csv", result, 0.1234)
    assert line == (
        "SUMMARY file=users.csv status=105 encoding=utf-8 extracted=1 invalid=1 "
        "warnings=1 elapsed_sec=0.123"
    )


def test_render_summary_line_without_encoding():
    result = ImportResult(status=ImportStatus.PROPERTY_ERROR)
    line = render_summary_line("users.csv", result, 0)
    assert "status=5 encoding=- " in line
    assert line.endswith("elapsed_sec=0")


def test_render_summary_line_tiny_elapsed():
    result = ImportResult(status=ImportStatus.SUCCESS, encoding="utf-8")
    line = render_summary_line("users.csv", result, 0.000123)
    assert line.endswith("elapsed_sec=0.000123")
    assert SUMMARY_PATTERN.match(line)
