from __future__ import annotations

import re
from datetime import UTC, datetime

from inspection_import.models.processing_result import ImportResult
from inspection_import.services.summary import render_summary_line

"""SUMMARY line contract: key order and value formats are stable."""

PATTERN = re.compile(
    r"^SUMMARY sheets=\d+ read=\d+ accepted=\d+ rejected=\d+ submitted=\d+ elapsed_sec=\d+(\.\d+)?( dry_run=1)?$"
)


def test_summary_line_matches_contract():
    t = datetime.now(UTC)
    r = ImportResult(
        sheets=3, read=120, mapped=120, accepted=118, rejected=2, submitted=118,
        start_time=t, end_time=t, elapsed_seconds=0.523,
    )
    assert PATTERN.match(render_summary_line(r))


def test_accepted_plus_rejected_equals_read():
    t = datetime.now(UTC)
    r = ImportResult(
        sheets=1, read=5, mapped=5, accepted=4, rejected=1, submitted=0,
        start_time=t, end_time=t, elapsed_seconds=0.0, dry_run=True,
    )
    line = render_summary_line(r)
    assert PATTERN.match(line)
    values = dict(kv.split("=") for kv in line.split()[1:])
    assert int(values["accepted"]) + int(values["rejected"]) == int(values["read"])
