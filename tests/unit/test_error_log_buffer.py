from __future__ import annotations

import json
import re
from pathlib import Path

from inspection_import.logging.error_log import ErrorLogBuffer
from inspection_import.models.error_record import READ_ERROR, SUBMIT_ERROR, ErrorRecord


def test_flush_empty_writes_nothing(temp_workdir: Path):
    buf = ErrorLogBuffer()
    assert buf.flush() is None
    assert list((temp_workdir / "logs").iterdir()) == []


def test_flush_writes_json_lines(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("in.xlsx", "<WORKBOOK>", -1, READ_ERROR, "cannot read"))
    buf.append(ErrorRecord.create("in.xlsx", "<WORKBOOK>", -1, SUBMIT_ERROR, "배치 실패"))
    path = buf.flush()
    assert path is not None
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    second = json.loads(lines[1])
    assert second["error_type"] == SUBMIT_ERROR
    assert second["message"] == "배치 실패"
    assert "배치" in lines[1]  # non-ASCII kept


def test_flush_appends_to_same_file(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "nested" / "logs")
    buf.append(ErrorRecord.create("a.xlsx", "S", 2, READ_ERROR, "x"))
    first = buf.flush()
    buf.append(ErrorRecord.create("a.xlsx", "S", 3, READ_ERROR, "y"))
    second = buf.flush()
    assert first == second
    assert len(first.read_text(encoding="utf-8").splitlines()) == 2


def test_error_record_timestamp_is_utc_z():
    rec = ErrorRecord.create("a.xlsx", "S", 1, READ_ERROR, "m")
    assert rec.timestamp.endswith("Z")


def test_counts_by_type(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.append(ErrorRecord.create("a.xlsx", "<WORKBOOK>", -1, READ_ERROR, "x"))
    buf.append(ErrorRecord.create("a.xlsx", "<WORKBOOK>", -1, SUBMIT_ERROR, "y"))
    buf.append(ErrorRecord.create("a.xlsx", "<WORKBOOK>", -1, SUBMIT_ERROR, "z"))
    assert buf.counts_by_type() == {READ_ERROR: 1, SUBMIT_ERROR: 2}
    assert len(buf) == 3
    buf.flush()
    assert len(buf) == 0
