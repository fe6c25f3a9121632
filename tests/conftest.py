# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from inspection_import.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        # keep a developer's shell settings out of the loader; setenv first so
        # values loaded from a test .env are removed again on teardown
        for name in ("INSPECTION_API_URL", "INSPECTION_API_TIMEOUT"):
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """api:
  base_url: http://localhost:3001
  timeout_seconds: 5
sheets: null
header_row: 0
fallback_date: "2025-01-01"
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


def make_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Write a real .xlsx; the first row of every sheet is the header row."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def inspection_workbook(temp_workdir: Path) -> Path:
    """Two sheets: one real inspection row and one row with nothing identifying."""
    return make_excel(
        temp_workdir / "data" / "inspections.xlsx",
        {
            "1월": [
                ["입고일", "입고업체", "제품명", "입고수량(EA)", "검사수량(EA)", "불량수량(EA)", "품목유형"],
                [45992, "ACME", "Valve", 100, 10, 2, "중국공장"],
            ],
            "2월": [
                ["입고일", "입고업체", "제품명", "비고"],
                [None, None, None, "memo only"],
            ],
        },
    )

