from __future__ import annotations

from pathlib import Path

import pytest

from inspection_import.config.loader import ConfigError, load_config
from inspection_import.models.config_models import DEFAULT_ITEM_TYPE_RULES, FieldCandidates, ItemTypeRule


def test_load_minimal_config(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.api.base_url == "http://localhost:3001"
    assert cfg.api.timeout_seconds == 5.0
    assert cfg.sheets is None
    assert cfg.header_row == 0
    assert cfg.fallback_date == "2025-01-01"
    assert cfg.field_candidates == FieldCandidates()
    assert cfg.item_type_rules == DEFAULT_ITEM_TYPE_RULES


def test_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "nope.yml")


def test_invalid_yaml(temp_workdir: Path):
    p = temp_workdir / "config" / "import.yml"
    p.write_text("api: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(p)


def test_missing_api_section(temp_workdir: Path):
    p = temp_workdir / "config" / "import.yml"
    p.write_text("header_row: 0\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(p)


def test_unknown_key_rejected(write_config: Path):
    write_config.write_text(write_config.read_text(encoding="utf-8") + "database: {}\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_bad_fallback_date(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace('"2025-01-01"', '"2025-13-40"')
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="fallback_date"):
        load_config(write_config)


def test_custom_candidates_and_rules(temp_workdir: Path):
    p = temp_workdir / "config" / "import.yml"
    p.write_text(
        """api:
  base_url: http://api.local/
sheets: [Sheet1]
header_row: 1
field_candidates:
  supplier: [Vendor, 업체]
item_type_rules:
  - {match: contains, pattern: PAINT, value: 외주도장}
""",
        encoding="utf-8",
    )
    cfg = load_config(p)
    assert cfg.api.base_url == "http://api.local"
    assert cfg.api.timeout_seconds == 30.0
    assert cfg.sheets == ["Sheet1"]
    assert cfg.header_row == 1
    assert cfg.field_candidates.supplier == ("Vendor", "업체")
    assert cfg.field_candidates.date == FieldCandidates().date
    assert cfg.item_type_rules == (ItemTypeRule("contains", "PAINT", "외주도장"),)


def test_empty_rule_list_disables_aliasing(write_config: Path):
    write_config.write_text(write_config.read_text(encoding="utf-8") + "item_type_rules: []\n", encoding="utf-8")
    assert load_config(write_config).item_type_rules == ()


def test_env_overrides(write_config: Path, monkeypatch):
    monkeypatch.setenv("INSPECTION_API_URL", "http://qms.example:8080/")
    monkeypatch.setenv("INSPECTION_API_TIMEOUT", "2.5")
    cfg = load_config(write_config)
    assert cfg.api.base_url == "http://qms.example:8080"
    assert cfg.api.timeout_seconds == 2.5


def test_env_timeout_not_a_number(write_config: Path, monkeypatch):
    monkeypatch.setenv("INSPECTION_API_TIMEOUT", "soon")
    with pytest.raises(ConfigError, match="INSPECTION_API_TIMEOUT"):
        load_config(write_config)


def test_repository_default_config_is_valid(monkeypatch):
    monkeypatch.delenv("INSPECTION_API_URL", raising=False)
    monkeypatch.delenv("INSPECTION_API_TIMEOUT", raising=False)
    repo_cfg = Path(__file__).resolve().parents[2] / "config" / "import.yml"
    cfg = load_config(repo_cfg)
    assert cfg.field_candidates == FieldCandidates()
    assert cfg.item_type_rules == DEFAULT_ITEM_TYPE_RULES
