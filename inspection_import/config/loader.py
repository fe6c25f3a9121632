from __future__ import annotations

import json
import os
from datetime import date
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_FALLBACK_DATE,
    DEFAULT_ITEM_TYPE_RULES,
    ApiConfig,
    FieldCandidates,
    ImportConfig,
    ItemTypeRule,
)

"""Config loader.

Responsibilities:
- Load YAML config (default config/import.yml)
- Validate against the packaged JSON schema (config_schema.json)
- Apply defaults (synonym tables, aliasing rules, fallback date, timeout)
- Let INSPECTION_API_URL / INSPECTION_API_TIMEOUT override the api section
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")

ENV_API_URL = "INSPECTION_API_URL"
ENV_API_TIMEOUT = "INSPECTION_API_TIMEOUT"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails schema validation (missing required keys, wrong types,
            unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _resolve_api(raw: dict[str, Any]) -> ApiConfig:
    # 環境変数が YAML より優先
    base_url = os.getenv(ENV_API_URL) or raw["base_url"]
    timeout_raw = os.getenv(ENV_API_TIMEOUT)
    if timeout_raw:
        try:
            timeout = float(timeout_raw)
        except ValueError as e:
            raise ConfigError(f"{ENV_API_TIMEOUT} must be a number: {timeout_raw!r}") from e
    else:
        timeout = float(raw.get("timeout_seconds", 30.0))
    return ApiConfig(base_url=base_url.rstrip("/"), timeout_seconds=timeout)


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    fallback_date = str(data.get("fallback_date", DEFAULT_FALLBACK_DATE))
    try:
        date.fromisoformat(fallback_date)
    except ValueError as e:
        raise ConfigError(f"fallback_date is not a calendar date: {fallback_date}") from e

    rules_raw = data.get("item_type_rules")
    rules = (
        tuple(ItemTypeRule(r["match"], r["pattern"], r["value"]) for r in rules_raw)
        if rules_raw is not None
        else DEFAULT_ITEM_TYPE_RULES
    )

    return ImportConfig(
        api=_resolve_api(data["api"]),
        field_candidates=FieldCandidates.from_mapping(data.get("field_candidates")),
        item_type_rules=rules,
        fallback_date=fallback_date,
        sheets=data.get("sheets"),
        header_row=data.get("header_row", 0),
    )
