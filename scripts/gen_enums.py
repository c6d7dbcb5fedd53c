#!/usr/bin/env python3
"""
Generate backend enum artifacts from YAML sources.
- Input: enums/degrees.yml, enums/sort-options.yml
- Output: advocates/lib/enums.py, db/schema/00_enums_generated.sql

Deterministic: canonical order preserved, alias keys sorted; stable formatting.
Validation: non-empty canonicals, no duplicates, aliases target canonicals.
"""
from __future__ import annotations
import json
import sys
from pathlib import Path
from typing import Any
import yaml

ROOT = Path(__file__).resolve().parent.parent
ENUMS_DIR = ROOT / "enums"
BACKEND_OUT = ROOT / "advocates" / "lib" / "enums.py"
SQL_OUT = ROOT / "db" / "schema" / "00_enums_generated.sql"

DEGREES_YAML = ENUMS_DIR / "degrees.yml"
SORT_OPTIONS_YAML = ENUMS_DIR / "sort-options.yml"


def load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def validate_enum(name: str, data: dict[str, Any]) -> tuple[list[str], dict[str, str]]:
    canonical = data.get("canonical") or []
    aliases = data.get("aliases") or {}
    if not isinstance(canonical, list) or not all(isinstance(x, str) for x in canonical):
        raise ValueError(f"{name}: canonical must be a list of strings")
    if not canonical:
        raise ValueError(f"{name}: canonical cannot be empty")
    canon_set = set()
    for c in canonical:
        if c.lower() in canon_set:
            raise ValueError(f"{name}: duplicate canonical value: {c}")
        canon_set.add(c.lower())
    if not isinstance(aliases, dict):
        raise ValueError(f"{name}: aliases must be a mapping")
    norm_aliases: dict[str, str] = {}
    for k, v in aliases.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ValueError(f"{name}: aliases keys/values must be strings")
        if v not in canonical:
            raise ValueError(f"{name}: alias target not in canonical: {k}->{v}")
        norm_aliases[k.lower()] = v
    aliases_sorted = dict(sorted(norm_aliases.items(), key=lambda kv: kv[0]))
    return list(canonical), aliases_sorted


def render_backend(degrees: list[str], degree_aliases: dict[str, str], sort_options: list[str]) -> str:
    degree_members = "\n    ".join(f"{c.upper()} = '{c}'" for c in degrees)
    sort_members = "\n    ".join(f"{c.upper()} = '{c}'" for c in sort_options)

    return f'''"""Generated enum definitions. Do not edit by hand."""
from __future__ import annotations
from enum import Enum

class Degree(str, Enum):
    {degree_members}

class SortOption(str, Enum):
    {sort_members}

DEGREES = tuple(e.value for e in Degree)
SORT_OPTIONS = tuple(e.value for e in SortOption)
DEFAULT_SORT_OPTION = SortOption.{sort_options[0].upper()}

DEGREE_ALIAS_MAP = {json.dumps(degree_aliases, indent=4)}
DEGREE_CANONICAL_MAP = {{k.lower(): k for k in DEGREES}}

def _normalize(value: str | None, aliases: dict[str, str], canonical_map: dict[str, str]) -> str | None:
    if value is None:
        return None
    v = value.strip()
    if not v:
        return None
    v_lower = v.lower()
    if v_lower in aliases:
        return aliases[v_lower]
    if v_lower in canonical_map:
        return canonical_map[v_lower]
    return v  # leave as-is; caller may decide to reject

def normalize_degree(value: str | None) -> str | None:
    return _normalize(value, DEGREE_ALIAS_MAP, DEGREE_CANONICAL_MAP)
'''  # noqa: E501


def render_sql(degrees: list[str]) -> str:
    degree_values = ",\n    ".join(f"('{d}')" for d in degrees)
    return f"""-- Generated from enums YAML. Do not edit by hand.
-- Advocate degrees lookup
CREATE TABLE IF NOT EXISTS advocate_degree (
    code TEXT PRIMARY KEY
);
INSERT INTO advocate_degree (code) VALUES
    {degree_values}
ON CONFLICT (code) DO NOTHING;
"""


def main() -> int:
    degree_data = load_yaml(DEGREES_YAML)
    sort_data = load_yaml(SORT_OPTIONS_YAML)

    degrees, degree_aliases = validate_enum("degrees", degree_data)
    sort_options, _ = validate_enum("sort-options", sort_data)

    backend = render_backend(degrees, degree_aliases, sort_options)
    sql = render_sql(degrees)

    BACKEND_OUT.parent.mkdir(parents=True, exist_ok=True)
    SQL_OUT.parent.mkdir(parents=True, exist_ok=True)

    BACKEND_OUT.write_text(backend, encoding="utf-8")
    SQL_OUT.write_text(sql, encoding="utf-8")

    print("Generated:")
    print(f"- {BACKEND_OUT}")
    print(f"- {SQL_OUT}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
