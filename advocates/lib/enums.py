"""Generated enum definitions. Do not edit by hand."""
from __future__ import annotations
from enum import Enum

class Degree(str, Enum):
    MD = 'MD'
    PHD = 'PhD'
    MSW = 'MSW'

class SortOption(str, Enum):
    YEARS_DESC = 'years_desc'
    YEARS_ASC = 'years_asc'
    NAME_ASC = 'name_asc'

DEGREES = tuple(e.value for e in Degree)
SORT_OPTIONS = tuple(e.value for e in SortOption)
DEFAULT_SORT_OPTION = SortOption.YEARS_DESC

DEGREE_ALIAS_MAP = {
    "doctorate": "PhD",
    "m.d.": "MD",
    "m.s.w.": "MSW",
    "ph.d.": "PhD"
}
DEGREE_CANONICAL_MAP = {k.lower(): k for k in DEGREES}

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
