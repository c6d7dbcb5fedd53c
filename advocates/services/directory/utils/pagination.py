"""Opaque keyset cursors for the advocates listing.

A cursor carries the sort mode it was issued under, the ordering keys of the
last row on the page, and a short hash of the filter set. It is valid for
continuation only while both the sort mode and the filter hash are unchanged.
"""

import base64
import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from advocates.lib.enums import SortOption

FILTERS_HASH_LENGTH = 16

# Issued cursors are well under this; longer tokens are rejected before decoding.
MAX_CURSOR_LENGTH = 512

# Bounds of a PostgreSQL INTEGER column (id, years_of_experience).
PG_INT_MIN = -2**31
PG_INT_MAX = 2**31 - 1

INVALID_CURSOR = "Invalid cursor token"
SORT_CHANGED = "Sort option changed, cursor invalid"
FILTERS_CHANGED = "Filters changed, cursor invalid"
MISSING_SORT_FIELD = "Cursor missing required field for sort"

# Cursor key holding the primary ordering value for each sort mode.
SORT_CURSOR_FIELDS: Dict[SortOption, str] = {
    SortOption.YEARS_DESC: "years",
    SortOption.YEARS_ASC: "years",
    SortOption.NAME_ASC: "lastName",
}

_CURSOR_FIELD_TYPES: Dict[str, type] = {
    "years": int,
    "lastName": str,
}


class CursorError(ValueError):
    """A cursor that cannot continue the current listing."""


@dataclass
class CursorPayload:
    """Decoded cursor contents."""
    sort: str
    keys: Dict[str, Any] = field(default_factory=dict)
    filters_hash: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"sort": self.sort, "keys": self.keys, "filtersHash": self.filters_hash}


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def hash_filters(
    q: Optional[str] = None,
    city: Optional[str] = None,
    degree: Optional[str] = None,
    min_exp: Optional[int] = None,
    specialties: Optional[Iterable[str]] = None,
) -> str:
    """Hash a filter set into a short, order-independent fingerprint.

    Absent values default to ``""`` (text) and ``0`` (minimum experience);
    specialties are sorted before joining so their order never matters.

    Returns:
        The first 16 hex characters of the SHA-256 digest.
    """
    normalized = {
        "q": (q or "").strip(),
        "city": (city or "").strip(),
        "degree": getattr(degree, "value", degree) or "",
        "minExp": min_exp or 0,
        "specialties": ",".join(sorted(specialties or [])),
    }
    digest = hashlib.sha256(_compact_json(normalized).encode("utf-8")).hexdigest()
    return digest[:FILTERS_HASH_LENGTH]


def encode_cursor(payload: CursorPayload) -> str:
    """Encode a cursor payload as unpadded URL-safe base64 JSON."""
    raw = _compact_json(payload.to_dict()).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_cursor(cursor: str) -> Optional[CursorPayload]:
    """Decode a cursor token.

    Returns:
        The payload, or ``None`` when the token is too long, is not valid
        base64 JSON, or lacks any of ``sort``, ``keys`` or ``filtersHash``.
    """
    if not isinstance(cursor, str) or len(cursor) > MAX_CURSOR_LENGTH:
        return None
    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        data = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
    except (ValueError, TypeError, RecursionError):
        return None

    if not isinstance(data, dict):
        return None

    sort = data.get("sort")
    keys = data.get("keys")
    filters_hash = data.get("filtersHash")
    if not sort or not keys or not filters_hash:
        return None
    if not isinstance(sort, str) or not isinstance(keys, dict) or not isinstance(filters_hash, str):
        return None

    return CursorPayload(sort=sort, keys=keys, filters_hash=filters_hash)


def _is_int4(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and PG_INT_MIN <= value <= PG_INT_MAX


def _has_key(keys: Dict[str, Any], name: str, expected: type) -> bool:
    if name not in keys:
        return False
    value = keys[name]
    if value is None:
        return True
    if expected is int:
        return _is_int4(value)
    return isinstance(value, expected)


def validate_cursor(cursor: str, sort: SortOption, filters_hash: str) -> CursorPayload:
    """Decode a cursor and check it against the current request.

    Checks run in order: structure, sort mode, filter hash, required keys.

    Raises:
        CursorError: With the reason of the first failed check.
    """
    payload = decode_cursor(cursor)
    if payload is None:
        raise CursorError(INVALID_CURSOR)

    sort = SortOption(sort)
    if payload.sort != sort.value:
        raise CursorError(SORT_CHANGED)

    if payload.filters_hash != filters_hash:
        raise CursorError(FILTERS_CHANGED)

    sort_field = SORT_CURSOR_FIELDS[sort]
    if not _is_int4(payload.keys.get("id")):
        raise CursorError(MISSING_SORT_FIELD)
    if not _has_key(payload.keys, sort_field, _CURSOR_FIELD_TYPES[sort_field]):
        raise CursorError(MISSING_SORT_FIELD)

    return payload


def cursor_keys_from_record(record: Any) -> Dict[str, Any]:
    """Ordering keys of a result row, for every sort mode."""
    return {
        "id": record["id"],
        "years": record["years_of_experience"],
        "lastName": record["last_name"],
    }


def paginate(
    records: Sequence[Any],
    limit: int,
    sort: SortOption,
    filters_hash: str,
) -> Tuple[List[Any], Optional[str]]:
    """Trim a ``limit + 1`` fetch to one page and build the next cursor.

    Returns:
        Tuple of (page rows, next cursor or None when this is the last page).
    """
    if len(records) <= limit:
        return list(records), None

    page = list(records[:limit])
    payload = CursorPayload(
        sort=SortOption(sort).value,
        keys=cursor_keys_from_record(page[-1]),
        filters_hash=filters_hash,
    )
    return page, encode_cursor(payload)
