"""Optional runtime guard to ensure enums match database lookup tables."""

from __future__ import annotations

import logging
from asyncpg import Pool, UndefinedTableError

from advocates.lib.enums import DEGREES

logger = logging.getLogger(__name__)


async def _fetch_codes(pool: Pool, query: str, column: str) -> set[str] | None:
    """Fetch a set of codes; return None if the table is missing."""
    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch(query)
            return {str(row[column]) for row in rows if row[column] is not None}
    except UndefinedTableError:
        logger.warning("Enum guard: table for %r missing; skipping check", query)
        return None
    except Exception as exc:
        logger.warning("Enum guard: failed running %r: %s", query, exc)
        return None


async def validate_enums(pool: Pool, strict: bool = False) -> None:
    """Compare the generated Degree enum with the lookup table and stored rows.

    Args:
        pool: Pool to read from.
        strict: Raise instead of warning when drift is found.

    Raises:
        RuntimeError: If ``strict`` and the database disagrees with ``DEGREES``.
    """
    db_codes = await _fetch_codes(pool, "SELECT code FROM advocate_degree", "code")
    db_used = await _fetch_codes(pool, "SELECT DISTINCT degree FROM advocates", "degree")

    issues: list[str] = []

    if db_codes is not None:
        missing = set(DEGREES) - db_codes
        extra = db_codes - set(DEGREES)
        if missing:
            issues.append(f"advocate_degree missing {sorted(missing)}")
        if extra:
            issues.append(f"advocate_degree has extras {sorted(extra)}")

    if db_used is not None:
        unknown = db_used - set(DEGREES)
        if unknown:
            issues.append(f"advocates.degree holds unknown values {sorted(unknown)}")

    if not issues:
        logger.info("Enum guard: DB degrees match generated enums")
        return

    msg = "; ".join(issues)
    if strict:
        raise RuntimeError(f"Enum guard failed: {msg}")
    logger.warning("Enum guard warning: %s", msg)
