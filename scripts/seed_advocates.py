#!/usr/bin/env python3
"""
Seed a local database with a deterministic set of advocates.
- Applies db/schema/*.sql in filename order (idempotent DDL).
- Replaces the contents of the advocates table with SAMPLE_ADVOCATES.

Usage: DSN=postgresql://... python scripts/seed_advocates.py [--keep]
"""
from __future__ import annotations
import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

import asyncpg

from advocates.lib.enums import DEGREES, normalize_degree

ROOT = Path(__file__).resolve().parent.parent
SCHEMA_DIR = ROOT / "db" / "schema"

logger = logging.getLogger("seed_advocates")

# (first, last, city, degree, specialties, years, phone)
SAMPLE_ADVOCATES = [
    ("John", "Doe", "New York", "MD", ["Bipolar", "LGBTQ", "Medication/Prescribing"], 10, 5551234567),
    ("Jane", "Smith", "Los Angeles", "PhD", ["Trauma & PTSD", "Personal growth"], 8, 5559876543),
    ("Alice", "Johnson", "Chicago", "MSW", ["Relationship Issues (family, friends, couple, etc)"], 5, 5554567890),
    ("Michael", "Brown", "Houston", "MD", ["Suicide History/Attempts", "Bipolar"], 12, 5556543210),
    ("Emily", "Davis", "Phoenix", "PhD", ["Eating disorders", "Women's issues"], 7, 5553210987),
    ("Chris", "Martinez", "Philadelphia", "MSW", ["LGBTQ", "Trauma & PTSD"], 9, 5557890123),
    ("Jessica", "Taylor", "San Antonio", "m.d.", ["Chronic pain", "Weight loss & nutrition"], 11, 5554561234),
    ("David", "Harris", "San Diego", "Ph.D.", ["Sleep issues", "Personal growth"], 6, 5557896543),
    ("Laura", "Clark", "Dallas", "MSW", ["Coaching (leadership, career, academic and wellness)"], 4, 5550123456),
    ("Daniel", "Lewis", "San Jose", "MD", ["Pediatrics", "Bipolar"], 13, 5553217654),
    ("Sarah", "Lee", "Austin", "PhD", ["Schizophrenia and psychotic disorders", "Medication/Prescribing"], 10, 5551238765),
    ("James", "King", "Jacksonville", "m.s.w.", ["Domestic abuse", "Trauma & PTSD"], 5, 5556540987),
    ("Megan", "Green", "San Francisco", "MD", ["Men's issues", "LGBTQ"], 14, 5559873456),
    ("Joshua", "Walker", "Columbus", "Doctorate", ["Life coaching", "Personal growth"], 9, 5556781234),
    ("Amanda", "Hall", "Fort Worth", "MSW", ["Attention and Hyperactivity (ADHD)", "Pediatrics"], 3, 5559872345),
    ("Ryan", "Doe", "New York", "PhD", ["Sleep issues", "Chronic pain"], 10, 5552468013),
]

INSERT_SQL = """
    INSERT INTO advocates
        (first_name, last_name, city, degree, payload, years_of_experience, phone_number)
    VALUES ($1, $2, $3, $4, $5::jsonb, $6, $7)
"""


def build_rows() -> list[tuple]:
    """Normalize sample data into insertable rows; reject unknown degrees."""
    rows = []
    for first, last, city, degree, specialties, years, phone in SAMPLE_ADVOCATES:
        canonical = normalize_degree(degree)
        if canonical not in DEGREES:
            raise ValueError(f"{first} {last}: unknown degree {degree!r}")
        rows.append((first, last, city, canonical, json.dumps(specialties), years, phone))
    return rows


async def apply_schema(conn: asyncpg.Connection) -> None:
    for path in sorted(SCHEMA_DIR.glob("*.sql")):
        logger.info("Applying %s", path.name)
        await conn.execute(path.read_text(encoding="utf-8"))


async def seed(dsn: str, keep: bool = False) -> int:
    rows = build_rows()
    conn = await asyncpg.connect(dsn)
    try:
        await apply_schema(conn)
        async with conn.transaction():
            if not keep:
                await conn.execute("TRUNCATE advocates RESTART IDENTITY")
            await conn.executemany(INSERT_SQL, rows)
    finally:
        await conn.close()
    logger.info("Inserted %d advocates", len(rows))
    return len(rows)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--keep", action="store_true", help="append instead of replacing existing rows")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    dsn = os.getenv("DSN")
    if not dsn:
        print("DSN environment variable is required", file=sys.stderr)
        return 1
    asyncio.run(seed(dsn, keep=args.keep))
    return 0


if __name__ == "__main__":
    sys.exit(main())
