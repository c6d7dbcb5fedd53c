"""Listing behaviour against a real PostgreSQL database.

Runs only when ADVOCATES_TEST_DSN points at a disposable database; the
advocates table is truncated and reseeded.
"""

import json
import os
from pathlib import Path

import pytest
import pytest_asyncio

from advocates.lib.enums import Degree, SortOption
from advocates.services.directory.core import Directory

from .test_handlers_advocates import call_advocates

TEST_DSN = os.getenv("ADVOCATES_TEST_DSN")
SCHEMA_DIR = Path(__file__).resolve().parents[3] / "db" / "schema"

pytestmark = pytest.mark.skipif(not TEST_DSN, reason="ADVOCATES_TEST_DSN not set")

CITIES = ["New York", "Austin", "new york", "Boston"]
DEGREES = ["MD", "PhD", "MSW"]
SPECIALTIES = [["Bipolar"], ["LGBTQ", "Bipolar"], ["Trauma & PTSD"], []]
LAST_NAMES = ["doe", "Doe", "Adams", "zimmer", "Brown", "brown"]


def _sample_rows():
    rows = []
    for i in range(37):
        rows.append((
            f"First{i}",
            LAST_NAMES[i % len(LAST_NAMES)],
            CITIES[i % len(CITIES)],
            DEGREES[i % len(DEGREES)],
            json.dumps(SPECIALTIES[i % len(SPECIALTIES)]),
            i % 5,  # many ties on years
            5550000000 + i,
        ))
    return rows


@pytest_asyncio.fixture
async def live_directory():
    directory = Directory(dsn=TEST_DSN, api_port=0)
    await directory.init_pool()
    async with directory.pool.acquire() as conn:
        for path in sorted(SCHEMA_DIR.glob("*.sql")):
            await conn.execute(path.read_text(encoding="utf-8"))
        await conn.execute("TRUNCATE advocates RESTART IDENTITY")
        await conn.executemany(
            """
            INSERT INTO advocates
                (first_name, last_name, city, degree, payload, years_of_experience, phone_number)
            VALUES ($1, $2, $3, $4, $5::jsonb, $6, $7)
            """,
            _sample_rows(),
        )
    try:
        yield directory
    finally:
        await directory.close_pool()


async def _walk(directory, limit=7, **filters):
    """Collect every page of a listing by following cursors."""
    items, cursor, pages = [], None, 0
    while True:
        page = await call_advocates(directory, cursor=cursor, limit=limit, **filters)
        items.extend(page.data)
        pages += 1
        if not page.page_info.has_next:
            return items, pages
        cursor = page.page_info.next_cursor


def _expected_order(items, sort):
    if sort == SortOption.YEARS_DESC:
        return sorted(items, key=lambda a: (-a.years_of_experience, a.id))
    if sort == SortOption.YEARS_ASC:
        return sorted(items, key=lambda a: (a.years_of_experience, a.id))
    return sorted(items, key=lambda a: (a.last_name.lower(), a.id))


@pytest.mark.asyncio
@pytest.mark.parametrize("sort", list(SortOption))
async def test_walk_is_complete_ordered_and_unique(live_directory, sort):
    items, pages = await _walk(live_directory, sort=sort)

    ids = [a.id for a in items]
    assert len(ids) == len(set(ids)) == 37
    assert pages == 6
    assert [a.id for a in _expected_order(items, sort)] == ids


@pytest.mark.asyncio
async def test_exact_page_multiple_has_no_empty_trailing_page(live_directory):
    items, pages = await _walk(live_directory, limit=37)
    assert len(items) == 37
    assert pages == 1


@pytest.mark.asyncio
async def test_filtered_walk_matches_single_page(live_directory):
    filters = {"city": "new york", "specialties": "Bipolar"}
    walked, _ = await _walk(live_directory, limit=3, **filters)
    whole = await call_advocates(live_directory, limit=50, **filters)

    assert [a.id for a in walked] == [a.id for a in whole.data]
    assert all(a.city.lower() == "new york" for a in walked)
    assert all("Bipolar" in a.specialties for a in walked)


@pytest.mark.asyncio
async def test_adding_filters_never_grows_results(live_directory):
    steps = [
        {},
        {"city": "york"},
        {"city": "york", "degree": Degree.MD},
        {"city": "york", "degree": Degree.MD, "min_exp": 2},
        {"city": "york", "degree": Degree.MD, "min_exp": 2, "specialties": "Bipolar"},
    ]
    counts = []
    for filters in steps:
        page = await call_advocates(live_directory, limit=50, **filters)
        counts.append(len(page.data))
    assert counts == sorted(counts, reverse=True)


@pytest.mark.asyncio
async def test_free_text_matches_specialty_elements(live_directory):
    page = await call_advocates(live_directory, limit=50, q="bipo")
    assert page.data
    assert all(any("bipo" in s.lower() for s in a.specialties) for a in page.data)


@pytest.mark.asyncio
async def test_free_text_tokens_are_anded(live_directory):
    page = await call_advocates(live_directory, limit=50, q="adams trauma")
    assert page.data
    for a in page.data:
        assert a.last_name == "Adams"
        assert "Trauma & PTSD" in a.specialties
