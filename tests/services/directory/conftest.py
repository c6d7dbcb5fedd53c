"""Directory test fixtures and utilities."""
import json

import pytest


class MockRecord:
    """Mock asyncpg record that supports both dictionary and attribute access."""

    def __init__(self, **kwargs):
        self._data = kwargs
        for key, value in kwargs.items():
            setattr(self, key, value)

    def __getitem__(self, key):
        return self._data[key]

    def get(self, key, default=None):
        return self._data.get(key, default)

    def __contains__(self, key):
        return key in self._data

    def keys(self):
        return self._data.keys()

    def items(self):
        return self._data.items()


def make_advocate_record(
    id: int,
    first_name: str = "John",
    last_name: str = "Doe",
    city: str = "New York",
    degree: str = "MD",
    specialties=None,
    years_of_experience=10,
    phone_number: int = 5551234567,
    as_json: bool = False,
) -> MockRecord:
    """Build a listing row as asyncpg would return it.

    ``as_json`` mimics a pool without a jsonb codec, where ``specialties``
    arrives as a JSON string.
    """
    specialties = ["Bipolar"] if specialties is None else specialties
    return MockRecord(
        id=id,
        first_name=first_name,
        last_name=last_name,
        city=city,
        degree=degree,
        specialties=json.dumps(specialties) if as_json else specialties,
        years_of_experience=years_of_experience,
        phone_number=phone_number,
    )


@pytest.fixture
def advocate_rows():
    """Twenty-five rows ordered by years desc, id asc."""
    return [
        make_advocate_record(id=i, last_name=f"Name{i:02d}", years_of_experience=30 - i)
        for i in range(1, 26)
    ]
