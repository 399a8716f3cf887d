"""Shared fixtures for memorial-match tests."""

import pytest

from memorial_match import MemorialCandidate
from memorial_match.sources import DEMO_MEMORIALS, SQLiteCandidatePool


@pytest.fixture
def john_smith():
    """A new (unsaved) memorial for John Smith."""
    return MemorialCandidate(
        first_name="John",
        last_name="Smith",
        birth_date="1945-03-15",
        death_date="2020-08-22",
        birth_place="Chicago, Illinois",
    )


@pytest.fixture
def john_smyth():
    """Existing memorial with a one-letter surname difference."""
    return MemorialCandidate(
        id="demo-4",
        first_name="John",
        last_name="Smyth",
        birth_date="1946-03-15",
        death_date="2020-09-01",
        birth_place="Chicago, IL",
    )


@pytest.fixture
def demo_memorials():
    return list(DEMO_MEMORIALS)


@pytest.fixture
def sqlite_pool(tmp_path):
    """SQLite pool seeded with the demo memorials."""
    pool = SQLiteCandidatePool(tmp_path / "memorials.db")
    for memorial in DEMO_MEMORIALS:
        pool.add(memorial)
    yield pool
    pool.close()
