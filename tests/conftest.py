"""Shared fixtures."""

import pytest

from mates_split.db import Database
from mates_split.service import HouseholdService


@pytest.fixture
def db(tmp_path):
    """Create a temporary database."""
    database = Database(tmp_path / "test.db", user_id="user-1")
    yield database
    database.close()


@pytest.fixture
def service(db):
    """Create a HouseholdService backed by the temporary database."""
    return HouseholdService(db)
