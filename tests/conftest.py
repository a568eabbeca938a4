import pytest

from tests.factories import TODAY, DraftFactory, ProfileFactory


@pytest.fixture
def today():
    """Reference date used for every age calculation in the tests."""
    return TODAY


@pytest.fixture
def stored_profile():
    return ProfileFactory.create()


@pytest.fixture
def valid_draft():
    return DraftFactory.create()
