import pytest

from tests.unit.fakes import FakeConnection


@pytest.fixture()
def conn():
    fake = FakeConnection()
    yield fake
    assert all(c.closed for c in fake.cursors), "cursor left open"
