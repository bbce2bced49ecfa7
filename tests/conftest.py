import pytest

from roster_core.storage import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()
