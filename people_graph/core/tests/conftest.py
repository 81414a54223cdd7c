"""
Pytest fixtures for core tests.

Provides:
- Temporary JSON-backed stores
- In-memory stores
- Pre-populated stores
"""

import os
import tempfile
from typing import Generator

import pytest

from people_graph.core import InMemoryPersonStore, JsonPersonStore, Location, Person


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def json_store(temp_dir: str) -> JsonPersonStore:
    """Create an empty JsonPersonStore in a temporary directory."""
    return JsonPersonStore(json_path=os.path.join(temp_dir, "test_people.json"))


@pytest.fixture
def memory_store() -> InMemoryPersonStore:
    """Create an empty in-memory store."""
    return InMemoryPersonStore()


@pytest.fixture
def sample_people() -> list:
    """Sample people: Alice -> Bob, Carol -> Alice, Dave -> (missing) Erin."""
    return [
        Person(name="Alice", relation="friend", location=Location(lat=59.33, lon=18.06),
               connections=["Bob"]),
        Person(name="Bob", relation="colleague"),
        Person(name="Carol", relation="sister", connections=["Alice", "Bob"]),
        Person(name="Dave", relation="neighbor", connections=["Erin"]),
    ]


@pytest.fixture
def populated_store(json_store: JsonPersonStore, sample_people: list) -> JsonPersonStore:
    """Create a JsonPersonStore populated with sample people."""
    for person in sample_people:
        json_store.insert(person)
    return json_store
