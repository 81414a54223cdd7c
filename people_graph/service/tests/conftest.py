"""
Pytest fixtures for people_graph.service tests.

Provides shared test fixtures for:
- Temporary person stores
- Pre-populated graph data
- PeopleGraphService instances
- FastAPI test clients
"""

import os
import tempfile
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from people_graph.core import JsonPersonStore, Location, Person
from people_graph.service import PeopleGraphService, create_rest_router, register_error_handlers


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def empty_store(temp_dir: str) -> JsonPersonStore:
    """Create an empty JsonPersonStore instance for testing."""
    return JsonPersonStore(json_path=os.path.join(temp_dir, "test_people.json"))


@pytest.fixture
def empty_service(empty_store: JsonPersonStore) -> PeopleGraphService:
    """Create a PeopleGraphService with an empty store."""
    return PeopleGraphService(empty_store)


@pytest.fixture
def sample_people() -> list:
    """
    Sample acquaintance graph:
    A -> [B], C -> [A], B -> [], D -> [A, Ghost] (Ghost does not exist)
    """
    return [
        Person(name="A", relation="friend", location=Location(lat=10.0, lon=20.0),
               connections=["B"]),
        Person(name="B", relation="colleague"),
        Person(name="C", relation="cousin", connections=["A"]),
        Person(name="D", relation="neighbor", connections=["A", "Ghost"]),
    ]


@pytest.fixture
def populated_store(empty_store: JsonPersonStore, sample_people: list) -> JsonPersonStore:
    """Create a JsonPersonStore populated with sample people."""
    for person in sample_people:
        empty_store.insert(person)
    return empty_store


@pytest.fixture
def populated_service(populated_store: JsonPersonStore) -> PeopleGraphService:
    """Create a PeopleGraphService with pre-populated data."""
    return PeopleGraphService(populated_store)


def _build_client(service: PeopleGraphService) -> TestClient:
    app = FastAPI()
    app.include_router(create_rest_router(service), prefix="/api")
    register_error_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def api_client(populated_service: PeopleGraphService) -> TestClient:
    """TestClient for the REST router backed by the populated service."""
    return _build_client(populated_service)


@pytest.fixture
def empty_api_client(empty_service: PeopleGraphService) -> TestClient:
    """TestClient for the REST router backed by an empty service."""
    return _build_client(empty_service)
