"""
people_graph.core - Entity store layer for the acquaintance graph

This package provides the Person model, the error taxonomy and the keyed
person store, without any dependencies on HTTP or application wiring.

Main components:
- PersonStore: interface the graph service depends on
- InMemoryPersonStore / JsonPersonStore: implementations
- Models: Person, Location, PersonUpdate
- Errors: PersonNotFoundError, PersonConflictError, StoreFailureError

Usage:
    from people_graph.core import JsonPersonStore, Person

    store = JsonPersonStore("path/to/people.json")
    store.insert(Person(name="Alice", relation="friend"))
    alice = store.find_by_name("Alice")
"""

from .storage import PersonStore, InMemoryPersonStore, JsonPersonStore

from .models import Person, Location, PersonUpdate

from .errors import (
    PeopleGraphError,
    PersonNotFoundError,
    PersonConflictError,
    ConflictError,
    StoreFailureError,
)

__all__ = [
    # Storage
    "PersonStore",
    "InMemoryPersonStore",
    "JsonPersonStore",

    # Models
    "Person",
    "Location",
    "PersonUpdate",

    # Errors
    "PeopleGraphError",
    "PersonNotFoundError",
    "PersonConflictError",
    "ConflictError",
    "StoreFailureError",
]
