"""
Serialization helpers for people graph responses.

Converts Person records and service results into JSON-ready dicts
whose shapes match the public REST contract.
"""

from typing import Any, Dict, List

from people_graph.core import Person

from .service import NeighborhoodResult


def serialize_person(person: Person) -> Dict[str, Any]:
    """Convert a Person to a JSON-serializable dict."""
    return person.to_dict()


def serialize_people(people: List[Person]) -> List[Dict[str, Any]]:
    """Convert a list of Person records."""
    return [serialize_person(p) for p in people]


def serialize_neighborhood(result: NeighborhoodResult) -> Dict[str, Any]:
    """Serialize a person with its resolved connections."""
    return {
        "mainPerson": serialize_person(result.subject),
        "connections": serialize_people(result.neighbors),
    }


def serialize_mutation(person: Person) -> Dict[str, Any]:
    """Serialize the result of a successful write."""
    return {
        "success": True,
        "person": serialize_person(person),
    }
