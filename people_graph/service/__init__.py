"""
people_graph.service - Graph consistency layer and API routing

Main components:
- PeopleGraphService: invariant-preserving operations over a PersonStore
- create_rest_router / register_error_handlers: FastAPI wiring
- serializers: response shapes for the REST contract

Usage:
    from people_graph.core import JsonPersonStore
    from people_graph.service import PeopleGraphService

    service = PeopleGraphService(JsonPersonStore("people.json"))
    service.create_person("Alice", relation="friend")
"""

from .service import PeopleGraphService, NeighborhoodResult
from .serializers import (
    serialize_person,
    serialize_people,
    serialize_neighborhood,
    serialize_mutation,
)
from .rest_api import create_rest_router, register_error_handlers

__all__ = [
    "PeopleGraphService",
    "NeighborhoodResult",
    "serialize_person",
    "serialize_people",
    "serialize_neighborhood",
    "serialize_mutation",
    "create_rest_router",
    "register_error_handlers",
]
