"""
People Graph package - acquaintance graph backend services.

This package provides the complete backend functionality organized into:
- core: Person model, error taxonomy and the entity store
- service: Graph consistency engine and API routing
- api_host: FastAPI application server

Usage:
    from people_graph.core import JsonPersonStore, Person
    from people_graph.service import PeopleGraphService, create_rest_router
    from people_graph.api_host import create_app, AppConfig
"""

__version__ = "1.0.0"
