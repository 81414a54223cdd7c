"""
REST API router for people graph operations.

Provides FastAPI routes that expose PeopleGraphService methods via HTTP
endpoints. This module handles HTTP-specific concerns like request/response
formatting, error mapping, and route definitions.

Every error response has the body {"error": message}:
- PersonNotFoundError -> 404
- PersonConflictError -> 400
- StoreFailureError and anything unexpected -> 500

Usage:
    from fastapi import FastAPI
    from people_graph.core import JsonPersonStore
    from people_graph.service import PeopleGraphService, create_rest_router, register_error_handlers

    app = FastAPI()
    service = PeopleGraphService(JsonPersonStore("people.json"))
    app.include_router(create_rest_router(service), prefix="/api")
    register_error_handlers(app)
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.requests import Request

from people_graph.core import (
    Location,
    PersonConflictError,
    PersonNotFoundError,
    PersonUpdate,
    StoreFailureError,
)

from .serializers import (
    serialize_mutation,
    serialize_neighborhood,
    serialize_people,
)
from .service import PeopleGraphService

logger = logging.getLogger(__name__)


# ==================== Request Models ====================

class AddConnectionRequest(BaseModel):
    """Request model for adding a connection."""
    connectionName: str = Field(..., description="Name of the person to connect to")


class CreatePersonRequest(BaseModel):
    """Request model for creating a person."""
    name: str = Field(..., min_length=1, description="Unique person name")
    relation: Optional[str] = Field("", description="Free-text relation label")
    location: Optional[Location] = Field(None, description="Optional {lat, lon}")


class UpdatePersonRequest(PersonUpdate):
    """Request model for a partial person update. Omitted fields are kept."""


# ==================== Router Factory ====================

def create_rest_router(service: PeopleGraphService, prefix: str = "") -> APIRouter:
    """
    Create a FastAPI router with all people graph endpoints.

    Args:
        service: PeopleGraphService instance to use for operations
        prefix: Optional URL prefix for all routes

    Returns:
        Configured APIRouter
    """
    router = APIRouter(prefix=prefix, tags=["people"])

    @router.get("/people")
    def list_people() -> List[Dict[str, Any]]:
        """List every person (for testing and inspection)."""
        return serialize_people(service.list_people())

    @router.post("/people")
    def create_person(request: CreatePersonRequest) -> Dict[str, Any]:
        """Create a person with an empty connection list."""
        person = service.create_person(
            name=request.name,
            relation=request.relation,
            location=request.location,
        )
        return serialize_mutation(person)

    @router.get("/person/{name}")
    def get_person(name: str) -> Dict[str, Any]:
        """Get a person and the records of its connections."""
        return serialize_neighborhood(service.resolve_person_with_neighbors(name))

    @router.put("/person/{name}")
    def update_person(name: str, request: UpdatePersonRequest) -> Dict[str, Any]:
        """Update only the provided fields; a new name is propagated to all connections."""
        return serialize_mutation(service.rename_person(name, request))

    @router.post("/person/{name}/connections")
    def add_connection(name: str, request: AddConnectionRequest) -> Dict[str, Any]:
        """Add a connection to an existing person."""
        return serialize_mutation(service.add_connection(name, request.connectionName))

    @router.delete("/person/{name}/connections/{connection_name}")
    def remove_connection(name: str, connection_name: str) -> Dict[str, Any]:
        """Remove a connection. Removing a missing connection is not an error."""
        return serialize_mutation(service.remove_connection(name, connection_name))

    return router


# ==================== Error Handlers ====================

def register_error_handlers(app: FastAPI) -> None:
    """Map people graph errors to {"error": message} responses."""

    @app.exception_handler(PersonNotFoundError)
    async def not_found_handler(request: Request, exc: PersonNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(PersonConflictError)
    async def conflict_handler(request: Request, exc: PersonConflictError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(StoreFailureError)
    async def store_failure_handler(request: Request, exc: StoreFailureError) -> JSONResponse:
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})
