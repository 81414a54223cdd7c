"""
App Host Server - FastAPI application exposing PeopleGraphService.

This module provides create_app() which builds a FastAPI application that:
- Exposes PeopleGraphService via REST API endpoints under /api
- Maps people graph errors to {"error": message} responses
- Serves the static public site at / and the CMS page at /cms
- Optionally protects everything except /health and /info with Basic Auth

Usage:
    from people_graph.api_host import create_app

    # Default configuration
    app = create_app()

    # Custom configuration
    from people_graph.api_host.config import AppConfig
    config = AppConfig(people_file="custom_people.json")
    app = create_app(config)
"""

import base64
import logging
import secrets
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.requests import Request

from people_graph import __version__
from people_graph.core import JsonPersonStore, PersonStore
from people_graph.service import PeopleGraphService, create_rest_router, register_error_handlers

from .config import AppConfig

logger = logging.getLogger(__name__)

# Paths reachable without credentials when auth is enabled
PUBLIC_ENDPOINTS = {"/health", "/info"}


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[PersonStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Optional configuration object. If None, uses defaults from environment.
        store: Optional pre-configured PersonStore instance.
               If None, a JsonPersonStore is created based on config.

    Returns:
        Configured FastAPI application with REST API and static file serving.
    """
    if config is None:
        config = AppConfig.from_env()

    app = FastAPI(
        title="People Graph",
        description="REST API for the acquaintance graph",
        version=__version__,
    )

    if config.auth_enabled and config.auth_password:
        _add_basic_auth(app, config)
    elif config.auth_enabled:
        logger.warning("AUTH_ENABLED is set but AUTH_PASSWORD is empty; authentication disabled")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if store is None:
        store = JsonPersonStore(str(config.get_people_path()))

    people_service = PeopleGraphService(store)

    # Store service on app state for access in routes
    app.state.people_service = people_service
    app.state.person_store = store
    app.state.config = config

    app.include_router(create_rest_router(people_service), prefix=config.api_prefix)
    register_error_handlers(app)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/info")
    async def info() -> Dict[str, Any]:
        """API information endpoint."""
        return {
            "name": "People Graph",
            "version": __version__,
            "endpoints": {
                "api": config.api_prefix,
                "cms": "/cms",
                "health": "/health",
            },
            "people": len(store.find_all()),
        }

    public_path = Path(config.public_path)

    @app.get("/cms", response_model=None)
    async def cms():
        """Serve the CMS page."""
        cms_page = public_path / "cms.html"
        if not cms_page.is_file():
            return JSONResponse({"error": "CMS page not found"}, status_code=404)
        return FileResponse(cms_page)

    # Mounted last: a mount at / matches every path not routed above
    _mount_static_files(app, public_path)

    return app


def _add_basic_auth(app: FastAPI, config: AppConfig) -> None:
    """Require HTTP Basic credentials on every path except PUBLIC_ENDPOINTS."""

    @app.middleware("http")
    async def basic_auth_middleware(request: Request, call_next):
        if request.method == "OPTIONS" or request.url.path in PUBLIC_ENDPOINTS:
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return JSONResponse(
                status_code=401,
                content={"error": "Authentication required"},
                headers={"WWW-Authenticate": "Basic"},
            )

        try:
            scheme, credentials = auth_header.split()
            if scheme.lower() != 'basic':
                raise ValueError("unsupported scheme")

            decoded = base64.b64decode(credentials).decode("utf-8")
            username, _, password = decoded.partition(":")
        except ValueError:
            username, password = "", ""

        is_correct_username = secrets.compare_digest(
            username.encode("utf-8"), config.auth_username.encode("utf-8")
        )
        is_correct_password = secrets.compare_digest(
            password.encode("utf-8"), (config.auth_password or "").encode("utf-8")
        )

        if not (is_correct_username and is_correct_password):
            return JSONResponse(
                status_code=401,
                content={"error": "Invalid credentials"},
                headers={"WWW-Authenticate": "Basic"},
            )

        return await call_next(request)


def _mount_static_files(app: FastAPI, public_path: Path) -> None:
    """
    Mount the public directory at the site root.

    Only mounts the directory if it exists.
    """
    if public_path.exists() and public_path.is_dir():
        app.mount("/", StaticFiles(directory=str(public_path), html=True), name="public")
    else:
        logger.info("No public directory at %s; static files disabled", public_path)


def get_app() -> FastAPI:
    """
    Factory function for uvicorn.

    Usage:
        uvicorn people_graph.api_host.server:get_app --factory
    """
    return create_app()
