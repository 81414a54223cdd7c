"""
people_graph.api_host - FastAPI server exposing PeopleGraphService over REST.

This package provides a FastAPI application that combines:
- REST API endpoints via people_graph.service.rest_api
- Static file serving for the public site and the CMS page

Usage:
    from people_graph.api_host import create_app

    app = create_app()
    # Run with uvicorn: uvicorn people_graph.api_host.server:get_app --factory
"""

from .server import create_app
from .config import AppConfig

__version__ = "1.0.0"
__all__ = ["create_app", "AppConfig"]
