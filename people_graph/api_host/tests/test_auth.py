"""
Tests for Basic Authentication in the app host.
"""

import base64

import pytest
from fastapi.testclient import TestClient

from people_graph.api_host import AppConfig, create_app


def _basic(credentials: bytes) -> dict:
    return {"Authorization": f"Basic {base64.b64encode(credentials).decode('utf-8')}"}


@pytest.fixture
def auth_enabled_app(temp_people_file, temp_public_dir) -> TestClient:
    """Create a TestClient with authentication enabled."""
    config = AppConfig(
        people_file=temp_people_file,
        public_path=temp_public_dir,
        auth_enabled=True,
        auth_username="admin",
        auth_password="secretpassword",
    )
    return TestClient(create_app(config))


def test_auth_required(auth_enabled_app):
    """Endpoints should return 401 if no authentication is provided."""
    response = auth_enabled_app.get("/api/people")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Basic"
    assert response.json() == {"error": "Authentication required"}

def test_auth_success(auth_enabled_app):
    """Successful authentication with valid credentials."""
    response = auth_enabled_app.get("/api/people", headers=_basic(b"admin:secretpassword"))
    assert response.status_code == 200

def test_auth_invalid_password(auth_enabled_app):
    """Failed authentication with invalid password."""
    response = auth_enabled_app.get("/api/people", headers=_basic(b"admin:wrongpassword"))
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}

def test_auth_invalid_username(auth_enabled_app):
    """Failed authentication with invalid username."""
    response = auth_enabled_app.get("/api/people", headers=_basic(b"wronguser:secretpassword"))
    assert response.status_code == 401

def test_auth_invalid_format(auth_enabled_app):
    """Failed authentication with invalid header format."""
    response = auth_enabled_app.get("/api/people", headers={"Authorization": "Bearer some-token"})
    assert response.status_code == 401

def test_auth_garbage_credentials(auth_enabled_app):
    """Undecodable credentials are rejected, not a server error."""
    response = auth_enabled_app.get("/api/people", headers={"Authorization": "Basic %%%"})
    assert response.status_code == 401

def test_auth_protects_static_files(auth_enabled_app):
    """Static pages require credentials too."""
    assert auth_enabled_app.get("/cms").status_code == 401

def test_auth_not_required_on_health(auth_enabled_app):
    """Health check endpoint should not require authentication."""
    assert auth_enabled_app.get("/health").status_code == 200

def test_auth_not_required_on_info(auth_enabled_app):
    """Info endpoint should not require authentication."""
    assert auth_enabled_app.get("/info").status_code == 200

def test_auth_enabled_without_password_is_open(temp_people_file, temp_public_dir):
    """Without a password there is nothing to check against."""
    config = AppConfig(
        people_file=temp_people_file,
        public_path=temp_public_dir,
        auth_enabled=True,
        auth_password=None,
    )
    client = TestClient(create_app(config))
    assert client.get("/api/people").status_code == 200
