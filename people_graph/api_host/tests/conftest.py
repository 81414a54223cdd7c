"""
Pytest fixtures for app host tests.

Provides:
- Temporary people file and public directory
- TestClient for the fully configured application
"""

import tempfile
from pathlib import Path
from typing import Generator, Tuple

import pytest
from fastapi.testclient import TestClient

from people_graph.api_host import AppConfig, create_app


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_people_file(temp_dir: Path) -> str:
    """Path for an empty people file."""
    people_file = temp_dir / "people.json"
    people_file.write_text('{"people": []}', encoding="utf-8")
    return str(people_file)


@pytest.fixture
def temp_public_dir(temp_dir: Path) -> str:
    """Public directory with an index page and the CMS page."""
    public_dir = temp_dir / "public"
    public_dir.mkdir()
    (public_dir / "index.html").write_text(
        "<!DOCTYPE html><html><body>People Map</body></html>", encoding="utf-8"
    )
    (public_dir / "cms.html").write_text(
        "<!DOCTYPE html><html><body>People CMS</body></html>", encoding="utf-8"
    )
    (public_dir / "app.js").write_text("console.log('loaded');", encoding="utf-8")
    return str(public_dir)


@pytest.fixture
def app_config(temp_people_file: str, temp_public_dir: str) -> AppConfig:
    """Configuration pointing at temporary files."""
    return AppConfig(
        people_file=temp_people_file,
        public_path=temp_public_dir,
        auth_enabled=False,
    )


@pytest.fixture
def test_app(app_config: AppConfig) -> TestClient:
    """TestClient for the app built from app_config."""
    return TestClient(create_app(app_config))


@pytest.fixture
def static_dirs(temp_public_dir: str) -> Tuple[str, str]:
    """Public directory plus a path that does not exist."""
    return temp_public_dir, str(Path(temp_public_dir).parent / "missing")
