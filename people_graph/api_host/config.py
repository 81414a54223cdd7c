"""
Configuration for the App Host server.

Provides sensible defaults that can be overridden via environment variables
(optionally from a .env file) or by passing a custom AppConfig to create_app().
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class AppConfig:
    """Configuration for the app host server."""

    # Person store configuration
    people_file: str = field(default_factory=lambda: os.getenv("PEOPLE_FILE", "people.json"))

    # Server configuration
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # API configuration
    api_prefix: str = field(default_factory=lambda: os.getenv("API_PREFIX", "/api"))
    cors_origins: List[str] = field(default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", "*")))

    # Static files configuration
    public_path: Optional[str] = field(default_factory=lambda: os.getenv("PUBLIC_PATH"))

    # Security configuration
    auth_enabled: bool = field(default_factory=lambda: os.getenv("AUTH_ENABLED", "false").lower() == "true")
    auth_username: str = field(default_factory=lambda: os.getenv("AUTH_USERNAME", "admin"))
    auth_password: Optional[str] = field(default_factory=lambda: os.getenv("AUTH_PASSWORD"))

    def __post_init__(self):
        """Resolve default static path relative to the working directory."""
        if self.public_path is None:
            self.public_path = str(Path.cwd() / "public")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "AppConfig":
        """Create configuration from environment variables, loading .env first."""
        load_dotenv(dotenv_path)
        return cls()

    def get_people_path(self) -> Path:
        """Get resolved path to the people file."""
        people_path = Path(self.people_file)
        if not people_path.is_absolute():
            people_path = Path.cwd() / people_path
        return people_path
