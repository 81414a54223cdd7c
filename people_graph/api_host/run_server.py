"""
Run the People Graph server.

Usage:
    people-graph
    people-graph --port 8080
    people-graph --people-file custom_people.json

Environment variables (also read from .env):
    PEOPLE_FILE: Path to people JSON file (default: people.json)
    HOST: Server host (default: 0.0.0.0)
    PORT: Server port (default: 3000)
    API_PREFIX: REST API prefix (default: /api)
    PUBLIC_PATH: Static files directory (default: ./public)
    LOG_LEVEL: Logging level (default: INFO)
"""

import argparse
import logging
import os

import uvicorn

from .config import AppConfig
from .server import create_app

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


def parse_args(defaults: AppConfig, argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run the People Graph server"
    )
    parser.add_argument(
        "--host",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=defaults.port,
        help=f"Port to bind to (default: {defaults.port})"
    )
    parser.add_argument(
        "--people-file",
        default=defaults.people_file,
        help=f"Path to people JSON file (default: {defaults.people_file})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    config = AppConfig.from_env()
    args = parse_args(config, argv)

    config.host = args.host
    config.port = args.port
    config.people_file = args.people_file

    logging.basicConfig(
        level=config.log_level.upper(),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger.info("People file: %s", config.get_people_path())
    logger.info("Public path: %s", config.public_path)
    logger.info("REST API:    http://%s:%s%s", config.host, config.port, config.api_prefix)

    if args.reload:
        # Reload mode needs an import string; configuration comes from the environment
        os.environ["PEOPLE_FILE"] = config.people_file
        uvicorn.run(
            "people_graph.api_host.server:get_app",
            factory=True,
            host=config.host,
            port=config.port,
            reload=True,
        )
        return

    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
