#!/usr/bin/env python3
"""
Command line entry point for the HexGrid API service.

Usage:
    hexgrid-api
    hexgrid-api --port 8080
    hexgrid-api --config /path/to/.env --reload
"""

import os
import sys
import argparse

import uvicorn

from ..common import config, load_config, get_logger, set_log_level
from .app import create_app

logger = get_logger("server")


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Serve the HexGrid H3 API",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("--host", type=str, help="Interface to bind (overrides config)")

    parser.add_argument("--port", type=int, help="Port to listen on (overrides config)")

    parser.add_argument("--config", type=str, help="Path to .env configuration file")

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    parser.add_argument(
        "--reload", action="store_true", help="Restart the server on code changes"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    try:
        app_config = load_config(args.config) if args.config else config
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    server = app_config.server.model_copy(
        update={
            "host": args.host or app_config.server.host,
            "port": args.port or app_config.server.port,
        }
    )
    app_config = app_config.model_copy(update={"server": server})

    log_level = args.log_level or app_config.logging.level
    if args.log_level:
        set_log_level(log_level)

    logger.info(
        "Starting HexGrid API",
        extra={"host": server.host, "port": server.port, "reload": args.reload},
    )

    if args.reload:
        # The reloader imports the factory in a fresh process configured from the environment
        os.environ["HOST"] = server.host
        os.environ["PORT"] = str(server.port)
        os.environ["LOG_LEVEL"] = log_level
        uvicorn.run(
            "hexgrid.api.app:create_app",
            factory=True,
            host=server.host,
            port=server.port,
            reload=True,
            log_level=log_level.lower(),
        )
    else:
        uvicorn.run(
            create_app(app_config),
            host=server.host,
            port=server.port,
            log_level=log_level.lower(),
        )


if __name__ == "__main__":
    main()
