"""CLI entry point for the Onsen Finder server."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="onsenfinder",
        description="Onsen Finder — REST resource service for onsen facilities",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument("--host", type=str, default=None, help="Server bind address (overrides config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Server port (overrides config)")
    parser.add_argument("--workers", "-w", type=int, default=None, help="Number of worker processes")
    parser.add_argument(
        "--es-host",
        action="append",
        default=None,
        help="Elasticsearch node URL; repeat for several nodes (overrides config)",
    )
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument("--version", action="version", version=f"Onsen Finder {_get_version()}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for the Onsen Finder server."""
    args = build_parser().parse_args(argv)

    from onsenfinder.config.settings import Settings
    from onsenfinder.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.workers:
        settings.server.workers = args.workers
    if args.es_host:
        settings.engine.hosts = args.es_host
    if args.log_level:
        settings.observability.log_level = args.log_level

    setup_logging(settings.observability)

    _check_port(settings.server.host, settings.server.port)

    _export_overrides(args)

    import uvicorn

    logger.info(
        "Starting server on %s:%d with %d worker(s), engine %s",
        settings.server.host,
        settings.server.port,
        settings.server.workers,
        settings.engine.hosts,
    )
    uvicorn.run(
        "onsenfinder.api.app:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        workers=settings.server.workers if not args.reload else 1,
        reload=args.reload,
        log_level=settings.observability.log_level.lower(),
    )


def _export_overrides(args: argparse.Namespace) -> None:
    """Pass app-level overrides to the app factory through the environment.

    uvicorn imports ``create_app`` by path in each worker, so settings objects
    built here never reach it.
    """
    import json
    import os

    if args.config:
        os.environ["ONSENFINDER_CONFIG_FILE"] = str(Path(args.config).resolve())
    if args.es_host:
        os.environ["ONSENFINDER_ENGINE__HOSTS"] = json.dumps(args.es_host)
    if args.log_level:
        os.environ["ONSENFINDER_OBSERVABILITY__LOG_LEVEL"] = args.log_level


def _check_port(host: str, port: int) -> None:
    """Exit with a readable message if the port is already taken."""
    import socket

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host if host != "0.0.0.0" else "127.0.0.1", port))
    except OSError:
        print(f"ERROR: Port {port} is already in use. Run 'lsof -i :{port}' to find the process.", file=sys.stderr)
        sys.exit(1)
    finally:
        sock.close()


def _get_version() -> str:
    from onsenfinder import __version__

    return __version__


if __name__ == "__main__":
    main()
