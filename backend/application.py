"""
Bootstrap entry point: scan the persistence model package, build the app and serve it.

- Settings come from the environment (core.config), overridden by CLI flags.
- Entity packages (default: models) are imported before anything touches the schema.
- Refuses to start when the configured port is already bound on the host.
- Starts uvicorn with the FastAPI app and blocks until shutdown.

Run: student-api [--host H] [--port P] [--log-level L] [--entity-package PKG ...]
  student-api --ops create-schema   -> create missing tables, print "schema ok", exit (no uvicorn)
  student-api --ops check-schema    -> report stale tables, exit 0/1 (no uvicorn)
Or from the backend dir: python application.py
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import socket
import sys
from pathlib import Path
from typing import Optional, Sequence

# When run as a script, ensure backend dir is on path so top-level packages resolve
_backend_dir = Path(__file__).resolve().parent
if str(_backend_dir) not in sys.path:
    sys.path.insert(0, str(_backend_dir))

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from core.config import Settings, get_settings
from core.entity_scan import EntityScanError, collect_metadata, scan_entities
from core.logging import setup_logging, uvicorn_log_level

logger = logging.getLogger(__name__)


class StartupError(Exception):
    """Unrecoverable startup failure; the process exits with status 1."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Student API: serve or run a schema op")
    parser.add_argument("--host", help="Bind address (env HOST)")
    parser.add_argument("--port", type=int, help="Bind port (env PORT)")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ... (env LOG_LEVEL)")
    parser.add_argument(
        "--entity-package",
        action="append",
        dest="entity_packages",
        metavar="PKG",
        help="Package to scan for ORM entities; repeatable (env ENTITY_PACKAGES)",
    )
    parser.add_argument(
        "--ops",
        choices=["create-schema", "check-schema"],
        help="Run a schema op and exit (no server)",
    )
    return parser


def resolve_settings(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    """Apply CLI overrides on top of environment settings."""
    settings = base or get_settings()
    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.entity_packages:
        overrides["entity_packages"] = tuple(args.entity_packages)
    return dataclasses.replace(settings, **overrides) if overrides else settings


def ensure_port_available(host: str, port: int) -> None:
    """Bind test then close, with SO_REUSEADDR as uvicorn binds. Raises StartupError if the port is taken.

    TIME_WAIT sockets left by a previous run do not count as taken.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((host, port))
    except OSError as e:
        raise StartupError(f"Cannot bind {host}:{port}: {e}") from e


def validate_database_url(url: str) -> None:
    """Parse the URL and load its dialect. Raises StartupError if either fails."""
    try:
        make_url(url).get_dialect()
    except ArgumentError as e:
        raise StartupError(f"Invalid DATABASE_URL {url!r}: {e}") from e


async def _run_schema_op(settings: Settings, op: str) -> int:
    from core.database import dispose_database, get_database_manager, init_database
    from tools.schema_check import check_schema_mismatch

    metadata = collect_metadata(scan_entities(settings.entity_packages))
    await init_database(settings.database_url)
    try:
        manager = get_database_manager()
        async with manager.engine.connect() as conn:
            for md in metadata:
                has_mismatch, message = await conn.run_sync(check_schema_mismatch, md)
                if has_mismatch:
                    print(f"Schema mismatch: {message}", file=sys.stderr)
                    return 1

        if op == "create-schema":
            for md in metadata:
                await manager.create_missing_tables(md)
    finally:
        await dispose_database()

    print("schema ok")
    return 0


def serve(settings: Settings) -> None:
    """Build the app and hand it to uvicorn. Blocks until the server stops."""
    import uvicorn

    from app_factory import create_app

    app = create_app(settings)
    ensure_port_available(settings.host, settings.port)
    logger.info(
        "Starting %s on %s:%s (entities from %s)",
        settings.app_name,
        settings.host,
        settings.port,
        ", ".join(settings.entity_packages),
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=uvicorn_log_level(settings))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args, passthrough = parser.parse_known_args(list(argv) if argv is not None else None)

    try:
        settings = resolve_settings(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)
    if passthrough:
        logger.debug("Ignoring unrecognized arguments: %s", " ".join(passthrough))

    try:
        validate_database_url(settings.database_url)
        if args.ops:
            return asyncio.run(_run_schema_op(settings, args.ops))
        serve(settings)
    except EntityScanError as e:
        logger.error("Entity scan failed: %s", e)
        return 1
    except StartupError as e:
        logger.error("Startup failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
