"""
Reset local SQLite database: delete file and recreate schema from the scanned entity packages.
For local/dev only. Refuses to run if DATABASE_URL is not SQLite file-based.
Usage: python -m tools.reset_local_db (from backend dir) or python backend/tools/reset_local_db.py (from repo root).
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Allow running from repo root or backend
_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from core.config import get_settings
from core.database import dispose_database, get_database_manager, init_database
from core.entity_scan import EntityScanError, collect_metadata, scan_entities


def sqlite_file_path(database_url: str) -> Path | None:
    """Extract SQLite file path from URL. Returns None if not sqlite file (e.g. :memory: or non-sqlite)."""
    url = (database_url or "").strip()
    if not url.startswith("sqlite"):
        return None
    if ":memory:" in url:
        return None
    try:
        db = (make_url(url).database or "").strip()
    except ArgumentError:
        return None
    return Path(db) if db else None


async def _main() -> int:
    settings = get_settings()
    url = settings.database_url or ""

    path = sqlite_file_path(url)
    if path is None:
        print("Refusing: DATABASE_URL is not a SQLite file. Reset is only for local SQLite file DBs.", file=sys.stderr)
        return 1

    try:
        metadata = collect_metadata(scan_entities(settings.entity_packages))
    except EntityScanError as e:
        print(str(e), file=sys.stderr)
        return 1

    path = path.resolve()
    if path.exists():
        try:
            path.unlink()
        except OSError as e:
            print(f"Failed to delete database file {path}: {e}", file=sys.stderr)
            return 1

    await init_database(url)
    try:
        manager = get_database_manager()
        for md in metadata:
            await manager.create_missing_tables(md)
    finally:
        await dispose_database()

    print("OK: reset complete")
    return 0


def main() -> None:
    sys.exit(asyncio.run(_main()))


if __name__ == "__main__":
    main()
