"""
Single source of version: read from repo root VERSION file.
Used by the FastAPI app metadata and GET /meta/version.
"""

from __future__ import annotations

from pathlib import Path

FALLBACK_VERSION = "0.0.0"


def _version_file_path() -> Path:
    # backend/version.py -> repo root
    return Path(__file__).resolve().parent.parent / "VERSION"


def get_version(path: Path | None = None) -> str:
    """Return the first line of the VERSION file, or '0.0.0' if missing/empty."""
    path = path or _version_file_path()
    if not path.is_file():
        return FALLBACK_VERSION
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError:
        return FALLBACK_VERSION
    return raw.splitlines()[0].strip() if raw else FALLBACK_VERSION
