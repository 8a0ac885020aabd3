"""GET /health and GET /meta/version."""

from __future__ import annotations

from fastapi import APIRouter

from version import get_version

router = APIRouter(tags=["meta"])


@router.get("/health", summary="Health check")
async def health() -> dict:
    """Simple health check endpoint."""
    return {"status": "ok"}


@router.get("/meta/version", summary="Application version")
def meta_version() -> dict:
    """Return version from repo root VERSION file."""
    return {"version": get_version()}
