"""
Detect schema mismatch (existing table missing columns the model declares).
Used by the create-schema / check-schema ops to exit non-zero instead of failing later at runtime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Tuple, Union

from sqlalchemy import inspect

if TYPE_CHECKING:
    from sqlalchemy import MetaData
    from sqlalchemy.engine import Connection, Engine


def missing_columns(bind: "Union[Engine, Connection]", metadata: "MetaData") -> Dict[str, List[str]]:
    """Map table name -> sorted missing column names, for tables that exist but are stale."""
    inspector = inspect(bind)
    stale: Dict[str, List[str]] = {}
    for table_name, table in metadata.tables.items():
        if not inspector.has_table(table_name):
            continue
        current = {c["name"] for c in inspector.get_columns(table_name)}
        missing = set(table.columns.keys()) - current
        if missing:
            stale[table_name] = sorted(missing)
    return stale


def check_schema_mismatch(bind: "Union[Engine, Connection]", metadata: "MetaData") -> Tuple[bool, str]:
    """
    Returns (has_mismatch, message). has_mismatch True means the current schema is stale;
    tables that do not exist yet are not a mismatch (they get created).
    """
    stale = missing_columns(bind, metadata)
    if not stale:
        return False, ""
    parts = [f"{name!r} is missing column(s): {cols}" for name, cols in sorted(stale.items())]
    return True, (
        "; ".join(parts)
        + ". Run: python -m tools.reset_local_db (from backend dir) to reset the local DB and recreate schema."
    )
