"""Local schema maintenance tools (stale-schema check, SQLite reset)."""
