# Ensure backend is at sys.path[0] when collecting unit tests directly
import sys
from pathlib import Path

import pytest_asyncio

_backend = Path(__file__).resolve().parent.parent.parent
_str_backend = str(_backend)
if _str_backend not in sys.path:
    sys.path.insert(0, _str_backend)

from core.database import dispose_database, get_database_manager, init_database  # noqa: E402
from models.base import Base  # noqa: E402


@pytest_asyncio.fixture
async def db(settings):
    """Initialized DatabaseManager on a temp SQLite file with all tables."""
    await init_database(settings.database_url)
    manager = get_database_manager()
    await manager.create_missing_tables(Base.metadata)
    yield manager
    await dispose_database()
