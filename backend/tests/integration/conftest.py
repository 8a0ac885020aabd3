import pytest
from fastapi.testclient import TestClient

from app_factory import create_app


@pytest.fixture
def client(settings):
    """TestClient with startup/shutdown hooks run (database initialised, tables created)."""
    with TestClient(create_app(settings)) as c:
        yield c
