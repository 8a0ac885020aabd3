from app_factory import create_app
from core.config import get_settings
from core.logging import setup_logging

# uvicorn main:app --host 127.0.0.1 --port 8000
# The bootstrap entry point (application.py) builds its own app from CLI settings.

settings = get_settings()
setup_logging(settings)

app = create_app(settings)
