import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./students.db"
DEFAULT_ENTITY_PACKAGES: Tuple[str, ...] = ("models",)


def _env_bool(name: str, default: bool) -> bool:
    v = (os.environ.get(name) or "").strip().lower()
    if not v:
        return default
    if v in ("true", "1", "yes", "on"):
        return True
    if v in ("false", "0", "no", "off"):
        return False
    return default


def _env_list(name: str) -> Tuple[str, ...]:
    """Comma separated environment value as a tuple; blanks dropped."""
    raw = os.environ.get(name) or ""
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Student API"
    env: str = "dev"
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    entity_packages: Tuple[str, ...] = DEFAULT_ENTITY_PACKAGES
    create_schema: bool = True
    cors_origins: Tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables.

        Raises ValueError when PORT is not an integer.
        """
        port_raw = os.getenv("PORT")
        try:
            port = int(port_raw) if port_raw else cls.port
        except ValueError as e:
            raise ValueError(f"PORT must be an integer, got {port_raw!r}") from e
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            host=os.getenv("HOST", cls.host),
            port=port,
            entity_packages=_env_list("ENTITY_PACKAGES") or DEFAULT_ENTITY_PACKAGES,
            create_schema=_env_bool("CREATE_SCHEMA", cls.create_schema),
            cors_origins=_env_list("CORS_ORIGINS"),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
