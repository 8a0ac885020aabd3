"""
Integration tests: bootstrap entry point (entity scan, schema ops, server hand-off, exit codes).
uvicorn.run is replaced so no server is actually started.
"""

from __future__ import annotations

import socket
import sqlite3
from pathlib import Path

import pytest
from fastapi import FastAPI

import application


@pytest.fixture
def db_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    db_path = tmp_path / "entry.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path.as_posix()}")
    monkeypatch.delenv("ENTITY_PACKAGES", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("HOST", raising=False)
    return db_path


@pytest.fixture
def fake_uvicorn(monkeypatch: pytest.MonkeyPatch) -> list:
    calls = []

    def _run(app, **kwargs):
        calls.append((app, kwargs))

    monkeypatch.setattr("uvicorn.run", _run)
    return calls


def _tables(db_path: Path) -> set:
    with sqlite3.connect(db_path) as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    return {r[0] for r in rows}


def test_no_arguments_delegates_to_server(db_env, fake_uvicorn, monkeypatch) -> None:
    monkeypatch.setattr(application, "ensure_port_available", lambda host, port: None)
    assert application.main([]) == 0
    assert len(fake_uvicorn) == 1
    app, kwargs = fake_uvicorn[0]
    assert isinstance(app, FastAPI)
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8000


def test_cli_overrides_host_and_port(db_env, fake_uvicorn) -> None:
    assert application.main(["--host", "127.0.0.1", "--port", "0", "--log-level", "warning"]) == 0
    _, kwargs = fake_uvicorn[0]
    assert kwargs["port"] == 0
    assert kwargs["log_level"] == "warning"


def test_unknown_arguments_pass_through(db_env, fake_uvicorn) -> None:
    assert application.main(["--port", "0", "--spring.profiles.active=dev", "extra"]) == 0
    assert len(fake_uvicorn) == 1


def test_unknown_entity_package_exits_1(db_env, fake_uvicorn) -> None:
    assert application.main(["--port", "0", "--entity-package", "no_such_entity_package"]) == 1
    assert fake_uvicorn == []


def test_port_in_use_exits_1(db_env, fake_uvicorn) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        assert application.main(["--port", str(port)]) == 1
    assert fake_uvicorn == []


def _leave_time_wait_on_port() -> int:
    """Open and close a connection with the server side closing first; returns the freed port."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    client = socket.create_connection(("127.0.0.1", port))
    conn, _ = listener.accept()
    conn.close()
    assert client.recv(1) == b""
    client.close()
    listener.close()
    return port


def test_port_in_time_wait_is_available(db_env, fake_uvicorn) -> None:
    port = _leave_time_wait_on_port()
    application.ensure_port_available("127.0.0.1", port)
    assert application.main(["--port", str(port)]) == 0
    assert fake_uvicorn[0][1]["port"] == port


def test_unparsable_database_url_exits_1(db_env, fake_uvicorn, monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "not a database url")
    assert application.main(["--port", "0"]) == 1
    assert fake_uvicorn == []


def test_unknown_database_driver_exits_1(db_env, fake_uvicorn, monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+no_such_driver:///x.db")
    assert application.main(["--ops", "create-schema"]) == 1
    assert fake_uvicorn == []


def test_unknown_log_level_falls_back_to_info(db_env, fake_uvicorn) -> None:
    assert application.main(["--port", "0", "--log-level", "chatty"]) == 0
    assert fake_uvicorn[0][1]["log_level"] == "info"


def test_invalid_port_env_exits_1(db_env, fake_uvicorn, monkeypatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    assert application.main([]) == 1
    assert fake_uvicorn == []


def test_ops_create_schema(db_env, fake_uvicorn, capsys) -> None:
    assert application.main(["--ops", "create-schema"]) == 0
    assert "schema ok" in capsys.readouterr().out
    assert "students" in _tables(db_env)
    assert fake_uvicorn == []


def test_ops_check_schema_on_empty_db(db_env, capsys) -> None:
    assert application.main(["--ops", "check-schema"]) == 0
    assert "schema ok" in capsys.readouterr().out
    assert "students" not in _tables(db_env)


def test_ops_check_schema_detects_stale_table(db_env, capsys) -> None:
    with sqlite3.connect(db_env) as conn:
        conn.execute("CREATE TABLE students (id INTEGER PRIMARY KEY)")
    assert application.main(["--ops", "check-schema"]) == 1
    assert "Schema mismatch" in capsys.readouterr().err
    assert application.main(["--ops", "create-schema"]) == 1


def test_resolve_settings_keeps_env_when_no_flags(db_env) -> None:
    args = application.build_parser().parse_args([])
    settings = application.resolve_settings(args)
    assert settings.database_url.endswith("entry.db")
    assert settings.entity_packages == ("models",)


def test_ensure_port_available_raises_startup_error() -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        with pytest.raises(application.StartupError):
            application.ensure_port_available("127.0.0.1", busy.getsockname()[1])
