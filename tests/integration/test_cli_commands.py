"""Tests for the swimclub command-line interface."""

import sqlite3
from contextlib import closing
from pathlib import Path

import pytest
from click.testing import CliRunner

from swimclub.cli import cli
from swimclub.core.config import get_settings
from swimclub.infrastructure.persistence import database


@pytest.fixture
def cli_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the CLI at a fresh SQLite file."""
    db_path = tmp_path / "cli.db"
    monkeypatch.setenv("SWIMCLUB_DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    monkeypatch.setenv("SWIMCLUB_ENVIRONMENT", "development")
    monkeypatch.setattr(database, "_db_manager", None)
    get_settings.cache_clear()

    yield db_path

    get_settings.cache_clear()


def query(db_path: Path, sql: str, *params) -> list[tuple]:
    with closing(sqlite3.connect(db_path)) as conn:
        return conn.execute(sql, params).fetchall()


def run(*args: str):
    return CliRunner().invoke(cli, list(args))


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "SwimClub" in result.output
    assert "0.1.0" in result.output


def test_commands_are_registered():
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("serve", "init-db", "create-admin", "set-role"):
        assert command in result.output


def test_set_role_rejects_unknown_role():
    result = CliRunner().invoke(cli, ["set-role", "parent@example.com", "coach"])

    assert result.exit_code == 2
    assert "Invalid value" in result.output


def test_create_admin_rejects_invalid_email():
    result = CliRunner().invoke(cli, ["create-admin", "--email", "not-an-email", "--password", "x"])

    assert result.exit_code == 1
    assert "Invalid email format" in result.output


def test_init_db_creates_tables(cli_database):
    result = run("init-db", "--force")

    assert result.exit_code == 0, result.output
    assert "Database initialized successfully." in result.output
    rows = query(cli_database, "SELECT name FROM sqlite_master WHERE type = 'table'")
    tables = {name for (name,) in rows}
    assert {"users", "invitations"} <= tables


def test_init_db_asks_for_confirmation(cli_database):
    result = CliRunner().invoke(cli, ["init-db"], input="n\n")

    assert result.exit_code == 1
    assert "Aborted" in result.output


def test_create_admin_stores_admin(cli_database):
    run("init-db", "--force")

    result = run(
        "create-admin", "--email", "coach@digbydolphins.com", "--password", "butterfly-200m"
    )

    assert result.exit_code == 0, result.output
    assert "Admin created successfully!" in result.output
    rows = query(
        cli_database,
        "SELECT role, password_hash FROM users WHERE email = ?",
        "coach@digbydolphins.com",
    )
    assert len(rows) == 1
    role, password_hash = rows[0]
    assert role == "admin"
    assert password_hash != "butterfly-200m"


def test_create_admin_existing_email(cli_database):
    run("init-db", "--force")
    run("create-admin", "--email", "coach@digbydolphins.com", "--password", "butterfly-200m")

    result = run("create-admin", "--email", "coach@digbydolphins.com", "--password", "other-pass")

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert query(cli_database, "SELECT COUNT(*) FROM users") == [(1,)]


def test_set_role_changes_stored_role(cli_database):
    run("init-db", "--force")
    run("create-admin", "--email", "coach@digbydolphins.com", "--password", "butterfly-200m")

    result = run("set-role", "coach@digbydolphins.com", "athlete")

    assert result.exit_code == 0, result.output
    assert "Role for coach@digbydolphins.com set to athlete." in result.output
    rows = query(cli_database, "SELECT role FROM users WHERE email = ?", "coach@digbydolphins.com")
    assert rows == [("athlete",)]


def test_set_role_unknown_email(cli_database):
    run("init-db", "--force")

    result = run("set-role", "ghost@example.com", "athlete")

    assert result.exit_code == 1
    assert "No user found with email ghost@example.com" in result.output
