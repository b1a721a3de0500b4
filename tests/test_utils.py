"""Tests for configuration and connection helpers."""

import sqlite3
from unittest.mock import patch

import pytest


def test_settings_validation():
    """Test settings validation."""
    from nba_profiles.utils.config import Settings

    settings = Settings(log_level="debug", log_format="json", publish_target="PARQUET")
    assert settings.log_level == "DEBUG"
    assert settings.publish_target == "parquet"

    with pytest.raises(ValueError):
        Settings(log_level="INVALID")

    with pytest.raises(ValueError):
        Settings(log_format="invalid")

    with pytest.raises(ValueError):
        Settings(publish_target="s3")


def test_source_table_must_be_identifier():
    from nba_profiles.utils.config import Settings

    assert Settings(source_table="main.player_game_stats").source_table == "main.player_game_stats"

    with pytest.raises(ValueError):
        Settings(source_table="player_game_stats; DROP TABLE x")


def test_settings_from_environment(monkeypatch):
    from nba_profiles.utils.config import get_settings

    monkeypatch.setenv("PUBLISH_TARGET", "parquet")
    monkeypatch.setenv("DUCKDB_THREADS", "2")
    get_settings.cache_clear()

    settings = get_settings()
    assert settings.publish_target == "parquet"
    assert settings.duckdb_threads == 2


def test_settings_caching():
    """Test that settings are cached."""
    from nba_profiles.utils.config import get_settings

    get_settings.cache_clear()

    assert get_settings() is get_settings()


def test_ensure_directories(tmp_path):
    """Test directory creation."""
    from nba_profiles.utils.config import ensure_directories

    ensure_directories()

    assert (tmp_path / "logs").exists()
    assert (tmp_path / "quarantine").exists()
    assert (tmp_path / "published").exists()


def test_get_db_connection_memory():
    from nba_profiles.schema.connection import get_db_connection

    con = get_db_connection(":memory:")
    try:
        assert con.execute("SELECT 42").fetchone() == (42,)
        threads = con.execute("SELECT current_setting('threads')").fetchone()[0]
        assert int(threads) == 4
    finally:
        con.close()


def test_get_db_connection_creates_parent(tmp_path):
    from nba_profiles.schema.connection import get_db_connection

    path = tmp_path / "nested" / "warehouse.duckdb"
    con = get_db_connection(path)
    con.close()

    assert path.exists()


def test_get_db_connection_missing_sqlite(tmp_path):
    from nba_profiles.schema.connection import get_db_connection

    with pytest.raises(RuntimeError, match="SQLite database not found"):
        get_db_connection(":memory:", sqlite_path=tmp_path / "missing.sqlite")


def test_attach_sqlite_source(tmp_path, con):
    """A SQLite table is readable as source_db.<table> once attached."""
    from nba_profiles.schema.connection import SOURCE_DB_ALIAS, attach_sqlite_source

    sqlite_path = tmp_path / "source.sqlite"
    with sqlite3.connect(sqlite_path) as sqlite_con:
        sqlite_con.execute("CREATE TABLE players (player_id INTEGER, name TEXT)")
        sqlite_con.execute("INSERT INTO players VALUES (201939, 'Stephen Curry')")

    try:
        attach_sqlite_source(con, sqlite_path)
    except Exception as e:  # sqlite extension unavailable offline
        pytest.skip(f"sqlite extension unavailable: {e}")

    rows = con.execute(f"SELECT player_id, name FROM {SOURCE_DB_ALIAS}.players").fetchall()
    assert rows == [(201939, "Stephen Curry")]


def test_get_db_connection_open_failure():
    import duckdb

    from nba_profiles.schema.connection import get_db_connection

    with (
        patch(
            "nba_profiles.schema.connection.duckdb.connect",
            side_effect=duckdb.IOException("x"),
        ),
        pytest.raises(RuntimeError, match="Cannot open warehouse"),
    ):
        get_db_connection(":memory:")
