"""Pytest configuration and fixtures."""

from datetime import date, datetime

import duckdb
import pytest

SOURCE_TABLE = "player_game_stats"

SOURCE_DDL = f"""
    CREATE TABLE {SOURCE_TABLE} (
        player_id BIGINT,
        first_name VARCHAR,
        last_name VARCHAR,
        team_id BIGINT,
        team_city VARCHAR,
        team_name VARCHAR,
        season VARCHAR,
        game_id VARCHAR,
        game_date DATE,
        minutes DOUBLE,
        points INTEGER,
        rebounds INTEGER,
        assists INTEGER,
        steals INTEGER,
        blocks INTEGER,
        turnovers INTEGER,
        fouls INTEGER,
        fgm INTEGER,
        fga INTEGER,
        fg3m INTEGER,
        fg3a INTEGER,
        ftm INTEGER,
        fta INTEGER,
        plus_minus INTEGER,
        snapshot_ts TIMESTAMP,
        batch_id VARCHAR
    )
"""

SOURCE_COLUMNS = [
    "player_id",
    "first_name",
    "last_name",
    "team_id",
    "team_city",
    "team_name",
    "season",
    "game_id",
    "game_date",
    "minutes",
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "turnovers",
    "fouls",
    "fgm",
    "fga",
    "fg3m",
    "fg3a",
    "ftm",
    "fta",
    "plus_minus",
    "snapshot_ts",
    "batch_id",
]

SNAPSHOT_TS = datetime(2025, 1, 2, 6, 0, 0)
BATCH_ID = "batch-20250102"

NETS = {"team_id": 1610612751, "team_city": "Brooklyn", "team_name": "Nets"}
WARRIORS = {"team_id": 1610612744, "team_city": "Golden State", "team_name": "Warriors"}
RAPTORS = {"team_id": 1610612761, "team_city": "Toronto", "team_name": "Raptors"}
HEAT = {"team_id": 1610612748, "team_city": "Miami", "team_name": "Heat"}

SCHRODER = {"player_id": 203471, "first_name": "Dennis", "last_name": "Schroder"}
CURRY = {"player_id": 201939, "first_name": "Stephen", "last_name": "Curry"}
LOVE = {"player_id": 201567, "first_name": "Kevin", "last_name": "Love"}


def game_row(player: dict, team: dict, game_id: str, game_date: date, **stats) -> dict:
    """Build one source row; unspecified box-score stats default to zero."""
    row = {
        **player,
        **team,
        "season": "2024-25",
        "game_id": game_id,
        "game_date": game_date,
        "minutes": 0.0,
        "snapshot_ts": SNAPSHOT_TS,
        "batch_id": BATCH_ID,
    }
    for column in SOURCE_COLUMNS:
        if column not in row:
            row[column] = 0
    row.update(stats)
    return row


def load_source(con: duckdb.DuckDBPyConnection, rows: list[dict]) -> None:
    """Create the source table and insert rows."""
    con.execute(f"DROP TABLE IF EXISTS {SOURCE_TABLE}")
    con.execute(SOURCE_DDL)
    if rows:
        placeholders = ", ".join("?" for _ in SOURCE_COLUMNS)
        con.executemany(
            f"INSERT INTO {SOURCE_TABLE} ({', '.join(SOURCE_COLUMNS)}) VALUES ({placeholders})",
            [[row[c] for c in SOURCE_COLUMNS] for row in rows],
        )


@pytest.fixture
def sample_rows():
    """A small season where Schroder is traded from Brooklyn to Golden State.

    - Schroder 2024-25: two Nets games (one DNP), then one Warriors game
    - Schroder 2023-24: one Raptors game
    - Curry 2024-25: two Warriors games plus one row with unrecorded minutes
    - Love 2024-25: one Heat game with no free-throw attempts
    """
    return [
        game_row(
            SCHRODER, NETS, "0022400061", date(2024, 10, 23),
            minutes=30.0, points=20, rebounds=3, assists=6, steals=1, turnovers=2, fouls=2,
            fgm=7, fga=14, fg3m=2, fg3a=5, ftm=4, fta=4, plus_minus=5,
        ),
        game_row(SCHRODER, NETS, "0022400082", date(2024, 10, 25), minutes=0.0),
        game_row(
            SCHRODER, WARRIORS, "0022400377", date(2024, 12, 18),
            minutes=28.0, points=12, rebounds=2, assists=5, turnovers=3, fouls=3,
            fgm=5, fga=12, fg3m=2, fg3a=6, plus_minus=-4,
        ),
        game_row(
            SCHRODER, RAPTORS, "0022300700", date(2024, 2, 1), season="2023-24",
            minutes=33.5, points=18, rebounds=4, assists=9, fgm=6, fga=13, fg3m=2, fg3a=5,
            ftm=4, fta=5, plus_minus=-8,
        ),
        game_row(
            CURRY, WARRIORS, "0022400061", date(2024, 10, 23),
            minutes=34.0, points=17, rebounds=4, assists=8, fgm=6, fga=16, fg3m=3, fg3a=10,
            ftm=2, fta=2, plus_minus=-10,
        ),
        game_row(
            CURRY, WARRIORS, "0022400081", date(2024, 10, 25),
            minutes=36.5, points=23, rebounds=5, assists=6, fgm=8, fga=17, fg3m=4, fg3a=10,
            ftm=3, fta=4, plus_minus=12,
        ),
        game_row(CURRY, WARRIORS, "0022400099", date(2024, 10, 27), minutes=None, points=15),
        game_row(
            LOVE, HEAT, "0022400063", date(2024, 10, 23),
            minutes=12.0, points=6, rebounds=7, fgm=3, fga=5, plus_minus=2,
        ),
    ]


@pytest.fixture
def con():
    """In-memory DuckDB warehouse."""
    connection = duckdb.connect(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def source_con(con, sample_rows):
    """Warehouse with the sample source table loaded."""
    load_source(con, sample_rows)
    return con


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point every configurable directory at a per-test temp dir."""
    from nba_profiles.utils.config import get_settings

    monkeypatch.setenv("DUCKDB_PATH", str(tmp_path / "warehouse.duckdb"))
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "published"))
    monkeypatch.setenv("QUARANTINE_DIR", str(tmp_path / "quarantine"))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("SOURCE_TABLE", SOURCE_TABLE)
    monkeypatch.setenv("PUBLISH_TARGET", "duckdb")
    monkeypatch.delenv("SOURCE_SQLITE_PATH", raising=False)
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def sample_settings(tmp_path):
    """Sample settings for testing."""
    from nba_profiles.utils.config import Settings

    return Settings(
        duckdb_path=":memory:",
        output_dir=str(tmp_path / "published"),
        quarantine_dir=str(tmp_path / "quarantine"),
        log_level="DEBUG",
        log_format="console",
    )


def fetch_dicts(con: duckdb.DuckDBPyConnection, sql: str) -> list[dict]:
    """Run a query and return rows as dictionaries."""
    cursor = con.execute(sql)
    columns = [desc[0] for desc in cursor.description]
    return [dict(zip(columns, row, strict=True)) for row in cursor.fetchall()]
