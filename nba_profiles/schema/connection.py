"""Warehouse connection management."""

from pathlib import Path

import duckdb
import structlog

from nba_profiles.utils.config import get_settings

logger = structlog.get_logger(__name__)

SOURCE_DB_ALIAS = "source_db"


def get_db_connection(
    duckdb_path: Path | str | None = None,
    sqlite_path: Path | str | None = None,
) -> duckdb.DuckDBPyConnection:
    """
    Get a DuckDB warehouse connection with engine settings applied.

    Args:
        duckdb_path: Path to the DuckDB file, or ":memory:". If None, uses settings.
        sqlite_path: Optional SQLite database to attach read-only as ``source_db``.
            If None, uses ``settings.source_sqlite_path`` (which may also be unset).

    Returns:
        Configured DuckDB connection.

    Raises:
        RuntimeError: If the warehouse cannot be opened or configured.
    """
    settings = get_settings()
    duckdb_path = str(duckdb_path or settings.duckdb_path)
    sqlite_path = sqlite_path or settings.source_sqlite_path

    if duckdb_path != ":memory:":
        try:
            Path(duckdb_path).parent.mkdir(parents=True, exist_ok=True)
        except (PermissionError, OSError) as e:
            raise RuntimeError(f"Cannot create warehouse directory for '{duckdb_path}': {e}") from e

    try:
        con = duckdb.connect(duckdb_path)
    except duckdb.Error as e:
        raise RuntimeError(f"Cannot open warehouse at '{duckdb_path}': {e}") from e

    try:
        con.execute(f"SET memory_limit = '{settings.duckdb_memory_limit}'")
        con.execute(f"SET threads = {settings.duckdb_threads}")
        if sqlite_path:
            attach_sqlite_source(con, sqlite_path)
    except (duckdb.Error, FileNotFoundError) as e:
        con.close()
        raise RuntimeError(f"Failed to configure warehouse '{duckdb_path}': {e}") from e

    logger.debug("Warehouse connection established", duckdb_path=duckdb_path)
    return con


def attach_sqlite_source(con: duckdb.DuckDBPyConnection, sqlite_path: Path | str) -> None:
    """
    Attach a SQLite database read-only so its tables can serve as the source relation.

    Args:
        con: DuckDB connection.
        sqlite_path: Path to the SQLite database.

    Raises:
        FileNotFoundError: If the SQLite file does not exist.
    """
    sqlite_path = Path(sqlite_path)
    if not sqlite_path.exists():
        raise FileNotFoundError(f"SQLite database not found: {sqlite_path}")

    con.execute("INSTALL sqlite")
    con.execute("LOAD sqlite")
    con.execute(f"ATTACH '{sqlite_path}' AS {SOURCE_DB_ALIAS} (READ_ONLY)")
    logger.info("SQLite source attached", sqlite=str(sqlite_path))
