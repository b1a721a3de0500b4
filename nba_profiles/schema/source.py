"""Source relation validation and invalid-minutes handling.

This module owns the boundary between the upstream per-game table and the
recompute pipelines:
- Schema gate (required columns and type families, checked before staging)
- Qualifying-row filter shared by every profile transformation
- Accounting and quarantine of rows whose minutes are null or negative
"""

from __future__ import annotations

import json
import re
import types
import typing
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

import duckdb
import structlog

from nba_profiles.exceptions import SourceSchemaError
from nba_profiles.models import GameStatRecord
from nba_profiles.utils.config import get_settings

logger = structlog.get_logger(__name__)

# Rows that represent a roster appearance. A NULL minutes value is unrecorded,
# not "did not play", so it is excluded here and handled separately.
QUALIFYING_FILTER = "minutes IS NOT NULL AND minutes >= 0"

_INTEGER_TYPES = {
    "TINYINT",
    "SMALLINT",
    "INTEGER",
    "BIGINT",
    "HUGEINT",
    "UTINYINT",
    "USMALLINT",
    "UINTEGER",
    "UBIGINT",
}
_FLOAT_TYPES = {"FLOAT", "REAL", "DOUBLE"}

# Python annotation -> accepted DuckDB type family
TYPE_FAMILIES: dict[type, str] = {
    int: "integer",
    float: "numeric",
    str: "string",
    date: "date",
    datetime: "timestamp",
}


def _matches_family(duckdb_type: str, family: str) -> bool:
    base = re.sub(r"\(.*\)", "", duckdb_type.upper()).strip()
    if family == "integer":
        return base in _INTEGER_TYPES
    if family == "numeric":
        return base in _INTEGER_TYPES or base in _FLOAT_TYPES or base == "DECIMAL"
    if family == "string":
        return base == "VARCHAR"
    if family == "date":
        return base == "DATE" or base.startswith("TIMESTAMP")
    if family == "timestamp":
        return base.startswith("TIMESTAMP") or base == "DATE"
    return False


def _field_family(annotation: Any) -> str:
    # Unwrap Optional[X] / X | None
    if isinstance(annotation, types.UnionType) or typing.get_origin(annotation) is typing.Union:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        annotation = args[0]
    return TYPE_FAMILIES[annotation]


def required_source_columns() -> dict[str, str]:
    """Return ``{column: type_family}`` for every column the pipelines read."""
    return {
        name: _field_family(field.annotation)
        for name, field in GameStatRecord.model_fields.items()
    }


def describe_relation(con: duckdb.DuckDBPyConnection, relation: str) -> dict[str, str]:
    """
    Return ``{column_name: duckdb_type}`` for a table or view.

    Raises:
        duckdb.Error: If the relation cannot be described.
    """
    rows = con.execute(f"DESCRIBE SELECT * FROM {relation}").fetchall()  # noqa: S608
    return {row[0]: row[1] for row in rows}


def validate_source_schema(con: duckdb.DuckDBPyConnection, source: str) -> dict[str, str]:
    """
    Check that the source relation exposes every required column with a usable type.

    Args:
        con: Warehouse connection.
        source: Source relation name.

    Returns:
        The described source columns.

    Raises:
        SourceSchemaError: Listing every missing or mistyped column.
    """
    try:
        actual = describe_relation(con, source)
    except duckdb.Error as e:
        raise SourceSchemaError(source, [f"relation not readable: {e}"]) from e

    actual_lower = {name.lower(): dtype for name, dtype in actual.items()}
    problems: list[str] = []
    for column, family in required_source_columns().items():
        dtype = actual_lower.get(column)
        if dtype is None:
            problems.append(f"missing column '{column}'")
        elif not _matches_family(dtype, family):
            problems.append(f"column '{column}' has type {dtype}, expected {family}")

    if problems:
        logger.error("Source schema validation failed", source=source, problems=problems)
        raise SourceSchemaError(source, problems)

    logger.debug("Source schema validated", source=source, columns=len(actual))
    return actual


def count_invalid_minutes(con: duckdb.DuckDBPyConnection, source: str) -> dict[str, int]:
    """
    Count source rows excluded from the profile pipeline because of their minutes value.

    Returns:
        ``{"null_minutes": n, "negative_minutes": m}``
    """
    null_count, negative_count = con.execute(
        f"""
        SELECT
            COUNT(*) FILTER (WHERE minutes IS NULL),
            COUNT(*) FILTER (WHERE minutes < 0)
        FROM {source}
        """  # noqa: S608
    ).fetchone()
    return {"null_minutes": int(null_count), "negative_minutes": int(negative_count)}


def quarantine_invalid_rows(
    con: duckdb.DuckDBPyConnection,
    source: str,
    run_id: str,
    quarantine_dir: Path | str | None = None,
) -> Path | None:
    """
    Write rows with null or negative minutes to a quarantine JSON file.

    Quarantine is diagnostic only: a write failure is logged and never aborts the run.

    Args:
        con: Warehouse connection.
        source: Source relation name.
        run_id: Identifier of the current run, used in the file name.
        quarantine_dir: Base directory. If None, uses settings.

    Returns:
        Path to the quarantine file, or None when there was nothing to quarantine.
    """
    cursor = con.execute(
        f"SELECT * FROM {source} WHERE NOT ({QUALIFYING_FILTER}) "  # noqa: S608
        "ORDER BY player_id, game_id"
    )
    rows = cursor.fetchall()
    if not rows:
        return None

    columns = [desc[0] for desc in cursor.description]
    base = Path(quarantine_dir or get_settings().quarantine_dir)
    entity_dir = base / source.replace(".", "_")
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S_%f")
    filepath = entity_dir / f"{timestamp}_{run_id}.json"

    payload = {
        "source": source,
        "run_id": run_id,
        "timestamp": datetime.now(UTC).isoformat(),
        "reason": "minutes is null or negative",
        "row_count": len(rows),
        "rows": [dict(zip(columns, row, strict=True)) for row in rows],
    }

    try:
        entity_dir.mkdir(parents=True, exist_ok=True)
        with filepath.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, default=str, ensure_ascii=False)
    except OSError as e:
        logger.warning(
            "Failed to write quarantine file",
            source=source,
            error=str(e),
            attempted_path=str(filepath),
        )
        return None

    logger.warning(
        "Rows with invalid minutes quarantined",
        source=source,
        row_count=len(rows),
        quarantine_path=str(filepath),
    )
    return filepath


def count_duplicate_games(con: duckdb.DuckDBPyConnection, source: str) -> int:
    """Count (player_id, game_id) keys that appear on more than one source row."""
    row = con.execute(
        f"""
        SELECT COUNT(*) FROM (
            SELECT player_id, game_id
            FROM {source}
            GROUP BY player_id, game_id
            HAVING COUNT(*) > 1
        )
        """  # noqa: S608
    ).fetchone()
    return int(row[0])
