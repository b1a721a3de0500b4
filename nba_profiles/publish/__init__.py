"""Atomic stage, commit and cleanup publishing."""

from pathlib import Path

import duckdb

from nba_profiles.publish.audit import PublishAuditLogger
from nba_profiles.publish.base import PublishResult, Publisher, StagedDataset
from nba_profiles.publish.duckdb_table import DuckDBTablePublisher
from nba_profiles.publish.parquet_files import ParquetPublisher


def create_publisher(
    target: str,
    con: duckdb.DuckDBPyConnection,
    output_dir: Path | str | None = None,
    run_id: str | None = None,
) -> Publisher:
    """
    Create a publisher for a target.

    Args:
        target: "duckdb" or "parquet".
        con: Warehouse connection.
        output_dir: Parquet output directory (ignored for duckdb).
        run_id: Shared run identifier.

    Raises:
        ValueError: If the target is unknown.
    """
    if target == "duckdb":
        return DuckDBTablePublisher(con, run_id=run_id)
    if target == "parquet":
        return ParquetPublisher(con, output_dir=output_dir, run_id=run_id)
    raise ValueError(f"Unknown publish target '{target}'")


__all__ = [
    "DuckDBTablePublisher",
    "ParquetPublisher",
    "PublishAuditLogger",
    "PublishResult",
    "Publisher",
    "StagedDataset",
    "create_publisher",
]
