"""Publish datasets as DuckDB tables swapped inside a transaction."""

import re
from typing import Any

import duckdb

from nba_profiles.exceptions import CleanupError
from nba_profiles.publish.base import Publisher, StagedDataset

# SQL identifier validation (prevent injection)
VALID_TABLE_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def _validate_table_name(table: str) -> None:
    """Validate table name to prevent SQL injection."""
    if not VALID_TABLE_NAME.match(table):
        raise ValueError(f"Invalid table name: {table}")


class DuckDBTablePublisher(Publisher):
    """
    Stage into a run-scoped table, then swap it into place transactionally.

    The swap is ``CREATE OR REPLACE TABLE`` inside an explicit transaction, so
    concurrent readers see the old table until ``COMMIT`` and the new one after.
    """

    target = "duckdb"

    def staging_table(self, dataset: str) -> str:
        """Name of this run's staging table for a dataset."""
        return f"_stage_{dataset}_{self.run_id}"

    def stage(self, dataset: str, sql: str) -> StagedDataset:
        _validate_table_name(dataset)
        staging = self.staging_table(dataset)
        _validate_table_name(staging)

        self.con.execute(f'CREATE OR REPLACE TABLE "{staging}" AS {sql}')
        columns = [row[0] for row in self.con.execute(f'DESCRIBE "{staging}"').fetchall()]
        count_sql = f'SELECT COUNT(*) FROM "{staging}"'  # noqa: S608
        row_count = self.con.execute(count_sql).fetchone()[0]

        return StagedDataset(
            dataset=dataset, location=staging, row_count=row_count, columns=columns
        )

    def commit(self, staged: StagedDataset) -> str:
        self.con.execute("BEGIN TRANSACTION")
        try:
            self.con.execute(
                f'CREATE OR REPLACE TABLE "{staged.dataset}" AS '
                f'SELECT * FROM "{staged.location}"'  # noqa: S608
            )
            self.con.execute("COMMIT")
        except duckdb.Error:
            try:
                self.con.execute("ROLLBACK")
            except duckdb.Error as rollback_err:
                # A failed COMMIT has already ended the transaction.
                self.logger.debug("Rollback skipped", error=str(rollback_err))
            raise
        return staged.dataset

    def discard(self, staged: StagedDataset) -> None:
        try:
            self.con.execute(f'DROP TABLE IF EXISTS "{staged.location}"')
        except duckdb.Error as e:
            raise CleanupError(f"Cannot drop staging table '{staged.location}': {e}") from e

    def exists(self, dataset: str) -> bool:
        row = self.con.execute(
            """
            SELECT COUNT(*) FROM information_schema.tables
            WHERE table_name = ?
                AND table_catalog = current_database()
                AND table_schema = current_schema()
            """,
            [dataset],
        ).fetchone()
        return row[0] > 0

    def read(self, dataset: str) -> list[dict[str, Any]]:
        _validate_table_name(dataset)
        if not self.exists(dataset):
            raise FileNotFoundError(f"Dataset not published: {dataset}")
        cursor = self.con.execute(f'SELECT * FROM "{dataset}"')  # noqa: S608
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row, strict=True)) for row in cursor.fetchall()]

    def staging_artifacts(self) -> list[str]:
        rows = self.con.execute(
            """
            SELECT table_name FROM information_schema.tables
            WHERE starts_with(table_name, '_stage_')
                AND table_catalog = current_database()
            ORDER BY table_name
            """
        ).fetchall()
        return [row[0] for row in rows]
