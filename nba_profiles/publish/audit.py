"""Publish audit tracking."""

from datetime import UTC, datetime
from typing import Any

import duckdb
import structlog

logger = structlog.get_logger(__name__)

AUDIT_TABLE_DDL = """
    CREATE TABLE IF NOT EXISTS publish_audit (
        run_id VARCHAR NOT NULL,
        dataset VARCHAR NOT NULL,
        target VARCHAR NOT NULL,
        status VARCHAR NOT NULL,
        row_count BIGINT,
        started_at VARCHAR NOT NULL,
        finished_at VARCHAR NOT NULL,
        error_message VARCHAR,
        PRIMARY KEY (run_id, dataset)
    )
"""


class PublishAuditLogger:
    """Track recompute and publish runs in the warehouse."""

    def __init__(self, con: duckdb.DuckDBPyConnection):
        """
        Initialize audit logger.

        Args:
            con: DuckDB warehouse connection.
        """
        self.con = con
        self.logger = logger
        self._table_ready = False

    def _ensure_table(self) -> None:
        if not self._table_ready:
            self.con.execute(AUDIT_TABLE_DDL)
            self._table_ready = True

    def log(
        self,
        run_id: str,
        dataset: str,
        target: str,
        status: str,
        started_at: datetime,
        row_count: int | None = None,
        error_message: str | None = None,
    ) -> None:
        """
        Log a dataset run.

        Audit writes never fail the run they describe.

        Args:
            run_id: Run identifier.
            dataset: Published dataset name.
            target: Publish target ("duckdb" or "parquet").
            status: "SUCCESS" or "FAILED".
            started_at: When the run started.
            row_count: Rows published.
            error_message: Error message if status is "FAILED".
        """
        finished_at = datetime.now(UTC).isoformat()

        try:
            self._ensure_table()
            self.con.execute(
                """
                INSERT OR REPLACE INTO publish_audit
                (run_id, dataset, target, status, row_count, started_at, finished_at, error_message)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    run_id,
                    dataset,
                    target,
                    status,
                    row_count,
                    started_at.isoformat(),
                    finished_at,
                    error_message,
                ],
            )
        except duckdb.Error as e:
            self.logger.error(
                "Failed to write audit log",
                run_id=run_id,
                dataset=dataset,
                error=str(e),
            )

    def get_last_run(self, dataset: str) -> dict[str, Any] | None:
        """
        Get the most recent run of a dataset.

        Args:
            dataset: Published dataset name.

        Returns:
            Dictionary with run information or None if never run.
        """
        try:
            self._ensure_table()
            cursor = self.con.execute(
                """
                SELECT run_id, dataset, target, status, row_count,
                       started_at, finished_at, error_message
                FROM publish_audit
                WHERE dataset = ?
                ORDER BY finished_at DESC
                LIMIT 1
                """,
                [dataset],
            )
            row = cursor.fetchone()
        except duckdb.Error as e:
            self.logger.error("Failed to query audit status", dataset=dataset, error=str(e))
            return None

        if row is None:
            return None

        columns = [desc[0] for desc in cursor.description]
        return dict(zip(columns, row, strict=True))

    def get_failed_runs(self, dataset: str | None = None) -> list[dict[str, Any]]:
        """
        Get failed runs, most recent first.

        Args:
            dataset: Filter by dataset. If None, returns all.
        """
        query = """
            SELECT run_id, dataset, target, finished_at, error_message
            FROM publish_audit
            WHERE status = 'FAILED'
        """
        params: list[Any] = []
        if dataset:
            query += " AND dataset = ?"
            params.append(dataset)
        query += " ORDER BY finished_at DESC"

        try:
            self._ensure_table()
            cursor = self.con.execute(query, params)
            columns = [desc[0] for desc in cursor.description]
            return [dict(zip(columns, row, strict=True)) for row in cursor.fetchall()]
        except duckdb.Error as e:
            self.logger.error("Failed to query failed runs", dataset=dataset, error=str(e))
            return []

    def get_stats(self) -> dict[str, Any]:
        """
        Get run counts and published rows per dataset and status.

        Returns:
            ``{dataset: {status: {"count": n, "total_rows": m}}}``
        """
        try:
            self._ensure_table()
            rows = self.con.execute(
                """
                SELECT dataset, status, COUNT(*), SUM(row_count)
                FROM publish_audit
                GROUP BY dataset, status
                ORDER BY dataset, status
                """
            ).fetchall()
        except duckdb.Error as e:
            self.logger.error("Failed to query audit stats", error=str(e))
            return {}

        stats: dict[str, Any] = {}
        for dataset, status, count, total_rows in rows:
            stats.setdefault(dataset, {})[status] = {
                "count": count,
                "total_rows": int(total_rows or 0),
            }
        return stats
