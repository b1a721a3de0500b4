"""Publish datasets as Parquet files swapped by atomic rename."""

import shutil
from pathlib import Path
from typing import Any

import duckdb
import pyarrow.parquet as pq

from nba_profiles.exceptions import CleanupError
from nba_profiles.publish.base import Publisher, StagedDataset
from nba_profiles.utils.config import get_settings

STAGING_DIRNAME = "_staging"


class ParquetPublisher(Publisher):
    """
    Stage into ``<output_dir>/_staging/<dataset>-<run_id>/``, then rename into place.

    Staging lives under the output directory so the final rename never crosses
    a filesystem boundary, which is what makes it atomic.
    """

    target = "parquet"

    def __init__(
        self,
        con: duckdb.DuckDBPyConnection,
        output_dir: Path | str | None = None,
        run_id: str | None = None,
    ):
        """
        Initialize publisher.

        Args:
            con: Warehouse connection used to evaluate dataset queries.
            output_dir: Directory holding published files. If None, uses settings.
            run_id: Identifier for this run's staging directory.
        """
        super().__init__(con, run_id=run_id)
        self.output_dir = Path(output_dir or get_settings().output_dir)

    def published_path(self, dataset: str) -> Path:
        """Location of a published dataset file."""
        return self.output_dir / f"{dataset}.parquet"

    def staging_dir(self, dataset: str) -> Path:
        """This run's staging directory for a dataset."""
        return self.output_dir / STAGING_DIRNAME / f"{dataset}-{self.run_id}"

    def stage(self, dataset: str, sql: str) -> StagedDataset:
        staging_dir = self.staging_dir(dataset)
        staging_dir.mkdir(parents=True, exist_ok=True)
        staging_path = staging_dir / f"{dataset}.parquet"

        arrow_table = self.con.execute(sql).fetch_arrow_table()
        pq.write_table(arrow_table, staging_path)

        return StagedDataset(
            dataset=dataset,
            location=str(staging_path),
            row_count=arrow_table.num_rows,
            columns=arrow_table.column_names,
        )

    def commit(self, staged: StagedDataset) -> str:
        published = self.published_path(staged.dataset)
        published.parent.mkdir(parents=True, exist_ok=True)
        Path(staged.location).replace(published)
        return str(published)

    def discard(self, staged: StagedDataset) -> None:
        staging_dir = Path(staged.location).parent
        try:
            shutil.rmtree(staging_dir)
        except OSError as e:
            raise CleanupError(f"Cannot remove staging directory '{staging_dir}': {e}") from e

    def exists(self, dataset: str) -> bool:
        return self.published_path(dataset).exists()

    def read(self, dataset: str) -> list[dict[str, Any]]:
        path = self.published_path(dataset)
        if not path.exists():
            raise FileNotFoundError(f"Dataset not published: {path}")
        return pq.read_table(path).to_pylist()

    def staging_artifacts(self) -> list[str]:
        staging_root = self.output_dir / STAGING_DIRNAME
        if not staging_root.exists():
            return []
        return sorted(str(p) for p in staging_root.iterdir() if p.is_dir())
