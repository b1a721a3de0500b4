"""Base class for atomic dataset publishers."""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import duckdb
import structlog

from nba_profiles.exceptions import CleanupError, PublishError, StagingError

logger = structlog.get_logger(__name__)


@dataclass
class StagedDataset:
    """A fully materialized, not yet published copy of a dataset."""

    dataset: str
    location: str
    row_count: int
    columns: list[str]


@dataclass
class PublishResult:
    """Outcome of a successful publish."""

    dataset: str
    run_id: str
    target: str
    location: str
    row_count: int
    cleanup_error: str | None = None


class Publisher(ABC):
    """
    Stage, commit and clean up a recomputed dataset as one transaction boundary.

    Subclasses decide where staging lives and how the swap is made atomic.
    :meth:`publish` drives the protocol and owns the failure semantics:

    - staging or validation failure raises :class:`StagingError`; the
      published dataset is untouched and the staging artifact is left for
      diagnosis; ``staging_artifacts()`` lists it until it is removed
    - commit failure raises :class:`PublishError`; the backend guarantees the
      published dataset is either fully old or fully new
    - cleanup failure is logged and reported on the result, never raised
    """

    target: str  # e.g., "duckdb", "parquet"

    def __init__(self, con: duckdb.DuckDBPyConnection, run_id: str | None = None):
        """
        Initialize publisher.

        Args:
            con: Warehouse connection used to evaluate dataset queries.
            run_id: Identifier keeping this run's staging artifacts apart from
                any other run. If None, a random one is generated.
        """
        self.con = con
        self.run_id = run_id or uuid.uuid4().hex
        self.logger = logger.bind(target=self.target, run_id=self.run_id)

    @abstractmethod
    def stage(self, dataset: str, sql: str) -> StagedDataset:
        """
        Materialize the query result into an isolated staging location.

        Args:
            dataset: Published dataset name.
            sql: SELECT producing the full dataset.

        Returns:
            The staged dataset.
        """
        pass

    @abstractmethod
    def commit(self, staged: StagedDataset) -> str:
        """
        Replace the published dataset with the staged one in a single indivisible step.

        Returns:
            Location of the published dataset.
        """
        pass

    @abstractmethod
    def discard(self, staged: StagedDataset) -> None:
        """
        Remove the staging artifact.

        Raises:
            CleanupError: If the artifact cannot be removed.
        """
        pass

    @abstractmethod
    def exists(self, dataset: str) -> bool:
        """Return True if the dataset has been published."""
        pass

    @abstractmethod
    def staging_artifacts(self) -> list[str]:
        """List staging artifacts left behind by any run, e.g. after a failed publish."""
        pass

    @abstractmethod
    def read(self, dataset: str) -> list[dict[str, Any]]:
        """
        Read every row of a published dataset in stored order.

        Raises:
            FileNotFoundError: If the dataset has not been published.
        """
        pass

    def publish(self, dataset: str, sql: str, columns: list[str]) -> PublishResult:
        """
        Recompute a dataset into staging, then atomically publish it.

        Args:
            dataset: Published dataset name.
            sql: SELECT producing the full dataset.
            columns: Expected column names, in order.

        Returns:
            Publish metadata.

        Raises:
            StagingError: If materialization or column validation fails.
            PublishError: If the atomic replace fails.
        """
        log = self.logger.bind(dataset=dataset)
        log.info("Staging dataset")

        try:
            staged = self.stage(dataset, sql)
        except Exception as e:
            log.error("Staging failed", error_type=type(e).__name__, error=str(e))
            raise StagingError(f"Failed to stage '{dataset}': {e}") from e

        if staged.columns != list(columns):
            missing = [c for c in columns if c not in staged.columns]
            unexpected = [c for c in staged.columns if c not in columns]
            log.error(
                "Staged columns do not match contract",
                staging=staged.location,
                missing=missing,
                unexpected=unexpected,
            )
            raise StagingError(
                f"Staged '{dataset}' columns do not match contract "
                f"(missing={missing}, unexpected={unexpected})"
            )

        log.info("Dataset staged", staging=staged.location, row_count=staged.row_count)

        try:
            location = self.commit(staged)
        except Exception as e:
            log.error("Publish failed", error_type=type(e).__name__, error=str(e))
            raise PublishError(f"Failed to publish '{dataset}': {e}") from e

        log.info("Dataset published", location=location, row_count=staged.row_count)

        cleanup_error = None
        try:
            self.discard(staged)
        except CleanupError as e:
            # A leftover staging artifact never invalidates the publish.
            cleanup_error = str(e)
            log.warning(
                "Failed to discard staging artifact",
                staging=staged.location,
                error=cleanup_error,
            )

        return PublishResult(
            dataset=dataset,
            run_id=self.run_id,
            target=self.target,
            location=location,
            row_count=staged.row_count,
            cleanup_error=cleanup_error,
        )
