"""Base class for recompute pipelines."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime

import duckdb
import pydantic
import structlog

from nba_profiles.models import column_names
from nba_profiles.publish import PublishAuditLogger, Publisher, PublishResult
from nba_profiles.schema.source import validate_source_schema
from nba_profiles.utils.config import get_settings
from nba_profiles.utils.logging import run_log_context

logger = structlog.get_logger(__name__)


class BasePipeline(ABC):
    """
    Abstract base class for full-recompute pipelines.

    A pipeline is a pure query over the source relation plus a published
    dataset name and column contract. All side effects go through the
    :class:`~nba_profiles.publish.Publisher` handed to :meth:`run`.
    """

    name: str  # e.g., "reference", "profile"
    dataset: str  # published table / file name
    model: type[pydantic.BaseModel]  # published column contract

    def __init__(self, source: str | None = None):
        """
        Initialize pipeline.

        Args:
            source: Source relation name. If None, uses settings.
        """
        self.source = source or get_settings().source_table
        self.logger = logger.bind(pipeline=self.name, dataset=self.dataset)

    @abstractmethod
    def build_sql(self, source: str) -> str:
        """
        Build the SELECT producing the full dataset.

        Args:
            source: Source relation name.

        Returns:
            SQL text.
        """
        pass

    def prepare(self, con: duckdb.DuckDBPyConnection, run_id: str) -> None:
        """Hook called after source validation and before staging."""
        return None

    def run(self, con: duckdb.DuckDBPyConnection, publisher: Publisher) -> PublishResult:
        """
        Recompute the dataset from the full source relation and publish it atomically.

        Every failure is fatal: it is logged, recorded in the audit table and
        re-raised. The previously published dataset is left intact.

        Args:
            con: Warehouse connection holding the source relation.
            publisher: Publisher owning the stage/commit/cleanup protocol.

        Returns:
            Publish metadata.

        Raises:
            SourceSchemaError: If the source relation is unusable.
            StagingError: If the dataset cannot be materialized.
            PublishError: If the atomic replace fails.
        """
        if not getattr(self, "name", None):
            raise AttributeError(f"{type(self).__name__} must define a non-empty 'name'")

        run_id = publisher.run_id
        audit = PublishAuditLogger(con)
        started_at = datetime.now(UTC)
        with run_log_context(run_id=run_id, pipeline=self.name):
            try:
                self.logger.info("Starting recompute", source=self.source, target=publisher.target)
                validate_source_schema(con, self.source)
                self.prepare(con, run_id)

                result = publisher.publish(
                    self.dataset, self.build_sql(self.source), column_names(self.model)
                )

                audit.log(
                    run_id=run_id,
                    dataset=self.dataset,
                    target=publisher.target,
                    status="SUCCESS",
                    started_at=started_at,
                    row_count=result.row_count,
                )
                self.logger.info(
                    "Recompute completed",
                    location=result.location,
                    row_count=result.row_count,
                )
                return result

            except Exception as e:
                self.logger.error(
                    "Recompute failed",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                audit.log(
                    run_id=run_id,
                    dataset=self.dataset,
                    target=publisher.target,
                    status="FAILED",
                    started_at=started_at,
                    error_message=f"{type(e).__name__}: {e}",
                )
                raise

    def read(self, publisher: Publisher) -> list[pydantic.BaseModel]:
        """
        Read the published dataset validated against the pipeline's model.

        Raises:
            FileNotFoundError: If the dataset has not been published.
        """
        return [self.model.model_validate(row) for row in publisher.read(self.dataset)]
