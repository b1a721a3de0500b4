"""Run one or more registered pipelines against a shared warehouse connection."""

import uuid
from pathlib import Path

import duckdb
import structlog

from nba_profiles.pipelines.registry import create_pipeline, list_pipelines
from nba_profiles.publish import PublishResult, create_publisher

logger = structlog.get_logger(__name__)


def run_pipelines(
    con: duckdb.DuckDBPyConnection,
    names: list[str] | None = None,
    target: str = "duckdb",
    output_dir: Path | str | None = None,
    source: str | None = None,
    run_id: str | None = None,
) -> list[PublishResult]:
    """
    Recompute and publish the named datasets in order.

    Each pipeline gets its own publisher and staging location. The first
    failure aborts the remaining pipelines; datasets already published in this
    run stay published, since every dataset is independent.

    Args:
        con: Warehouse connection.
        names: Pipeline names. If None, runs every registered pipeline.
        target: Publish target ("duckdb" or "parquet").
        output_dir: Parquet output directory.
        source: Source relation override.
        run_id: Run identifier shared by every dataset in this run.

    Returns:
        One result per published dataset.

    Raises:
        ValueError: If a pipeline name is unknown.
        PipelineError: If any pipeline fails.
    """
    names = names or list_pipelines()
    run_id = run_id or uuid.uuid4().hex

    pipelines = []
    for name in names:
        pipeline = create_pipeline(name, source=source)
        if pipeline is None:
            raise ValueError(f"Unknown pipeline '{name}'. Available: {', '.join(list_pipelines())}")
        pipelines.append(pipeline)

    logger.info("Starting run", run_id=run_id, pipelines=names, target=target)

    results = []
    for pipeline in pipelines:
        publisher = create_publisher(target, con, output_dir=output_dir, run_id=run_id)
        results.append(pipeline.run(con, publisher))

    logger.info(
        "Run completed",
        run_id=run_id,
        datasets=[r.dataset for r in results],
        rows=sum(r.row_count for r in results),
    )
    return results
