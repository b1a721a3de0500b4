"""Pipeline commands: run, list."""

from pathlib import Path

import structlog
import typer

from nba_profiles.pipelines import get_pipeline, list_pipelines, run_pipelines
from nba_profiles.schema.connection import get_db_connection
from nba_profiles.utils.config import get_settings
from nba_profiles.utils.logging import get_active_log_file

pipeline_app = typer.Typer(help="Recompute and publish commands.")

logger = structlog.get_logger(__name__)


@pipeline_app.command()
def run(
    dataset: str = typer.Option(
        "all",
        "--dataset",
        "-d",
        help="Pipeline to run: 'reference', 'profile' or 'all'",
    ),
    target: str = typer.Option(
        None,
        "--target",
        "-t",
        help="Publish target: 'duckdb' or 'parquet' (default: settings)",
    ),
    output_dir: Path = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Output directory for parquet datasets (default: settings)",
    ),
    source: str = typer.Option(
        None,
        "--source",
        "-s",
        help="Source relation holding per-game player stats (default: settings)",
    ),
) -> None:
    """
    Recompute datasets from the full source table and publish them atomically.

    A failed run leaves every previously published dataset intact; re-running
    with the same source reproduces the same output.
    """
    settings = get_settings()
    target = (target or settings.publish_target).lower()
    names = None if dataset == "all" else [dataset]

    logger.info("Starting pipeline run", dataset=dataset, target=target)

    try:
        conn = get_db_connection()
    except RuntimeError as e:
        logger.error("Cannot open warehouse", error=str(e))
        typer.echo(f"[FAIL] Cannot open warehouse: {e}", err=True)
        raise typer.Exit(code=1) from e

    try:
        results = run_pipelines(
            conn, names=names, target=target, output_dir=output_dir, source=source
        )
        for result in results:
            typer.echo(f"[OK] {result.dataset}: {result.row_count:,} rows → {result.location}")
            if result.cleanup_error:
                typer.echo(f"  [WARN] Staging artifact not removed: {result.cleanup_error}")
    except Exception as e:
        logger.error("Pipeline run failed", error=str(e))
        typer.echo(f"[FAIL] Pipeline run failed: {e}", err=True)
        log_file = get_active_log_file()
        if log_file is not None:
            typer.echo(f"  See {log_file} for details", err=True)
        raise typer.Exit(code=1) from e
    finally:
        conn.close()


@pipeline_app.command(name="list")
def list_command() -> None:
    """List registered pipelines and the datasets they publish."""
    for name in list_pipelines():
        pipeline_class = get_pipeline(name)
        typer.echo(f"  - {name}: {pipeline_class.dataset}")
