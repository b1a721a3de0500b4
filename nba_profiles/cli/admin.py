"""Admin commands: status, validate."""

from dataclasses import dataclass
from typing import Any

import structlog
import typer

from nba_profiles.exceptions import SourceSchemaError
from nba_profiles.pipelines import get_pipeline, list_pipelines
from nba_profiles.publish import PublishAuditLogger, create_publisher
from nba_profiles.schema.connection import get_db_connection
from nba_profiles.schema.source import (
    count_duplicate_games,
    count_invalid_minutes,
    validate_source_schema,
)
from nba_profiles.utils.config import get_settings

admin_app = typer.Typer(help="Warehouse administration commands.")

logger = structlog.get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check."""

    check_name: str
    passed: bool
    message: str
    details: dict[str, Any] | None = None


def validate_schema(conn, source: str) -> ValidationResult:
    """Validate the source relation exposes every required column."""
    try:
        columns = validate_source_schema(conn, source)
    except SourceSchemaError as e:
        return ValidationResult(
            check_name="source_schema",
            passed=False,
            message=f"{len(e.problems)} schema problem(s) in '{source}'",
            details={"problems": e.problems},
        )

    return ValidationResult(
        check_name="source_schema",
        passed=True,
        message=f"'{source}' has all required columns ({len(columns)} total)",
    )


def validate_minutes(conn, source: str) -> ValidationResult:
    """Report rows that will be excluded for null or negative minutes."""
    invalid = count_invalid_minutes(conn, source)
    total = invalid["null_minutes"] + invalid["negative_minutes"]

    # Excluded rows are quarantined on every run rather than failing it.
    return ValidationResult(
        check_name="minutes",
        passed=True,
        message=(
            f"{invalid['null_minutes']:,} null and {invalid['negative_minutes']:,} "
            "negative minutes row(s) will be quarantined"
            if total
            else "All rows have recorded, non-negative minutes"
        ),
        details=invalid if total else None,
    )


def validate_unique_games(conn, source: str) -> ValidationResult:
    """Validate (player_id, game_id) is unique in the source."""
    duplicates = count_duplicate_games(conn, source)

    return ValidationResult(
        check_name="unique_games",
        passed=duplicates == 0,
        message=f"{duplicates:,} duplicate (player_id, game_id) key(s) found",
    )


VALIDATORS = {
    "source_schema": validate_schema,
    "minutes": validate_minutes,
    "unique_games": validate_unique_games,
}


def _open_warehouse():
    try:
        return get_db_connection()
    except RuntimeError as e:
        logger.error("Cannot open warehouse", error=str(e))
        typer.echo(f"[FAIL] Cannot open warehouse: {e}", err=True)
        raise typer.Exit(code=1) from e


@admin_app.command()
def status(
    target: str = typer.Option(
        None,
        "--target",
        "-t",
        help="Publish target to inspect: 'duckdb' or 'parquet' (default: settings)",
    ),
) -> None:
    """Show published datasets and their latest audited run."""
    target = (target or get_settings().publish_target).lower()
    conn = _open_warehouse()

    try:
        publisher = create_publisher(target, conn)
        audit = PublishAuditLogger(conn)

        typer.echo(f"\nPublished datasets ({target}):")
        for name in list_pipelines():
            dataset = get_pipeline(name).dataset
            if publisher.exists(dataset):
                typer.echo(f"  - {dataset}: {len(publisher.read(dataset)):,} rows")
            else:
                typer.echo(f"  - {dataset}: (not published)")

            last_run = audit.get_last_run(dataset)
            if last_run:
                marker = "[OK]" if last_run["status"] == "SUCCESS" else "[FAIL]"
                typer.echo(
                    f"      {marker} last run {last_run['run_id']} "
                    f"({last_run['target']}) at {last_run['finished_at']}"
                )
                if last_run["error_message"]:
                    typer.echo(f"        {last_run['error_message']}")

        for dataset, by_status in audit.get_stats().items():
            counts = ", ".join(f"{s.lower()}={v['count']}" for s, v in by_status.items())
            typer.echo(f"  Audited runs for {dataset}: {counts}")

        leftovers = publisher.staging_artifacts()
        if leftovers:
            typer.echo(f"\n[WARN] {len(leftovers)} staging artifact(s) left behind:")
            for artifact in leftovers:
                typer.echo(f"  - {artifact}")
    except Exception as e:
        logger.error("Failed to get status", error=str(e))
        typer.echo(f"[FAIL] Failed to get status: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        conn.close()


@admin_app.command()
def validate(
    checks: list[str] = typer.Option(
        None,
        "--check",
        "-c",
        help=f"Check to run, repeatable: {', '.join(VALIDATORS)} (default: all)",
    ),
    source: str = typer.Option(
        None,
        "--source",
        "-s",
        help="Source relation to validate (default: settings)",
    ),
) -> None:
    """
    Validate the source relation before a recompute.

    The schema check runs first; when it fails the remaining checks are
    skipped because they query columns that may not exist.
    """
    source = source or get_settings().source_table
    selected = checks or list(VALIDATORS)
    unknown = [c for c in selected if c not in VALIDATORS]
    if unknown:
        typer.echo(f"[FAIL] Unknown check(s): {', '.join(unknown)}", err=True)
        raise typer.Exit(code=1)

    logger.info("Running validation", source=source, checks=selected)
    conn = _open_warehouse()

    results: list[ValidationResult] = []
    try:
        for check_name in sorted(selected, key=list(VALIDATORS).index):
            result = VALIDATORS[check_name](conn, source)
            results.append(result)

            mark = "✓" if result.passed else "✗"
            typer.echo(f"  {mark} {result.check_name}: {result.message}")
            for problem in (result.details or {}).get("problems", []):
                typer.echo(f"      - {problem}")

            if check_name == "source_schema" and not result.passed:
                break
    except Exception as e:
        logger.error("Validation failed", error=str(e))
        typer.echo(f"[FAIL] Validation failed: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        conn.close()

    failed = [r for r in results if not r.passed]
    if failed:
        typer.echo(
            f"\n[FAIL] {len(failed)}/{len(results)} validation check(s) failed", err=True
        )
        raise typer.Exit(code=1)
    typer.echo(f"\n[OK] All {len(results)} validation check(s) passed")
