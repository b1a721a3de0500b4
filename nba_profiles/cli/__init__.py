"""Command-line interface for NBA Profiles."""

import typer

from nba_profiles.utils.config import ensure_directories
from nba_profiles.utils.logging import setup_logging

from .admin import admin_app
from .pipeline import pipeline_app

app = typer.Typer(
    name="nba-profiles",
    help="NBA Profiles - player reference and season profile datasets",
    add_completion=False,
)

app.add_typer(admin_app, name="admin")
app.add_typer(pipeline_app, name="pipeline")


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
    log_format: str = typer.Option(
        None, "--log-format", help="Console log format: 'json' or 'console' (default: settings)"
    ),
) -> None:
    """Prepare directories and logging before any command runs."""
    ensure_directories()
    setup_logging(level="DEBUG" if verbose else None, log_format=log_format)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
