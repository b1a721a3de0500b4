"""Settings for the warehouse, source relation, publish target and logging.

Values come from the environment (or a ``.env`` file in the working directory);
field names map to upper-case variables, e.g. ``DUCKDB_PATH``, ``PUBLISH_TARGET``.
"""

import re
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

# Plain or schema-qualified SQL identifier (e.g. "player_game_stats", "main.player_game_stats")
QUALIFIED_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)?$")

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

_CHOICES = {
    "log_format": {"json", "console"},
    "publish_target": {"duckdb", "parquet"},
}


class Settings(BaseSettings):
    """Runtime configuration for recompute and publish runs."""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, extra="ignore")

    # Warehouse and source
    duckdb_path: str = Field(default="nba_profiles.duckdb", description="Path to DuckDB warehouse")
    duckdb_memory_limit: str = Field(default="4GB", description="DuckDB memory_limit setting")
    duckdb_threads: int = Field(default=4, description="DuckDB threads setting")
    source_table: str = Field(
        default="player_game_stats", description="Relation holding per-game player stats"
    )
    source_sqlite_path: str | None = Field(
        default=None, description="Optional SQLite database attached read-only as source_db"
    )

    # Publishing
    publish_target: str = Field(default="duckdb", description="duckdb or parquet")
    output_dir: str = Field(default="published", description="Directory for parquet datasets")
    quarantine_dir: str = Field(default="quarantine", description="Directory for excluded rows")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="json", description="Console format: json or console")
    log_dir: str = Field(default="logs", description="Directory for the rotating log file")
    log_max_bytes: int = Field(default=10_000_000, description="Rotate the log file at this size")
    log_backup_count: int = Field(default=5, description="Rotated log files to keep")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize to upper case and reject unknown levels."""
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        return v.upper()

    @field_validator("log_format", "publish_target")
    @classmethod
    def validate_choice(cls, v: str, info: ValidationInfo) -> str:
        """Normalize to lower case and reject values outside the field's choices."""
        allowed = _CHOICES[info.field_name]
        if v.lower() not in allowed:
            raise ValueError(f"{info.field_name} must be one of {sorted(allowed)}")
        return v.lower()

    @field_validator("source_table")
    @classmethod
    def validate_source_table(cls, v: str) -> str:
        """Reject source names that are not plain SQL identifiers."""
        if not QUALIFIED_IDENTIFIER.match(v):
            raise ValueError(f"source_table must be a SQL identifier, got {v!r}")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings()


def ensure_directories() -> None:
    """Create the log, quarantine and output directories and the warehouse's parent."""
    settings = get_settings()

    for directory in (settings.log_dir, settings.quarantine_dir, settings.output_dir):
        Path(directory).mkdir(parents=True, exist_ok=True)

    if settings.duckdb_path != ":memory:":
        Path(settings.duckdb_path).parent.mkdir(parents=True, exist_ok=True)
