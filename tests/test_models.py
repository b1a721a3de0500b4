"""Tests for Pydantic models."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from nba_profiles.models import (
    GameLogEntry,
    GameStatRecord,
    ProfileRow,
    ReferenceEntry,
    SeasonSummary,
    column_names,
)


def test_game_stat_record_defaults():
    record = GameStatRecord(
        player_id=201939,
        first_name="Stephen",
        last_name="Curry",
        team_id=1610612744,
        team_city="Golden State",
        team_name="Warriors",
        season="2024-25",
        game_id="0022400061",
        game_date=date(2024, 10, 23),
        snapshot_ts=datetime(2025, 1, 2, 6),
        batch_id="batch-20250102",
    )

    assert record.minutes is None
    assert record.points == 0
    assert record.plus_minus == 0


def test_game_stat_record_requires_identity():
    with pytest.raises(ValidationError):
        GameStatRecord(player_id=201939, season="2024-25")


def test_profile_row_extends_season_summary():
    summary_columns = column_names(SeasonSummary)
    profile_columns = column_names(ProfileRow)

    assert profile_columns[: len(summary_columns)] == summary_columns
    assert profile_columns[len(summary_columns)] == "game_id"


def test_profile_row_game_fields_cover_game_log():
    log_only = [c for c in column_names(GameLogEntry) if c not in ("player_id", "season")]

    assert [c for c in column_names(ProfileRow) if c in log_only] == log_only


def test_profile_row_game_fields_nullable():
    fields = {name: None for name in column_names(GameLogEntry)}
    fields.pop("player_id")
    fields.pop("season")
    summary = dict.fromkeys(column_names(SeasonSummary), 0)
    summary.update(
        player_name="Dennis Schroder",
        first_name="Dennis",
        last_name="Schroder",
        season="2024-25",
        current_team="Golden State Warriors",
    )

    row = ProfileRow(**summary, **fields)

    assert row.game_id is None
    assert row.game_number is None


def test_reference_entry_frozen():
    entry = ReferenceEntry(
        full_name="Stephen Curry",
        first_name="Stephen",
        last_name="Curry",
        player_id=201939,
        team_full_name="Golden State Warriors",
        team_city="Golden State",
        team_name="Warriors",
        team_id=1610612744,
        season="2024-25",
        snapshot_ts=datetime(2025, 1, 2, 6),
        batch_id="batch-20250102",
    )

    with pytest.raises(ValidationError):
        entry.season = "2023-24"
