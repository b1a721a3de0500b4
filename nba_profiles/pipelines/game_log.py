"""Per-game log with the team actually played for."""

from nba_profiles.pipelines.sql import (
    COUNTING_STATS,
    PLAYED_MINUTES_THRESHOLD,
    qualifying_rows,
    team_label,
)

PLAYED = "Played"
DID_NOT_PLAY = "Did Not Play"


def game_log_sql(source: str) -> str:
    """
    Build a query returning one game log entry per qualifying source row.

    No aggregation happens here: row count equals the number of qualifying
    source rows. ``game_number`` counts from 1 in date order within each
    player-season, with ``game_id`` breaking same-day ties.

    Args:
        source: Source relation name.

    Returns:
        SELECT whose columns match :class:`nba_profiles.models.GameLogEntry`.
    """
    stats = ",\n            ".join(COUNTING_STATS)
    return f"""
        SELECT
            player_id,
            season,
            game_id,
            CAST(game_date AS DATE) AS game_date,
            ROW_NUMBER() OVER (
                PARTITION BY player_id, season
                ORDER BY game_date, game_id
            ) AS game_number,
            team_id AS game_team_id,
            {team_label()} AS game_team,
            CASE
                WHEN minutes >= {PLAYED_MINUTES_THRESHOLD} THEN '{PLAYED}'
                ELSE '{DID_NOT_PLAY}'
            END AS game_status,
            CAST(minutes AS DOUBLE) AS minutes,
            {stats}
        FROM ({qualifying_rows(source)}) AS appearances
    """
