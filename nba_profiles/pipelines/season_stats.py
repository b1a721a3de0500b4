"""Season aggregation combined across every team a player appeared for.

Totals, per-game averages and shooting ratios are computed over all of a
player's qualifying games in a season, whichever team each game was played
for. The row is labeled with the resolved current team for display only.

Rounding is part of the published contract: averages carry 1 decimal place,
shooting ratios and true shooting percentage carry 4.
"""

from nba_profiles.pipelines.sql import (
    AVERAGED_STATS,
    COUNTING_STATS,
    PLAYED_MINUTES_THRESHOLD,
    full_name,
    qualifying_rows,
)
from nba_profiles.pipelines.team_resolution import resolve_current_teams_sql


def _total(stat: str) -> str:
    return f"CAST(COALESCE(SUM(games.{stat}), 0) AS BIGINT)"


def safe_ratio(numerator: str, denominator: str, scale: float = 1, digits: int = 4) -> str:
    """
    Expression dividing two aggregates, yielding 0.0 when the denominator is zero.

    Args:
        numerator: SQL expression for the numerator.
        denominator: SQL expression for the denominator.
        scale: Multiplier applied to the ratio (100 for a percentage).
        digits: Decimal places to round to.
    """
    return (
        f"CASE WHEN ({denominator}) = 0 THEN 0.0 "
        f"ELSE ROUND(CAST({numerator} AS DOUBLE) / ({denominator}) * {scale}, {digits}) END"
    )


def season_summary_sql(source: str) -> str:
    """
    Build a query returning one season summary per (player_id, season).

    Args:
        source: Source relation name.

    Returns:
        SELECT whose columns match :class:`nba_profiles.models.SeasonSummary`.
    """
    totals = ",\n            ".join(
        f"{_total(stat)} AS total_{stat}" for stat in COUNTING_STATS
    )
    averages = ",\n            ".join(
        f"CAST(ROUND(AVG(games.{stat}), 1) AS DOUBLE) AS avg_{stat}" for stat in AVERAGED_STATS
    )
    true_shooting_denominator = f"2 * ({_total('fga')} + 0.44 * {_total('fta')})"

    return f"""
        SELECT
            games.player_id,
            {full_name("teams.first_name", "teams.last_name")} AS player_name,
            teams.first_name,
            teams.last_name,
            games.season,
            teams.current_team_id,
            teams.current_team,
            COUNT(*) FILTER (WHERE games.minutes >= {PLAYED_MINUTES_THRESHOLD}) AS games_played,
            CAST(ROUND(SUM(games.minutes), 1) AS DOUBLE) AS total_minutes,
            {totals},
            {averages},
            {safe_ratio(_total("fgm"), _total("fga"))} AS field_goal_percentage,
            {safe_ratio(_total("fg3m"), _total("fg3a"))} AS three_point_percentage,
            {safe_ratio(_total("ftm"), _total("fta"))} AS free_throw_percentage,
            {safe_ratio(_total("points"), true_shooting_denominator, scale=100)}
                AS true_shooting_percentage
        FROM ({qualifying_rows(source)}) AS games
        JOIN ({resolve_current_teams_sql(source)}) AS teams
            ON games.player_id = teams.player_id AND games.season = teams.season
        GROUP BY
            games.player_id,
            games.season,
            teams.first_name,
            teams.last_name,
            teams.current_team_id,
            teams.current_team
    """
