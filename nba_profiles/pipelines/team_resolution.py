"""Current-team resolution for players traded mid-season."""

from nba_profiles.pipelines.sql import qualifying_rows, team_label


def resolve_current_teams_sql(source: str) -> str:
    """
    Build a query returning one current team per (player_id, season).

    The current team is the team of the player's latest game that season. When
    two games share the latest date the greater ``game_id`` wins, so the result
    never depends on scan order. Names are taken from the same row.

    Args:
        source: Source relation name.

    Returns:
        SELECT producing ``player_id, season, first_name, last_name,
        current_team_id, current_team``.
    """
    return f"""
        SELECT
            player_id,
            season,
            first_name,
            last_name,
            team_id AS current_team_id,
            {team_label()} AS current_team
        FROM ({qualifying_rows(source)}) AS appearances
        QUALIFY ROW_NUMBER() OVER (
            PARTITION BY player_id, season
            ORDER BY game_date DESC, game_id DESC
        ) = 1
    """
