"""Player profile composition: season summary joined onto the game log."""

import duckdb

from nba_profiles.models import ProfileRow, SeasonSummary, column_names
from nba_profiles.pipelines.base import BasePipeline
from nba_profiles.pipelines.game_log import game_log_sql
from nba_profiles.pipelines.registry import register_pipeline
from nba_profiles.pipelines.season_stats import season_summary_sql
from nba_profiles.schema.source import count_invalid_minutes, quarantine_invalid_rows

# Game-level columns appended after the season summary; join keys appear once.
GAME_COLUMNS = [c for c in column_names(ProfileRow) if c not in SeasonSummary.model_fields]


def player_profiles_sql(source: str) -> str:
    """
    Build the published player profile query.

    The season summary and the game log are computed independently and only
    meet in this join. The join is anchored on the summary, so every game log
    row appears exactly once carrying its player-season summary, and a summary
    without games would still appear once with null game fields.

    Ordering: season descending, player name, game date; player id and game
    number keep the order total.

    Args:
        source: Source relation name.

    Returns:
        SELECT whose columns match :class:`nba_profiles.models.ProfileRow`.
    """
    game_columns = ",\n            ".join(f"game_log.{c}" for c in GAME_COLUMNS)
    return f"""
        WITH
            season_summary AS ({season_summary_sql(source)}),
            game_log AS ({game_log_sql(source)})
        SELECT
            season_summary.*,
            {game_columns}
        FROM season_summary
        LEFT JOIN game_log
            ON season_summary.player_id = game_log.player_id
            AND season_summary.season = game_log.season
        ORDER BY
            season_summary.season DESC,
            season_summary.player_name ASC,
            game_log.game_date ASC,
            season_summary.player_id ASC,
            game_log.game_number ASC
    """


@register_pipeline
class ProfilePipeline(BasePipeline):
    """Publish the player profile dataset."""

    name = "profile"
    dataset = "player_profiles"
    model = ProfileRow

    def prepare(self, con: duckdb.DuckDBPyConnection, run_id: str) -> None:
        """Report and quarantine source rows excluded for null or negative minutes."""
        invalid = count_invalid_minutes(con, self.source)
        if invalid["null_minutes"] or invalid["negative_minutes"]:
            self.logger.warning("Excluding rows with invalid minutes", **invalid)
            quarantine_invalid_rows(con, self.source, run_id)

    def build_sql(self, source: str) -> str:
        return player_profiles_sql(source)
