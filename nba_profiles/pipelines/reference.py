"""Player/team/season reference extract."""

from nba_profiles.models import ReferenceEntry
from nba_profiles.pipelines.base import BasePipeline
from nba_profiles.pipelines.registry import register_pipeline
from nba_profiles.pipelines.sql import full_name, team_label


def player_team_reference_sql(source: str) -> str:
    """
    Build the distinct player, team and season reference query.

    A plain de-duplicated projection of the full source relation: no joins,
    no aggregation and no current-team resolution. Ordered by full name, then
    season descending, with the remaining columns as tie-breakers.

    Args:
        source: Source relation name.

    Returns:
        SELECT whose columns match :class:`nba_profiles.models.ReferenceEntry`.
    """
    return f"""
        SELECT DISTINCT
            {full_name()} AS full_name,
            first_name,
            last_name,
            player_id,
            {team_label()} AS team_full_name,
            team_city,
            team_name,
            team_id,
            season,
            CAST(snapshot_ts AS TIMESTAMP) AS snapshot_ts,
            batch_id
        FROM {source}
        ORDER BY
            full_name ASC,
            season DESC,
            player_id,
            first_name,
            last_name,
            team_id,
            team_full_name,
            team_city,
            team_name,
            snapshot_ts,
            batch_id
    """  # noqa: S608


@register_pipeline
class ReferencePipeline(BasePipeline):
    """Publish the player/team/season reference dataset."""

    name = "reference"
    dataset = "player_team_reference"
    model = ReferenceEntry

    def build_sql(self, source: str) -> str:
        return player_team_reference_sql(source)
