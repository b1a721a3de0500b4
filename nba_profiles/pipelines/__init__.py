"""Recompute pipelines.

All pipelines are imported here to trigger @register_pipeline decoration
and ensure auto-discovery via list_pipelines() / create_pipeline().
"""

from nba_profiles.pipelines.base import BasePipeline
from nba_profiles.pipelines.game_log import game_log_sql
from nba_profiles.pipelines.profiles import ProfilePipeline, player_profiles_sql
from nba_profiles.pipelines.reference import ReferencePipeline, player_team_reference_sql
from nba_profiles.pipelines.registry import (
    create_pipeline,
    get_pipeline,
    list_pipelines,
    register_pipeline,
)
from nba_profiles.pipelines.runner import run_pipelines
from nba_profiles.pipelines.season_stats import season_summary_sql
from nba_profiles.pipelines.team_resolution import resolve_current_teams_sql

__all__ = [
    "BasePipeline",
    "ProfilePipeline",
    "ReferencePipeline",
    "create_pipeline",
    "game_log_sql",
    "get_pipeline",
    "list_pipelines",
    "player_profiles_sql",
    "player_team_reference_sql",
    "register_pipeline",
    "resolve_current_teams_sql",
    "run_pipelines",
    "season_summary_sql",
]
