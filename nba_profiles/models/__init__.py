"""Pydantic models for source and published datasets."""

from pydantic import BaseModel

from nba_profiles.models.game_stats import GameStatRecord
from nba_profiles.models.profiles import GameLogEntry, ProfileRow, SeasonSummary
from nba_profiles.models.reference import ReferenceEntry


def column_names(model: type[BaseModel]) -> list[str]:
    """Return the model's field names in declaration order."""
    return list(model.model_fields)


__all__ = [
    "GameLogEntry",
    "GameStatRecord",
    "ProfileRow",
    "ReferenceEntry",
    "SeasonSummary",
    "column_names",
]
