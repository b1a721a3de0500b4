"""Player/team/season reference model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReferenceEntry(BaseModel):
    """Distinct player, team and season combination with lineage fields."""

    model_config = ConfigDict(frozen=True)

    full_name: str = Field(..., description="First and last name")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    player_id: int = Field(..., description="NBA.com player ID")
    team_full_name: str = Field(..., description="Team city and name")
    team_city: str = Field(..., description="Team city")
    team_name: str = Field(..., description="Team nickname")
    team_id: int = Field(..., description="NBA.com team ID")
    season: str = Field(..., description="Season label")
    snapshot_ts: datetime = Field(..., description="Upstream snapshot timestamp")
    batch_id: str = Field(..., description="Upstream load batch identifier")
