"""Source game statistics model."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class GameStatRecord(BaseModel):
    """One player's box score line for one game.

    Field names double as the required column names of the source relation.
    """

    player_id: int = Field(..., description="NBA.com player ID")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    team_id: int = Field(..., description="NBA.com team ID")
    team_city: str = Field(..., description="Team city (e.g., 'Los Angeles')")
    team_name: str = Field(..., description="Team nickname (e.g., 'Lakers')")
    season: str = Field(..., description="Season label (e.g., '2024-25')")
    game_id: str = Field(..., description="NBA.com 10-character game ID")
    game_date: date = Field(..., description="Game date")
    minutes: float | None = Field(None, description="Minutes played; 0 means did not play")
    points: int = Field(default=0, description="Points")
    rebounds: int = Field(default=0, description="Total rebounds")
    assists: int = Field(default=0, description="Assists")
    steals: int = Field(default=0, description="Steals")
    blocks: int = Field(default=0, description="Blocks")
    turnovers: int = Field(default=0, description="Turnovers")
    fouls: int = Field(default=0, description="Personal fouls")
    fgm: int = Field(default=0, description="Field goals made")
    fga: int = Field(default=0, description="Field goals attempted")
    fg3m: int = Field(default=0, description="Three-pointers made")
    fg3a: int = Field(default=0, description="Three-pointers attempted")
    ftm: int = Field(default=0, description="Free throws made")
    fta: int = Field(default=0, description="Free throws attempted")
    plus_minus: int = Field(default=0, description="Plus-minus")
    snapshot_ts: datetime = Field(..., description="Upstream snapshot timestamp")
    batch_id: str = Field(..., description="Upstream load batch identifier")
