"""Season summary, game log and published profile models."""

from datetime import date

from pydantic import BaseModel, Field


class SeasonSummary(BaseModel):
    """Season totals for one player, combined across every team played for."""

    player_id: int = Field(..., description="NBA.com player ID")
    player_name: str = Field(..., description="Full name")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    season: str = Field(..., description="Season label")
    current_team_id: int = Field(..., description="Team of the most recent game")
    current_team: str = Field(..., description="City and name of the most recent team")
    games_played: int = Field(..., description="Games with at least 0.1 minutes")

    total_minutes: float = Field(..., description="Minutes played")
    total_points: int = Field(..., description="Points")
    total_rebounds: int = Field(..., description="Rebounds")
    total_assists: int = Field(..., description="Assists")
    total_steals: int = Field(..., description="Steals")
    total_blocks: int = Field(..., description="Blocks")
    total_turnovers: int = Field(..., description="Turnovers")
    total_fouls: int = Field(..., description="Personal fouls")
    total_fgm: int = Field(..., description="Field goals made")
    total_fga: int = Field(..., description="Field goals attempted")
    total_fg3m: int = Field(..., description="Three-pointers made")
    total_fg3a: int = Field(..., description="Three-pointers attempted")
    total_ftm: int = Field(..., description="Free throws made")
    total_fta: int = Field(..., description="Free throws attempted")
    total_plus_minus: int = Field(..., description="Plus-minus")

    avg_minutes: float = Field(..., description="Minutes per game (1 decimal)")
    avg_points: float = Field(..., description="Points per game (1 decimal)")
    avg_rebounds: float = Field(..., description="Rebounds per game (1 decimal)")
    avg_assists: float = Field(..., description="Assists per game (1 decimal)")
    avg_steals: float = Field(..., description="Steals per game (1 decimal)")
    avg_blocks: float = Field(..., description="Blocks per game (1 decimal)")
    avg_turnovers: float = Field(..., description="Turnovers per game (1 decimal)")
    avg_fouls: float = Field(..., description="Fouls per game (1 decimal)")
    avg_plus_minus: float = Field(..., description="Plus-minus per game (1 decimal)")

    field_goal_percentage: float = Field(..., description="FGM / FGA (4 decimals)")
    three_point_percentage: float = Field(..., description="3PM / 3PA (4 decimals)")
    free_throw_percentage: float = Field(..., description="FTM / FTA (4 decimals)")
    true_shooting_percentage: float = Field(
        ..., description="PTS / (2 * (FGA + 0.44 * FTA)) * 100 (4 decimals)"
    )


class GameLogEntry(BaseModel):
    """One game for one player, labeled with the team actually played for."""

    player_id: int = Field(..., description="NBA.com player ID")
    season: str = Field(..., description="Season label")
    game_id: str = Field(..., description="NBA.com game ID")
    game_date: date = Field(..., description="Game date")
    game_number: int = Field(..., description="1-based game index within the player-season")
    game_team_id: int = Field(..., description="Team played for in this game")
    game_team: str = Field(..., description="City and name of the team played for")
    game_status: str = Field(..., description="'Played' or 'Did Not Play'")
    minutes: float = Field(..., description="Minutes played")
    points: int = Field(..., description="Points")
    rebounds: int = Field(..., description="Rebounds")
    assists: int = Field(..., description="Assists")
    steals: int = Field(..., description="Steals")
    blocks: int = Field(..., description="Blocks")
    turnovers: int = Field(..., description="Turnovers")
    fouls: int = Field(..., description="Personal fouls")
    fgm: int = Field(..., description="Field goals made")
    fga: int = Field(..., description="Field goals attempted")
    fg3m: int = Field(..., description="Three-pointers made")
    fg3a: int = Field(..., description="Three-pointers attempted")
    ftm: int = Field(..., description="Free throws made")
    fta: int = Field(..., description="Free throws attempted")
    plus_minus: int = Field(..., description="Plus-minus")


class ProfileRow(SeasonSummary):
    """Published profile row: the season summary repeated on each game of that season.

    Game fields are nullable because the join is anchored on the summary side.
    """

    game_id: str | None = Field(None, description="NBA.com game ID")
    game_date: date | None = Field(None, description="Game date")
    game_number: int | None = Field(None, description="1-based game index")
    game_team_id: int | None = Field(None, description="Team played for in this game")
    game_team: str | None = Field(None, description="City and name of the team played for")
    game_status: str | None = Field(None, description="'Played' or 'Did Not Play'")
    minutes: float | None = Field(None, description="Minutes played")
    points: int | None = Field(None, description="Points")
    rebounds: int | None = Field(None, description="Rebounds")
    assists: int | None = Field(None, description="Assists")
    steals: int | None = Field(None, description="Steals")
    blocks: int | None = Field(None, description="Blocks")
    turnovers: int | None = Field(None, description="Turnovers")
    fouls: int | None = Field(None, description="Personal fouls")
    fgm: int | None = Field(None, description="Field goals made")
    fga: int | None = Field(None, description="Field goals attempted")
    fg3m: int | None = Field(None, description="Three-pointers made")
    fg3a: int | None = Field(None, description="Three-pointers attempted")
    ftm: int | None = Field(None, description="Free throws made")
    fta: int | None = Field(None, description="Free throws attempted")
    plus_minus: int | None = Field(None, description="Plus-minus")
