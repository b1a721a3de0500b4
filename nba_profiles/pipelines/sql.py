"""SQL fragments shared by the recompute transformations."""

from nba_profiles.schema.source import QUALIFYING_FILTER

# Box-score columns summed into season totals, in published column order.
COUNTING_STATS = [
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "turnovers",
    "fouls",
    "fgm",
    "fga",
    "fg3m",
    "fg3a",
    "ftm",
    "fta",
    "plus_minus",
]

# Columns averaged per game. Makes and attempts are reported as ratios instead.
AVERAGED_STATS = [
    "minutes",
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "turnovers",
    "fouls",
    "plus_minus",
]

# A roster appearance counts as a game played at or above this many minutes.
PLAYED_MINUTES_THRESHOLD = 0.1


def full_name(first: str = "first_name", last: str = "last_name") -> str:
    """Expression joining first and last name with a single space."""
    return f"concat_ws(' ', {first}, {last})"


def team_label(city: str = "team_city", name: str = "team_name") -> str:
    """Expression building 'City Name' from a row's team fields."""
    return f"concat_ws(' ', {city}, {name})"


def qualifying_rows(source: str) -> str:
    """Subquery selecting the source rows that represent a roster appearance."""
    return f"SELECT * FROM {source} WHERE {QUALIFYING_FILTER}"  # noqa: S608
