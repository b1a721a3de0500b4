"""Warehouse connection and source relation checks."""

from nba_profiles.schema.connection import get_db_connection
from nba_profiles.schema.source import validate_source_schema

__all__ = ["get_db_connection", "validate_source_schema"]
