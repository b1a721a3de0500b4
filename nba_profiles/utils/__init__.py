"""Configuration and logging."""

from nba_profiles.utils.config import get_settings
from nba_profiles.utils.logging import run_log_context, setup_logging

__all__ = ["get_settings", "run_log_context", "setup_logging"]
