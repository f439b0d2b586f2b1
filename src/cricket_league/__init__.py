"""Cricket League - relational core for leagues, teams, players, matches and scorecards."""

from .config import Settings, get_settings
from .database import Store

__all__ = ["Settings", "get_settings", "Store"]
