"""Multi-step units of work composed over the repositories."""

from .roster import RosterService
from .scorecards import ScorecardService

__all__ = ["RosterService", "ScorecardService"]
