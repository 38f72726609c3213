"""
Exceptions raised by the schedule service layer.
The pure format and week helpers never raise; they return results or defaults.
"""

from typing import Optional

from ofsl_schedule.models import FormatValidationResult


class ScheduleError(Exception):
    """Base class for schedule service errors."""


class ScheduleDatabaseError(ScheduleError):
    def __init__(self, message: str, code: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TierNotFoundError(ScheduleError):
    def __init__(self, tier_id: int):
        super().__init__(f"Tier {tier_id} not found")
        self.tier_id = tier_id


class LeagueNotFoundError(ScheduleError):
    def __init__(self, league_id: int):
        super().__init__(f"League {league_id} not found")
        self.league_id = league_id


class FormatChangeError(ScheduleError):
    """A format change was refused; ``result`` carries the reason."""

    def __init__(self, result: FormatValidationResult):
        super().__init__(result.reason or "Format change not allowed")
        self.result = result


class PlacementError(ScheduleError):
    """A team assignment or move was refused."""

    def __init__(self, result: FormatValidationResult):
        super().__init__(result.reason or "Team placement not allowed")
        self.result = result
