"""
Data models for the league schedule service.
"""

from .models import (
    WeekStatus,
    GameFormat,
    TeamSlot,
    League,
    Tier,
    FormatValidationResult,
    SchedulingIssue,
    WeekNavigationInfo,
    CapacityUtilization,
    FormatPropagationSummary
)

__all__ = [
    "WeekStatus",
    "GameFormat",
    "TeamSlot",
    "League",
    "Tier",
    "FormatValidationResult",
    "SchedulingIssue",
    "WeekNavigationInfo",
    "CapacityUtilization",
    "FormatPropagationSummary"
]
