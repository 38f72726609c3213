"""
Data models for the OFSL League Schedule Service.
Defines all data structures used throughout the application.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Dict, Any, Union
from enum import Enum

from ofsl_schedule.core.config import ALL_POSITIONS


class WeekStatus(Enum):
    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"


@dataclass(frozen=True)
class GameFormat:
    id: str
    label: str
    team_count: int
    description: str = ""

    @property
    def positions(self) -> List[str]:
        return list(ALL_POSITIONS[:self.team_count])


@dataclass
class TeamSlot:
    name: str = ""
    ranking: Union[int, float, str] = 0

    @property
    def is_empty(self) -> bool:
        return not self.name


@dataclass
class League:
    id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    day_of_week: Optional[int] = None  # 0 = Sunday ... 6 = Saturday
    playoff_weeks: int = 0
    name: str = ""


def _empty_teams() -> Dict[str, Optional[TeamSlot]]:
    return {position: None for position in ALL_POSITIONS}


@dataclass
class Tier:
    id: int
    tier_number: int
    format: str
    teams: Dict[str, Optional[TeamSlot]] = field(default_factory=_empty_teams)
    league_id: Optional[int] = None
    week_number: Optional[int] = None
    location: str = ""
    time_slot: str = ""
    court: str = ""
    is_completed: bool = False
    no_games: bool = False
    is_playoff: bool = False

    def team_at(self, position: str) -> Optional[TeamSlot]:
        slot = self.teams.get(position)
        if slot is None or slot.is_empty:
            return None
        return slot

    def occupied(self) -> List[tuple]:
        """(position, TeamSlot) pairs for every occupied label, in A..F order."""
        return [
            (position, self.teams[position])
            for position in ALL_POSITIONS
            if self.team_at(position) is not None
        ]

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Tier":
        """Build a tier from a flattened weekly_schedules row."""
        from ofsl_schedule.services.tier_validator import get_team_for_position

        teams = {position: get_team_for_position(record, position) for position in ALL_POSITIONS}
        return cls(
            id=record.get("id") or 0,
            tier_number=record.get("tier_number") or 0,
            format=record.get("format") or "",
            teams=teams,
            league_id=record.get("league_id"),
            week_number=record.get("week_number"),
            location=record.get("location") or "",
            time_slot=record.get("time_slot") or "",
            court=record.get("court") or "",
            is_completed=bool(record.get("is_completed")),
            no_games=bool(record.get("no_games")),
            is_playoff=bool(record.get("is_playoff")),
        )

    def team_columns(self) -> Dict[str, Any]:
        """Flattened team_<x>_name / team_<x>_ranking columns; empty slots become None."""
        columns = {}
        for position in ALL_POSITIONS:
            slot = self.team_at(position)
            key = position.lower()
            columns[f"team_{key}_name"] = slot.name if slot else None
            columns[f"team_{key}_ranking"] = slot.ranking if slot else None
        return columns

    def to_record(self) -> Dict[str, Any]:
        record = {
            "id": self.id,
            "league_id": self.league_id,
            "week_number": self.week_number,
            "tier_number": self.tier_number,
            "location": self.location,
            "time_slot": self.time_slot,
            "court": self.court,
            "format": self.format,
            "is_completed": self.is_completed,
            "no_games": self.no_games,
            "is_playoff": self.is_playoff,
        }
        record.update(self.team_columns())
        return record


@dataclass
class FormatValidationResult:
    is_valid: bool
    reason: Optional[str] = None
    teams_affected: List[str] = field(default_factory=list)
    positions_affected: List[str] = field(default_factory=list)


@dataclass
class SchedulingIssue:
    tier: Tier
    issues: List[str] = field(default_factory=list)


@dataclass
class WeekNavigationInfo:
    current_week: int
    total_weeks: int
    min_week: int = 1
    playoff_start_week: Optional[int] = None

    @property
    def max_week(self) -> int:
        return self.total_weeks

    def can_navigate_to(self, week: int) -> bool:
        return self.min_week <= week <= self.total_weeks

    def is_playoff_week(self, week: int) -> bool:
        return self.playoff_start_week is not None and week >= self.playoff_start_week


@dataclass
class CapacityUtilization:
    capacity: int
    assigned: int
    available: int
    utilization_percentage: float
    is_full: bool
    is_empty: bool


@dataclass
class FormatPropagationSummary:
    updated: List[int] = field(default_factory=list)
    skipped: List[Dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {"updated": list(self.updated), "skipped": list(self.skipped)}
