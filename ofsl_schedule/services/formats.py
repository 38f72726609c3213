"""
Game format catalog for weekly schedule tiers.

Maps a format id to its team capacity, its active position labels and the
grid shape used to lay the tier out. Every lookup falls back to a safe default
for unknown or legacy format strings instead of raising, so a stale value in
the database never breaks the schedule view.
"""

from typing import Dict, Iterable, List, Optional

from ofsl_schedule.models import GameFormat, CapacityUtilization
from ofsl_schedule.core.config import (
    ALL_POSITIONS, DEFAULT_TEAM_COUNT, DEFAULT_GRID_COLUMNS
)


# Catalog order is the display order used by every format picker
GAME_FORMATS = (
    GameFormat("3-teams-6-sets", "3 teams (6 sets)", 3,
               "Standard 3-team format with 6 sets played"),
    GameFormat("2-teams-4-sets", "2 teams (4 sets)", 2,
               "Standard 2-team format with 4 sets played"),
    GameFormat("2-teams-best-of-5", "2 teams (Best of 5)", 2,
               "Best of 5 sets format for 2 teams"),
    GameFormat("2-teams-best-of-3", "2 teams (Best of 3)", 2,
               "Best of 3 sets format for 2 teams"),
    GameFormat("4-teams-head-to-head", "4 teams (Head-to-head)", 4,
               "Head-to-head format for 4 teams"),
    GameFormat("6-teams-head-to-head", "6 teams (head-to-head)", 6,
               "Head-to-head format for 6 teams"),
    GameFormat("2-teams-elite", "2 teams (Elite)", 2,
               "Elite level 2-team format"),
)

_FORMATS_BY_ID: Dict[str, GameFormat] = {f.id: f for f in GAME_FORMATS}

DEFAULT_FORMAT = "3-teams-6-sets"

GRID_COLUMNS = {
    2: "2 columns",
    3: "3 columns",
    4: "4 columns",
    6: "6 columns",
}

PREFERRED_FORMATS = {
    2: "2-teams-4-sets",
    3: "3-teams-6-sets",
    4: "4-teams-head-to-head",
    6: "6-teams-head-to-head",
}

# Tiers may only switch formats within their own family
SIMPLE_FORMATS = (
    "3-teams-6-sets",
    "2-teams-4-sets",
    "2-teams-best-of-5",
    "4-teams-head-to-head",
    "6-teams-head-to-head",
)
ELITE_FORMATS = (
    "2-teams-elite",
)


def get_game_format(format_id: str) -> Optional[GameFormat]:
    return _FORMATS_BY_ID.get(format_id)


def is_valid_format(format_id: str) -> bool:
    return format_id in _FORMATS_BY_ID


def team_count_for_format(format_id: str) -> int:
    """Team capacity of a format, 3 for anything not in the catalog."""
    game_format = get_game_format(format_id)
    return game_format.team_count if game_format else DEFAULT_TEAM_COUNT


def positions_for_format(format_id: str) -> List[str]:
    """
    Active position labels for a format, in repacking order.

    Always a prefix of A..F whose length equals team_count_for_format().
    """
    return list(ALL_POSITIONS[:team_count_for_format(format_id)])


def grid_columns_for_team_count(team_count: int) -> str:
    return GRID_COLUMNS.get(team_count, DEFAULT_GRID_COLUMNS)


def format_label(format_id: str) -> str:
    game_format = get_game_format(format_id)
    return game_format.label if game_format else format_id


def format_description(format_id: str) -> str:
    game_format = get_game_format(format_id)
    return game_format.description if game_format else ""


def format_options() -> List[Dict[str, str]]:
    return [{"value": f.id, "label": f.label} for f in GAME_FORMATS]


# Positions

def is_valid_position_for_format(position: str, format_id: str) -> bool:
    return position in positions_for_format(format_id)


def next_available_position(format_id: str, occupied_positions: Iterable[str]) -> Optional[str]:
    occupied = set(occupied_positions)
    for position in positions_for_format(format_id):
        if position not in occupied:
            return position
    return None


def position_index(position: str) -> int:
    """0-based index of a label in A..F, -1 when it is not a label."""
    try:
        return ALL_POSITIONS.index(position)
    except ValueError:
        return -1


def sort_positions(positions: Iterable[str]) -> List[str]:
    return sorted(positions, key=position_index)


# Compatibility and capacity

def are_formats_compatible(format_a: str, format_b: str) -> bool:
    return team_count_for_format(format_a) == team_count_for_format(format_b)


def compatible_formats(format_id: str) -> List[GameFormat]:
    team_count = team_count_for_format(format_id)
    return [f for f in GAME_FORMATS if f.team_count == team_count]


def suggest_format_for_team_count(team_count: int) -> str:
    return PREFERRED_FORMATS.get(team_count, DEFAULT_FORMAT)


def minimum_format_for_teams(team_count: int) -> str:
    if team_count <= 2:
        return "2-teams-4-sets"
    if team_count <= 3:
        return "3-teams-6-sets"
    if team_count <= 4:
        return "4-teams-head-to-head"
    return "6-teams-head-to-head"


def can_format_accommodate_teams(format_id: str, team_count: int) -> bool:
    return team_count_for_format(format_id) >= team_count


def format_upgrade_path(current_format: str, required_team_count: int) -> List[str]:
    """Formats able to hold ``required_team_count`` teams, smallest first."""
    if team_count_for_format(current_format) >= required_team_count:
        return []

    candidates = [f for f in GAME_FORMATS if f.team_count >= required_team_count]
    candidates.sort(key=lambda f: f.team_count)
    return [f.id for f in candidates]


def capacity_utilization(format_id: str, assigned_team_count: int) -> CapacityUtilization:
    capacity = team_count_for_format(format_id)
    assigned = min(assigned_team_count, capacity)
    percentage = (assigned / capacity) * 100 if capacity > 0 else 0.0

    return CapacityUtilization(
        capacity=capacity,
        assigned=assigned,
        available=capacity - assigned,
        utilization_percentage=percentage,
        is_full=assigned >= capacity,
        is_empty=assigned == 0
    )


def format_family(format_id: str) -> Optional[str]:
    normalized = str(format_id or "").lower()
    if normalized in SIMPLE_FORMATS:
        return "simple"
    if normalized in ELITE_FORMATS:
        return "elite"
    return None
