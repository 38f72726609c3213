"""
Tier format validation and team placement rules.

Validation answers "can we do this"; repacking and the store updates that
follow are separate steps. Refusals are returned as FormatValidationResult
values, never raised.
"""

from typing import Any, Dict, List, Mapping, Optional

from ofsl_schedule.models import (
    Tier, TeamSlot, FormatValidationResult, SchedulingIssue
)
from ofsl_schedule.core.config import ALL_POSITIONS
from ofsl_schedule.core.logging_config import get_logger
from ofsl_schedule.services.formats import (
    positions_for_format, format_family, SIMPLE_FORMATS, ELITE_FORMATS
)

logger = get_logger(__name__)


def get_team_for_position(record: Mapping[str, Any], position: str) -> Optional[TeamSlot]:
    """
    Read a team from a flattened weekly_schedules row.

    Args:
        record: Row with team_<x>_name / team_<x>_ranking keys
        position: Position label (A..F)

    Returns:
        TeamSlot, or None when the position has no team name
    """
    key = position.lower()
    name = record.get(f"team_{key}_name")
    if not name:
        return None

    # Rankings are stored as entered; only a missing one defaults to 0
    ranking = record.get(f"team_{key}_ranking")
    return TeamSlot(name=str(name), ranking=0 if ranking is None else ranking)


def validate_format_change(tier: Tier, new_format: str) -> FormatValidationResult:
    """
    Check that every team currently in the tier fits the new format.

    All six labels are scanned, not only the ones active for the tier's current
    format, so a team left in an inactive position still counts.
    """
    new_positions = positions_for_format(new_format)
    existing = tier.occupied()

    if len(existing) > len(new_positions):
        team_names = [slot.name for _, slot in existing]
        overflow = existing[len(new_positions):]
        return FormatValidationResult(
            is_valid=False,
            reason=(
                f"Cannot change to this format. Current tier has {len(existing)} teams "
                f"({', '.join(team_names)}), but {new_format} only supports "
                f"{len(new_positions)} teams. Remove teams first."
            ),
            teams_affected=[slot.name for _, slot in overflow],
            positions_affected=[position for position, _ in overflow]
        )

    return FormatValidationResult(is_valid=True)


def validate_format_family(current_format: str, new_format: str) -> FormatValidationResult:
    """Elite and non-elite tiers may only switch formats within their own group."""
    current_family = format_family(current_format)
    new_family = format_family(new_format)

    if current_family == "simple" and new_family != "simple":
        return FormatValidationResult(
            is_valid=False,
            reason=(
                "Non-elite tiers may change only among: "
                f"{', '.join(SIMPLE_FORMATS)}. Changes to elite formats are not allowed."
            )
        )

    if current_family == "elite" and new_family != "elite":
        return FormatValidationResult(
            is_valid=False,
            reason=(
                f"Elite tiers may only change among: {', '.join(ELITE_FORMATS)}."
            )
        )

    return FormatValidationResult(is_valid=True)


def repack_teams_for_format(tier: Tier, new_format: str) -> Dict[str, TeamSlot]:
    """
    Compact the tier's teams to the front of the new format's positions.

    Teams keep their relative A..F order and their name/ranking. Every label
    in A..F appears in the result; unused ones hold an empty TeamSlot. This
    does not validate: call validate_format_change() first, otherwise teams
    beyond the new capacity are dropped.
    """
    new_positions = positions_for_format(new_format)
    existing = tier.occupied()

    repacked = {position: TeamSlot(name="", ranking=0) for position in ALL_POSITIONS}

    for index, (_, slot) in enumerate(existing):
        if index >= len(new_positions):
            break
        repacked[new_positions[index]] = TeamSlot(name=slot.name, ranking=slot.ranking)

    if len(existing) > len(new_positions):
        dropped = [slot.name for _, slot in existing[len(new_positions):]]
        logger.warning(
            f"Repacking tier {tier.tier_number} to {new_format} dropped teams: {', '.join(dropped)}"
        )

    return repacked


# Position state

def filled_positions(tier: Tier) -> List[tuple]:
    return [
        (position, tier.team_at(position))
        for position in positions_for_format(tier.format)
        if tier.team_at(position) is not None
    ]


def empty_positions(tier: Tier) -> List[str]:
    return [
        position for position in positions_for_format(tier.format)
        if tier.team_at(position) is None
    ]


def is_tier_fully_filled(tier: Tier) -> bool:
    return not empty_positions(tier)


# Team placement

def validate_team_assignment(tier: Tier, position: str, team_name: str) -> FormatValidationResult:
    if position not in positions_for_format(tier.format):
        return FormatValidationResult(
            is_valid=False,
            reason=f"Position {position} is not valid for format {tier.format}"
        )

    existing = tier.team_at(position)
    if existing is not None:
        return FormatValidationResult(
            is_valid=False,
            reason=f"Position {position} is already occupied by {existing.name}"
        )

    for other_position, slot in tier.occupied():
        if slot.name == team_name:
            return FormatValidationResult(
                is_valid=False,
                reason=f"Team {team_name} is already assigned to position {other_position} in this tier"
            )

    return FormatValidationResult(is_valid=True)


def validate_team_move(
    source_tier: Tier,
    source_position: str,
    target_tier: Tier,
    target_position: str
) -> FormatValidationResult:
    team = source_tier.team_at(source_position)
    if team is None:
        return FormatValidationResult(
            is_valid=False,
            reason=f"No team found at source position {source_position}"
        )

    if target_position not in positions_for_format(target_tier.format):
        return FormatValidationResult(
            is_valid=False,
            reason=f"Position {target_position} is not valid for format {target_tier.format}"
        )

    target_team = target_tier.team_at(target_position)
    if target_team is not None:
        return FormatValidationResult(
            is_valid=False,
            reason=f"Target position {target_position} is already occupied by {target_team.name}"
        )

    if target_tier.id != source_tier.id:
        for other_position, slot in target_tier.occupied():
            if slot.name == team.name:
                return FormatValidationResult(
                    is_valid=False,
                    reason=f"Team {team.name} is already assigned to position {other_position} in the target tier"
                )

    return FormatValidationResult(is_valid=True)


def find_scheduling_issues(records: List[Mapping[str, Any]]) -> List[SchedulingIssue]:
    """
    Inspect raw weekly_schedules rows for inconsistent placements.

    Works on the flattened rows rather than Tier objects because a name
    without a ranking (or the reverse) is lost once a row is normalised.
    """
    found = []

    for record in records:
        tier = Tier.from_record(record)
        issues = []

        for position in ALL_POSITIONS:
            key = position.lower()
            has_name = bool(record.get(f"team_{key}_name"))
            has_ranking = bool(record.get(f"team_{key}_ranking"))
            if has_name != has_ranking:
                issues.append(f"Position {position} has inconsistent team/ranking data")

        active = positions_for_format(tier.format)
        for position, _ in tier.occupied():
            if position not in active:
                issues.append(
                    f"Team assigned to position {position} but format {tier.format} "
                    f"doesn't support this position"
                )

        names = [slot.name for _, slot in tier.occupied()]
        if len(names) != len(set(names)):
            issues.append("Duplicate team assignments found in tier")

        if issues:
            found.append(SchedulingIssue(tier=tier, issues=issues))

    return found
