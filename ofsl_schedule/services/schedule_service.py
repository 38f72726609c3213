"""
Schedule operations that read tiers from the store, apply the format and
placement rules, and write the result back.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from ofsl_schedule.models import (
    Tier, TeamSlot, League, WeekStatus, FormatValidationResult,
    FormatPropagationSummary
)
from ofsl_schedule.core.exceptions import (
    TierNotFoundError, LeagueNotFoundError, FormatChangeError, PlacementError,
    ScheduleDatabaseError
)
from ofsl_schedule.core.logging_config import get_logger
from ofsl_schedule.services.tier_validator import (
    validate_format_change, validate_format_family, repack_teams_for_format,
    validate_team_assignment, validate_team_move
)
from ofsl_schedule.services.week_calculation import (
    calculate_current_week_to_display, get_week_status, week_navigation_info
)

logger = get_logger(__name__)


class ScheduleService:
    """
    Read-modify-write operations on weekly schedule tiers.

    ``store`` is anything with the SupabaseScheduleStore methods
    (get_league, get_weekly_schedule, get_tier, get_future_tiers, update_tier).
    """

    def __init__(self, store):
        self.store = store

    def _league(self, league_id: int) -> League:
        league = self.store.get_league(league_id)
        if league is None:
            raise LeagueNotFoundError(league_id)
        return league

    def _tier(self, tier_id: int) -> Tier:
        tier = self.store.get_tier(tier_id)
        if tier is None:
            raise TierNotFoundError(tier_id)
        return tier

    def get_tier(self, tier_id: int) -> Tier:
        return self._tier(tier_id)

    # Weeks

    def current_week(self, league_id: int, now: Optional[datetime] = None) -> Dict[str, Any]:
        league = self._league(league_id)
        week = calculate_current_week_to_display(
            league.start_date, league.end_date, league.day_of_week, now=now
        )
        navigation = week_navigation_info(
            league.start_date, league.end_date, league.playoff_weeks, week
        )
        status = get_week_status(week, league.start_date, league.day_of_week, now=now)

        return {
            "league": league,
            "current_week": week,
            "status": status,
            "navigation": navigation
        }

    def week_status(self, league_id: int, week_number: int, now: Optional[datetime] = None) -> WeekStatus:
        league = self._league(league_id)
        return get_week_status(week_number, league.start_date, league.day_of_week, now=now)

    def week_schedule(self, league_id: int, week_number: int) -> List[Tier]:
        return self.store.get_weekly_schedule(league_id, week_number)

    # Format changes

    def preview_format_change(self, tier_id: int, new_format: str) -> FormatValidationResult:
        tier = self._tier(tier_id)
        return self._check_format_change(tier, new_format)

    def _check_format_change(self, tier: Tier, new_format: str) -> FormatValidationResult:
        family = validate_format_family(tier.format, new_format)
        if not family.is_valid:
            return family
        return validate_format_change(tier, new_format)

    def _apply_format(self, tier: Tier, new_format: str) -> Tier:
        repacked = Tier(
            id=tier.id,
            tier_number=tier.tier_number,
            format=new_format,
            teams=repack_teams_for_format(tier, new_format)
        )
        updates = {"format": new_format}
        updates.update(repacked.team_columns())
        return self.store.update_tier(tier.id, updates)

    def change_tier_format(self, tier_id: int, new_format: str) -> Tier:
        """
        Switch a tier to a new format, compacting its teams.

        Raises:
            TierNotFoundError: no such tier
            FormatChangeError: the change would drop teams or cross format families
        """
        tier = self._tier(tier_id)
        result = self._check_format_change(tier, new_format)
        if not result.is_valid:
            logger.info(f"Refused format change on tier {tier_id}: {result.reason}")
            raise FormatChangeError(result)

        updated = self._apply_format(tier, new_format)
        logger.info(f"Tier {tier_id} changed from {tier.format} to {new_format}")
        return updated

    def apply_format_to_future_weeks(
        self,
        league_id: int,
        tier_number: int,
        week_number: int,
        new_format: str
    ) -> FormatPropagationSummary:
        """Repeat a format change on the same tier in every later week."""
        summary = FormatPropagationSummary()

        for tier in self.store.get_future_tiers(league_id, tier_number, week_number):
            if tier.format == new_format:
                continue

            result = self._check_format_change(tier, new_format)
            if not result.is_valid:
                summary.skipped.append({
                    "tier_id": tier.id,
                    "week_number": tier.week_number,
                    "reason": result.reason
                })
                continue

            self._apply_format(tier, new_format)
            summary.updated.append(tier.id)

        logger.info(
            f"Propagated {new_format} to tier {tier_number} of league {league_id}: "
            f"{len(summary.updated)} updated, {len(summary.skipped)} skipped"
        )
        return summary

    # Team placement

    def assign_team(self, tier_id: int, position: str, team_name: str, ranking: int = 0) -> Tier:
        tier = self._tier(tier_id)
        result = validate_team_assignment(tier, position, team_name)
        if not result.is_valid:
            raise PlacementError(result)

        key = position.lower()
        return self.store.update_tier(tier_id, {
            f"team_{key}_name": team_name,
            f"team_{key}_ranking": ranking
        })

    def remove_team(self, tier_id: int, position: str) -> Tier:
        tier = self._tier(tier_id)
        if tier.team_at(position) is None:
            raise PlacementError(FormatValidationResult(
                is_valid=False,
                reason=f"No team found at position {position}"
            ))

        key = position.lower()
        return self.store.update_tier(tier_id, {
            f"team_{key}_name": None,
            f"team_{key}_ranking": None
        })

    def move_team(
        self,
        from_tier_id: int,
        from_position: str,
        to_tier_id: int,
        to_position: str
    ) -> Dict[str, Tier]:
        source = self._tier(from_tier_id)
        target = source if to_tier_id == from_tier_id else self._tier(to_tier_id)

        result = validate_team_move(source, from_position, target, to_position)
        if not result.is_valid:
            raise PlacementError(result)

        team: TeamSlot = source.team_at(from_position)
        from_key = from_position.lower()
        to_key = to_position.lower()

        if from_tier_id == to_tier_id:
            updated = self.store.update_tier(from_tier_id, {
                f"team_{from_key}_name": None,
                f"team_{from_key}_ranking": None,
                f"team_{to_key}_name": team.name,
                f"team_{to_key}_ranking": team.ranking
            })
            return {"source": updated, "target": updated}

        # The team must stay listed in at least one tier if either write fails
        updated_target = self.store.update_tier(to_tier_id, {
            f"team_{to_key}_name": team.name,
            f"team_{to_key}_ranking": team.ranking
        })
        try:
            updated_source = self.store.update_tier(from_tier_id, {
                f"team_{from_key}_name": None,
                f"team_{from_key}_ranking": None
            })
        except ScheduleDatabaseError:
            logger.error(
                f"Could not clear {team.name} from tier {from_tier_id}, "
                f"undoing placement in tier {to_tier_id}"
            )
            self.store.update_tier(to_tier_id, {
                f"team_{to_key}_name": None,
                f"team_{to_key}_ranking": None
            })
            raise

        logger.info(f"Moved {team.name} from tier {from_tier_id} {from_position} to tier {to_tier_id} {to_position}")
        return {"source": updated_source, "target": updated_target}
