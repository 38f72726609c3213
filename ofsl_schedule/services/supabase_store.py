"""
Supabase access for leagues and weekly schedule tiers.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import create_client, Client

from ofsl_schedule.models import League, Tier
from ofsl_schedule.core.config import (
    SUPABASE_URL, SUPABASE_KEY, TABLE_LEAGUES, TABLE_WEEKLY_SCHEDULES
)
from ofsl_schedule.core.exceptions import ScheduleDatabaseError
from ofsl_schedule.core.logging_config import get_logger
from ofsl_schedule.services.week_calculation import parse_date

logger = get_logger(__name__)


class SupabaseScheduleStore:
    def __init__(self, client: Optional[Client] = None):
        if client is None:
            if not SUPABASE_URL or not SUPABASE_KEY:
                raise ScheduleDatabaseError(
                    "Supabase credentials not found. Please set SUPABASE_URL and "
                    "SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_ANON_KEY)"
                )
            client = create_client(SUPABASE_URL, SUPABASE_KEY)

        self.client: Client = client
        self._league_cache: Dict[int, League] = {}

    def _execute(self, query, action: str):
        try:
            return query.execute()
        except Exception as e:
            logger.error(f"Error while {action}: {e}")
            raise ScheduleDatabaseError(
                f"Database error while {action}: {e}",
                code=getattr(e, "code", None),
                details=getattr(e, "details", None)
            ) from e

    def _parse_league(self, row: Dict[str, Any]) -> League:
        day_of_week = row.get("day_of_week")
        return League(
            id=row["id"],
            name=row.get("name") or "",
            start_date=parse_date(row.get("start_date")),
            end_date=parse_date(row.get("end_date")),
            day_of_week=int(day_of_week) if day_of_week is not None else None,
            playoff_weeks=int(row.get("playoff_weeks") or 0)
        )

    def get_league(self, league_id: int) -> Optional[League]:
        if league_id in self._league_cache:
            return self._league_cache[league_id]

        response = self._execute(
            self.client.table(TABLE_LEAGUES)
            .select("id, name, start_date, end_date, day_of_week, playoff_weeks")
            .eq("id", league_id)
            .limit(1),
            f"loading league {league_id}"
        )
        if not response.data:
            return None

        league = self._parse_league(response.data[0])
        self._league_cache[league_id] = league
        return league

    def get_weekly_schedule(self, league_id: int, week_number: int) -> List[Tier]:
        response = self._execute(
            self.client.table(TABLE_WEEKLY_SCHEDULES)
            .select("*")
            .eq("league_id", league_id)
            .eq("week_number", week_number)
            .order("tier_number"),
            f"loading week {week_number} of league {league_id}"
        )
        tiers = [Tier.from_record(row) for row in response.data or []]
        logger.info(f"Loaded {len(tiers)} tiers for league {league_id} week {week_number}")
        return tiers

    def get_tier(self, tier_id: int) -> Optional[Tier]:
        response = self._execute(
            self.client.table(TABLE_WEEKLY_SCHEDULES)
            .select("*")
            .eq("id", tier_id)
            .limit(1),
            f"loading tier {tier_id}"
        )
        if not response.data:
            return None
        return Tier.from_record(response.data[0])

    def get_future_tiers(self, league_id: int, tier_number: int, after_week: int) -> List[Tier]:
        """Same tier slot in every week after ``after_week``, in week order."""
        response = self._execute(
            self.client.table(TABLE_WEEKLY_SCHEDULES)
            .select("*")
            .eq("league_id", league_id)
            .eq("tier_number", tier_number)
            .gt("week_number", after_week)
            .order("week_number"),
            f"loading tier {tier_number} after week {after_week} of league {league_id}"
        )
        return [Tier.from_record(row) for row in response.data or []]

    def update_tier(self, tier_id: int, updates: Dict[str, Any]) -> Tier:
        payload = dict(updates)
        payload["updated_at"] = datetime.now(timezone.utc).isoformat()

        response = self._execute(
            self.client.table(TABLE_WEEKLY_SCHEDULES)
            .update(payload)
            .eq("id", tier_id),
            f"updating tier {tier_id}"
        )
        if not response.data:
            raise ScheduleDatabaseError(f"Tier {tier_id} was not updated")

        logger.info(f"Updated tier {tier_id}: {', '.join(sorted(updates))}")
        return Tier.from_record(response.data[0])

    def clear_caches(self):
        self._league_cache = {}
