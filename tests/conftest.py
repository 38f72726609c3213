"""
Shared fixtures: tier builders and an in-memory stand-in for the Supabase store.
"""

from datetime import date
from typing import Any, Dict, List, Optional

import pytest

from ofsl_schedule.models import League, Tier, TeamSlot
from ofsl_schedule.core.config import ALL_POSITIONS


def make_tier(format_id: str = "3-teams-6-sets", teams: Optional[Dict[str, tuple]] = None, **kwargs) -> Tier:
    """Build a tier from {"A": ("Name", ranking), ...}."""
    slots = {position: None for position in ALL_POSITIONS}
    for position, (name, ranking) in (teams or {}).items():
        slots[position] = TeamSlot(name=name, ranking=ranking)

    kwargs.setdefault("id", 1)
    kwargs.setdefault("tier_number", 1)
    return Tier(format=format_id, teams=slots, **kwargs)


class InMemoryScheduleStore:
    """Keeps weekly_schedules rows as flat dicts, like the database does."""

    def __init__(self, leagues: List[League] = None, tiers: List[Tier] = None):
        self.leagues = {league.id: league for league in leagues or []}
        self.rows: Dict[int, Dict[str, Any]] = {tier.id: tier.to_record() for tier in tiers or []}
        self.updates: List[tuple] = []

    def get_league(self, league_id):
        return self.leagues.get(league_id)

    def get_weekly_schedule(self, league_id, week_number):
        rows = [
            row for row in self.rows.values()
            if row["league_id"] == league_id and row["week_number"] == week_number
        ]
        return [Tier.from_record(row) for row in sorted(rows, key=lambda r: r["tier_number"])]

    def get_tier(self, tier_id):
        row = self.rows.get(tier_id)
        return Tier.from_record(row) if row else None

    def get_future_tiers(self, league_id, tier_number, after_week):
        rows = [
            row for row in self.rows.values()
            if row["league_id"] == league_id
            and row["tier_number"] == tier_number
            and row["week_number"] > after_week
        ]
        return [Tier.from_record(row) for row in sorted(rows, key=lambda r: r["week_number"])]

    def update_tier(self, tier_id, updates):
        self.updates.append((tier_id, dict(updates)))
        self.rows[tier_id].update(updates)
        return Tier.from_record(self.rows[tier_id])


@pytest.fixture
def league():
    return League(
        id=10,
        name="Tuesday Indoor Volleyball",
        start_date=date(2025, 1, 6),
        end_date=date(2025, 3, 3),
        day_of_week=1,
        playoff_weeks=2
    )


@pytest.fixture
def store(league):
    tiers = [
        make_tier(
            "3-teams-6-sets",
            {"A": ("Spike Force", 1), "B": ("Net Ninjas", 2), "C": ("Block Party", 3)},
            id=101, tier_number=1, league_id=league.id, week_number=1,
            location="Carleton Gym", time_slot="7:00 PM", court="Court 1"
        ),
        make_tier(
            "3-teams-6-sets",
            {"A": ("Dig Deep", 4), "C": ("Ace Holes", 6)},
            id=102, tier_number=2, league_id=league.id, week_number=1,
            location="Carleton Gym", time_slot="8:30 PM", court="Court 2"
        ),
        make_tier(
            "3-teams-6-sets",
            {"A": ("Dig Deep", 4), "B": ("Ace Holes", 6)},
            id=202, tier_number=2, league_id=league.id, week_number=2
        ),
        make_tier(
            "3-teams-6-sets",
            {"A": ("Dig Deep", 4), "B": ("Ace Holes", 6), "C": ("Set to Kill", 5)},
            id=302, tier_number=2, league_id=league.id, week_number=3
        ),
        make_tier(
            "2-teams-elite",
            {"A": ("Top Gun", 1), "B": ("Maverick", 2)},
            id=103, tier_number=3, league_id=league.id, week_number=1
        ),
    ]
    return InMemoryScheduleStore(leagues=[league], tiers=tiers)


@pytest.fixture
def tier_factory():
    return make_tier
