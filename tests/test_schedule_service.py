"""
Tests for the read-modify-write schedule operations against an in-memory store.
"""

from datetime import datetime

import pytest

from ofsl_schedule.models import WeekStatus
from ofsl_schedule.core.exceptions import (
    TierNotFoundError, LeagueNotFoundError, FormatChangeError, PlacementError,
    ScheduleDatabaseError
)
from ofsl_schedule.services.schedule_service import ScheduleService


def test_current_week(store):
    service = ScheduleService(store)

    info = service.current_week(10, now=datetime(2025, 1, 14, 9, 0))

    assert info["current_week"] == 3
    assert info["status"] == WeekStatus.FUTURE
    assert info["navigation"].total_weeks == 9
    assert info["navigation"].playoff_start_week == 8


def test_unknown_league(store):
    with pytest.raises(LeagueNotFoundError):
        ScheduleService(store).current_week(99)


def test_week_status(store):
    service = ScheduleService(store)
    assert service.week_status(10, 1, now=datetime(2025, 1, 6, 20, 0)) == WeekStatus.CURRENT
    assert service.week_status(10, 1, now=datetime(2025, 1, 7, 20, 0)) == WeekStatus.PAST


def test_week_schedule_is_ordered(store):
    tiers = ScheduleService(store).week_schedule(10, 1)
    assert [t.tier_number for t in tiers] == [1, 2, 3]


def test_change_format_repacks_and_persists(store):
    """Tier 2 has teams at A and C; a two-team format moves C up to B."""
    service = ScheduleService(store)

    updated = service.change_tier_format(102, "2-teams-4-sets")

    assert updated.format == "2-teams-4-sets"
    assert updated.team_at("A").name == "Dig Deep"
    assert updated.team_at("B").name == "Ace Holes"
    assert updated.team_at("B").ranking == 6
    assert updated.team_at("C") is None

    tier_id, payload = store.updates[-1]
    assert tier_id == 102
    assert payload["format"] == "2-teams-4-sets"
    assert payload["team_c_name"] is None
    assert payload["team_c_ranking"] is None
    assert len(payload) == 13


def test_change_format_refused_when_teams_would_be_dropped(store):
    service = ScheduleService(store)

    with pytest.raises(FormatChangeError) as excinfo:
        service.change_tier_format(101, "2-teams-best-of-5")

    assert "Block Party" in str(excinfo.value)
    assert excinfo.value.result.teams_affected == ["Block Party"]
    assert store.updates == []


def test_change_format_refused_across_families(store):
    with pytest.raises(FormatChangeError):
        ScheduleService(store).change_tier_format(103, "2-teams-4-sets")


def test_change_format_unknown_tier(store):
    with pytest.raises(TierNotFoundError):
        ScheduleService(store).change_tier_format(999, "2-teams-4-sets")


def test_preview_does_not_write(store):
    result = ScheduleService(store).preview_format_change(101, "2-teams-4-sets")

    assert result.is_valid is False
    assert store.updates == []


def test_apply_format_to_future_weeks(store):
    """Week 2 fits two teams, week 3 has three and is skipped."""
    summary = ScheduleService(store).apply_format_to_future_weeks(10, 2, 1, "2-teams-4-sets")

    assert summary.updated == [202]
    assert len(summary.skipped) == 1
    assert summary.skipped[0]["tier_id"] == 302
    assert summary.skipped[0]["week_number"] == 3
    assert "Set to Kill" in summary.skipped[0]["reason"]
    assert store.get_tier(202).format == "2-teams-4-sets"
    assert store.get_tier(302).format == "3-teams-6-sets"


def test_assign_and_remove_team(store):
    service = ScheduleService(store)

    tier = service.assign_team(102, "B", "Set to Kill", 5)
    assert tier.team_at("B").name == "Set to Kill"

    with pytest.raises(PlacementError):
        service.assign_team(102, "B", "Another Team", 7)

    tier = service.remove_team(102, "B")
    assert tier.team_at("B") is None

    with pytest.raises(PlacementError):
        service.remove_team(102, "B")


def test_move_team_between_tiers(store):
    service = ScheduleService(store)

    result = service.move_team(101, "C", 102, "B")

    assert result["source"].team_at("C") is None
    assert result["target"].team_at("B").name == "Block Party"
    assert result["target"].team_at("B").ranking == 3


def test_move_team_within_tier(store):
    result = ScheduleService(store).move_team(102, "C", 102, "B")

    tier = result["target"]
    assert tier.team_at("B").name == "Ace Holes"
    assert tier.team_at("C") is None


def test_move_team_to_occupied_position(store):
    with pytest.raises(PlacementError) as excinfo:
        ScheduleService(store).move_team(101, "A", 102, "A")

    assert "Dig Deep" in str(excinfo.value)


def test_move_team_keeps_team_when_source_write_fails(store, monkeypatch):
    """The team stays in its original tier when clearing the source fails."""
    original_update = store.update_tier
    calls = []

    def flaky_update(tier_id, updates):
        calls.append(tier_id)
        if len(calls) == 2:
            raise ScheduleDatabaseError("connection reset")
        return original_update(tier_id, updates)

    monkeypatch.setattr(store, "update_tier", flaky_update)

    with pytest.raises(ScheduleDatabaseError):
        ScheduleService(store).move_team(101, "C", 102, "B")

    assert store.get_tier(101).team_at("C").name == "Block Party"
    assert store.get_tier(102).team_at("B") is None


def test_move_team_keeps_team_when_target_write_fails(store, monkeypatch):
    def failing_update(tier_id, updates):
        raise ScheduleDatabaseError("connection reset")

    monkeypatch.setattr(store, "update_tier", failing_update)

    with pytest.raises(ScheduleDatabaseError):
        ScheduleService(store).move_team(101, "C", 102, "B")

    assert store.get_tier(101).team_at("C").name == "Block Party"


def test_move_team_refuses_duplicate_name_in_target(store):
    """Week 2's tier 2 already lists Dig Deep."""
    with pytest.raises(PlacementError) as excinfo:
        ScheduleService(store).move_team(102, "A", 202, "C")

    assert "already assigned to position A" in str(excinfo.value)
    assert store.updates == []
