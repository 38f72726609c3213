"""
Tests for the background format propagation task, run in-process.
"""

from ofsl_schedule.tasks import schedule_tasks
from ofsl_schedule.services.schedule_service import ScheduleService


def test_propagate_format_change_task(store, monkeypatch):
    states = []
    monkeypatch.setattr(schedule_tasks, "build_service", lambda: ScheduleService(store))
    monkeypatch.setattr(
        schedule_tasks.propagate_format_change_task, "update_state",
        lambda state=None, meta=None: states.append(state)
    )

    result = schedule_tasks.propagate_format_change_task(10, 2, 1, "2-teams-4-sets")

    assert states == ["PROGRESS"]
    assert result["success"] is True
    assert result["updated"] == [202]
    assert result["skipped"][0]["tier_id"] == 302


def test_propagate_format_change_task_reports_failure(monkeypatch):
    def broken():
        raise RuntimeError("Supabase credentials not configured")

    monkeypatch.setattr(schedule_tasks, "build_service", broken)
    monkeypatch.setattr(
        schedule_tasks.propagate_format_change_task, "update_state",
        lambda state=None, meta=None: None
    )

    result = schedule_tasks.propagate_format_change_task(10, 2, 1, "2-teams-4-sets")

    assert result["success"] is False
    assert "credentials" in result["error"]
