"""
Tests for displayed-week selection and week status.
2025-01-06 is a Monday; leagues store the play day with 0 = Sunday.
"""

from datetime import date, datetime, timezone

from ofsl_schedule.models import WeekStatus
from ofsl_schedule.services.week_calculation import (
    calculate_current_week_to_display, get_week_status, parse_date,
    sunday_based_weekday, total_weeks, week_number_from_date,
    date_for_week_number, format_week_date, week_navigation_info
)

START = "2025-01-06"
MONDAY = 1


def test_first_game_day_before_cutoff():
    assert calculate_current_week_to_display(START, None, MONDAY, now=datetime(2025, 1, 6, 10, 0)) == 1


def test_second_game_day():
    assert calculate_current_week_to_display(START, None, MONDAY, now=datetime(2025, 1, 13, 10, 0)) == 2


def test_game_day_after_cutoff_shows_next_week():
    assert calculate_current_week_to_display(START, None, MONDAY, now=datetime(2025, 1, 6, 23, 30)) == 2
    assert calculate_current_week_to_display(START, None, MONDAY, now=datetime(2025, 1, 6, 22, 59)) == 1


def test_day_after_game_shows_next_week():
    assert calculate_current_week_to_display(START, None, MONDAY, now=datetime(2025, 1, 7, 9, 0)) == 2


def test_weekday_before_play_day_keeps_week():
    """Sunday sorts before Monday, so the last day of week 1 still shows week 1."""
    assert calculate_current_week_to_display(START, None, MONDAY, now=datetime(2025, 1, 12, 20, 0)) == 1


def test_without_play_day_uses_elapsed_weeks():
    assert calculate_current_week_to_display(START, None, None, now=datetime(2025, 1, 15, 23, 59)) == 2


def test_before_season_and_missing_start():
    assert calculate_current_week_to_display(START, "2025-03-03", MONDAY, now=datetime(2024, 12, 30, 12, 0)) == 1
    assert calculate_current_week_to_display(None, "2025-03-03", MONDAY, now=datetime(2025, 2, 1)) == 1
    assert calculate_current_week_to_display("not a date", None, MONDAY, now=datetime(2025, 2, 1)) == 1


def test_clamped_to_last_week():
    """2025-01-20 is two weeks after the start, so the season has three weeks."""
    assert calculate_current_week_to_display(START, "2025-01-20", MONDAY, now=datetime(2025, 3, 1, 12, 0)) == 3
    assert calculate_current_week_to_display(START, "2025-01-20", MONDAY, now=datetime(2025, 1, 14, 12, 0)) == 3
    assert calculate_current_week_to_display(START, "2025-01-20", MONDAY, now=datetime(2025, 1, 8, 12, 0)) == 2


def test_accepts_date_objects():
    now = datetime(2025, 1, 13, 10, 0)
    assert calculate_current_week_to_display(date(2025, 1, 6), date(2025, 3, 3), MONDAY, now=now) == 2


def test_week_status_with_play_day():
    assert get_week_status(1, START, MONDAY, now=datetime(2025, 1, 5, 12, 0)) == WeekStatus.FUTURE
    assert get_week_status(1, START, MONDAY, now=datetime(2025, 1, 6, 12, 0)) == WeekStatus.CURRENT
    assert get_week_status(1, START, MONDAY, now=datetime(2025, 1, 6, 23, 0)) == WeekStatus.CURRENT
    assert get_week_status(1, START, MONDAY, now=datetime(2025, 1, 6, 23, 30)) == WeekStatus.PAST
    assert get_week_status(1, START, MONDAY, now=datetime(2025, 1, 10, 12, 0)) == WeekStatus.PAST


def test_week_status_play_day_later_in_week():
    """Week 2 starts Monday 2025-01-13; a Wednesday league plays on the 15th."""
    wednesday = 3
    assert get_week_status(2, START, wednesday, now=datetime(2025, 1, 14, 20, 0)) == WeekStatus.FUTURE
    assert get_week_status(2, START, wednesday, now=datetime(2025, 1, 15, 20, 0)) == WeekStatus.CURRENT
    assert get_week_status(2, START, wednesday, now=datetime(2025, 1, 16, 8, 0)) == WeekStatus.PAST


def test_week_status_without_play_day():
    assert get_week_status(1, START, None, now=datetime(2025, 1, 5, 23, 59)) == WeekStatus.FUTURE
    assert get_week_status(1, START, None, now=datetime(2025, 1, 12, 23, 59)) == WeekStatus.CURRENT
    assert get_week_status(1, START, None, now=datetime(2025, 1, 13, 0, 0)) == WeekStatus.PAST


def test_week_status_without_start():
    assert get_week_status(1, None, MONDAY, now=datetime(2025, 1, 6)) == WeekStatus.FUTURE


def test_date_helpers():
    assert parse_date("2025-01-06") == date(2025, 1, 6)
    assert parse_date("2025-01-06T00:00:00+00:00") == date(2025, 1, 6)
    assert parse_date("") is None
    assert parse_date("06/01/2025") is None

    assert sunday_based_weekday(date(2025, 1, 5)) == 0
    assert sunday_based_weekday(date(2025, 1, 6)) == 1
    assert sunday_based_weekday(date(2025, 1, 11)) == 6

    assert total_weeks(START, "2025-01-20") == 3
    assert total_weeks(START, None) is None

    assert week_number_from_date("2025-01-14", START) == 2
    assert week_number_from_date("2025-01-01", START) == 1
    assert date_for_week_number(3, START) == date(2025, 1, 20)
    assert format_week_date(1, START) == "Jan 6, 2025"
    assert format_week_date(1, None) == ""


def test_week_navigation_info():
    """Nine-week season ending 2025-03-03 with two playoff weeks."""
    info = week_navigation_info(START, "2025-03-03", 2, 3)

    assert info.total_weeks == 9
    assert info.max_week == 9
    assert info.playoff_start_week == 8
    assert info.is_playoff_week(8)
    assert not info.is_playoff_week(7)
    assert info.can_navigate_to(1)
    assert not info.can_navigate_to(10)

    no_playoffs = week_navigation_info(START, "2025-03-03", 0, 3)
    assert no_playoffs.playoff_start_week is None
    assert not no_playoffs.is_playoff_week(9)


def test_aware_now_is_read_in_league_time():
    """03:30 UTC on Jan 7 is 22:30 on Monday Jan 6 in Toronto, before the cutoff."""
    late_monday = datetime(2025, 1, 7, 3, 30, tzinfo=timezone.utc)

    assert get_week_status(1, START, MONDAY, now=late_monday) == WeekStatus.CURRENT
    assert calculate_current_week_to_display(START, None, MONDAY, now=late_monday) == 1
    assert get_week_status(1, START, None, now=datetime(2025, 1, 6, 12, tzinfo=timezone.utc)) == WeekStatus.CURRENT
