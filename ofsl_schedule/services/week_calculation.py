"""
Week calculation for the league schedule.

Works out which week of the season to show by default and whether a given
week is past, current or future. Weekdays follow the leagues table
convention: 0 = Sunday ... 6 = Saturday. All arithmetic is done at day
granularity in the league's local time, plus one cutoff hour after which the
game day counts as finished.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ofsl_schedule.models import WeekStatus, WeekNavigationInfo
from ofsl_schedule.core.config import (
    DAYS_PER_WEEK, GAME_DAY_CUTOFF_HOUR, LEAGUE_TIMEZONE
)
from ofsl_schedule.core.logging_config import get_logger

logger = get_logger(__name__)

DateInput = Union[date, str, None]


def local_now() -> datetime:
    """Current wall-clock time in the league timezone, without tzinfo."""
    return datetime.now(ZoneInfo(LEAGUE_TIMEZONE)).replace(tzinfo=None)


def to_local(moment: datetime) -> datetime:
    """Naive league-local time; naive input is taken as already local."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(ZoneInfo(LEAGUE_TIMEZONE)).replace(tzinfo=None)


def parse_date(value: DateInput) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    value = str(value).strip()
    if not value:
        return None

    try:
        # Supabase returns plain YYYY-MM-DD for date columns; tolerate timestamps too
        return date.fromisoformat(value[:10])
    except ValueError:
        logger.warning(f"Could not parse date: {value}")
        return None


def sunday_based_weekday(day: date) -> int:
    """Weekday with 0 = Sunday, matching the leagues.day_of_week column."""
    return (day.weekday() + 1) % 7


def total_weeks(start_date: DateInput, end_date: DateInput) -> Optional[int]:
    """Inclusive number of weeks from start to end, None if either date is missing."""
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start is None or end is None:
        return None
    return (end - start).days // DAYS_PER_WEEK + 1


def calculate_current_week_to_display(
    start_date: DateInput,
    end_date: DateInput,
    day_of_week: Optional[int] = None,
    now: Optional[datetime] = None
) -> int:
    """
    Week number the schedule should open on.

    Args:
        start_date: League start date
        end_date: League end date, or None for an open-ended season
        day_of_week: Day the league plays (0 = Sunday), or None
        now: Local time to evaluate against (defaults to local_now())

    Returns:
        Week number, at least 1 and never beyond the last week of the season
    """
    start = parse_date(start_date)
    if start is None:
        return 1

    now = to_local(now) if now else local_now()
    today = now.date()

    if today < start:
        return 1

    elapsed_days = (today - start).days
    weeks_since_start = elapsed_days // DAYS_PER_WEEK
    current_week = weeks_since_start + 1

    if day_of_week is not None:
        today_weekday = sunday_based_weekday(today)

        # This week's game has been played, move on to next week's schedule
        if today_weekday > day_of_week:
            current_week += 1
        elif today_weekday == day_of_week and now.hour >= GAME_DAY_CUTOFF_HOUR:
            current_week += 1

    season_weeks = total_weeks(start, end_date)
    if season_weeks is not None and current_week > season_weeks:
        current_week = season_weeks

    return max(1, current_week)


def get_week_status(
    week_number: int,
    start_date: DateInput,
    day_of_week: Optional[int] = None,
    now: Optional[datetime] = None
) -> WeekStatus:
    start = parse_date(start_date)
    if start is None:
        return WeekStatus.FUTURE

    now = to_local(now) if now else local_now()
    week_start = start + timedelta(days=(week_number - 1) * DAYS_PER_WEEK)

    if day_of_week is not None:
        days_until_game = (day_of_week - sunday_based_weekday(week_start) + 7) % 7
        game_day = week_start + timedelta(days=days_until_game)
        game_day_start = datetime.combine(game_day, time.min)
        game_day_end = datetime.combine(game_day, time(GAME_DAY_CUTOFF_HOUR, 0))

        if now < game_day_start:
            return WeekStatus.FUTURE
        if now > game_day_end:
            return WeekStatus.PAST
        return WeekStatus.CURRENT

    window_start = datetime.combine(week_start, time.min)
    window_end = window_start + timedelta(days=DAYS_PER_WEEK)

    if now < window_start:
        return WeekStatus.FUTURE
    if now >= window_end:
        return WeekStatus.PAST
    return WeekStatus.CURRENT


def week_number_from_date(day: DateInput, start_date: DateInput) -> int:
    day = parse_date(day)
    start = parse_date(start_date)
    if day is None or start is None:
        return 1
    return max(1, (day - start).days // DAYS_PER_WEEK + 1)


def date_for_week_number(week_number: int, start_date: DateInput) -> Optional[date]:
    start = parse_date(start_date)
    if start is None:
        return None
    return start + timedelta(days=(week_number - 1) * DAYS_PER_WEEK)


def format_week_date(week_number: int, start_date: DateInput) -> str:
    """Display form of a week's start date, e.g. "Jan 6, 2025"."""
    week_date = date_for_week_number(week_number, start_date)
    if week_date is None:
        return ""
    return f"{week_date.strftime('%b')} {week_date.day}, {week_date.year}"


def week_navigation_info(
    start_date: DateInput,
    end_date: DateInput,
    playoff_weeks: int,
    current_week: int
) -> WeekNavigationInfo:
    season_weeks = total_weeks(start_date, end_date) or current_week
    playoff_start_week = None
    if playoff_weeks > 0:
        playoff_start_week = max(1, season_weeks - playoff_weeks + 1)

    return WeekNavigationInfo(
        current_week=current_week,
        total_weeks=season_weeks,
        playoff_start_week=playoff_start_week
    )
