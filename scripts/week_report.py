"""
Print the week the schedule opens on and the status of every week of a season.

Dates can be given directly, or loaded from Supabase with --league-id, in which
case the tiers of the displayed week are listed and checked as well.
"""

import sys
import argparse
import os
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ofsl_schedule.core.exceptions import ScheduleError
from ofsl_schedule.services.formats import format_label, positions_for_format
from ofsl_schedule.services.supabase_store import SupabaseScheduleStore
from ofsl_schedule.services.tier_validator import find_scheduling_issues
from ofsl_schedule.services.week_calculation import (
    calculate_current_week_to_display, get_week_status, format_week_date,
    total_weeks, parse_date, local_now, to_local
)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def print_season(start_date, end_date, day_of_week, now):
    current_week = calculate_current_week_to_display(start_date, end_date, day_of_week, now=now)
    season_weeks = total_weeks(start_date, end_date) or current_week

    day_name = DAY_NAMES[day_of_week] if day_of_week is not None else "not set"
    print(f"Season: {start_date} to {end_date or 'open'} (plays {day_name})")
    print(f"Evaluated at: {now.strftime('%Y-%m-%d %H:%M')}")
    print(f"Displayed week: {current_week}")
    print("-" * 60)

    for week in range(1, season_weeks + 1):
        status = get_week_status(week, start_date, day_of_week, now=now)
        marker = " <" if week == current_week else ""
        print(f"  Week {week:2d}  {format_week_date(week, start_date):>14}  {status.value}{marker}")

    return current_week


def print_tiers(store, league_id, week_number):
    tiers = store.get_weekly_schedule(league_id, week_number)
    print("-" * 60)
    print(f"Week {week_number}: {len(tiers)} tiers")

    for tier in tiers:
        teams = []
        for position in positions_for_format(tier.format):
            slot = tier.team_at(position)
            teams.append(f"{position}={slot.name if slot else '-'}")
        print(f"  Tier {tier.tier_number} [{format_label(tier.format)}] {tier.location} {tier.time_slot}: {', '.join(teams)}")

    issues = find_scheduling_issues([tier.to_record() for tier in tiers])
    if issues:
        print("\nIssues:")
        for found in issues:
            for issue in found.issues:
                print(f"  - Tier {found.tier.tier_number}: {issue}")


def main():
    parser = argparse.ArgumentParser(
        description='OFSL League Schedule - show the displayed week and week statuses'
    )
    parser.add_argument('--league-id', type=int, help='Load dates and tiers for this league from Supabase')
    parser.add_argument('--start', help='Season start date (YYYY-MM-DD)')
    parser.add_argument('--end', help='Season end date (YYYY-MM-DD)')
    parser.add_argument('--day', type=int, choices=range(7), help='Play day, 0 = Sunday')
    parser.add_argument('--now', help='Evaluate at this local time (YYYY-MM-DDTHH:MM)')

    args = parser.parse_args()
    now = to_local(datetime.fromisoformat(args.now)) if args.now else local_now()

    if args.league_id is None:
        if not args.start:
            parser.error("either --league-id or --start is required")
        print_season(parse_date(args.start), parse_date(args.end), args.day, now)
        return 0

    try:
        store = SupabaseScheduleStore()
        league = store.get_league(args.league_id)
        if league is None:
            print(f"ERROR: League {args.league_id} not found")
            return 1

        current_week = print_season(league.start_date, league.end_date, league.day_of_week, now)
        print_tiers(store, args.league_id, current_week)
    except ScheduleError as e:
        print(f"ERROR: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
