#!/usr/bin/env python3
"""Pursuit - Health-system outreach CRM.

Single entry point for the command line.

Usage:
    python pursuit_cli.py --todo                 # Who is due today
    python pursuit_cli.py --todo --today 2026-03-02
    python pursuit_cli.py --dashboard            # Weekly stats
    python pursuit_cli.py --prompt 12            # Email prompt for contact 12
    python pursuit_cli.py --version              # Show version
"""

import argparse
import sys
from datetime import date
from typing import Optional

from pursuit import __version__
from pursuit.content.dashboard import DashboardStats
from pursuit.core.config import get_config, validate_config
from pursuit.core.exceptions import PursuitError
from pursuit.core.logging import get_logger, setup_logging_from_config
from pursuit.engine.cadence import CadenceResult, DueStatus


def _parse_today(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM-DD, got {value!r}") from e


def _describe(status: DueStatus) -> str:
    if status.never_contacted:
        last = "never contacted"
    else:
        last = f"{status.days_since_contact}d ago"
    line = f"{status.account_name} / {status.product}: {status.contact_name} ({last}"
    if status.days_overdue:
        line += f", {status.days_overdue} business day(s) overdue"
    return line + f", {status.cadence_days}d cadence)"


def print_todo(result: CadenceResult) -> None:
    """Print the to-do lists."""
    print(f"To-do for {result.today:%A, %B %d, %Y}")
    if not result.is_business_day_today:
        print("  (weekend: nothing rolls over until the next business day)")
    print()

    if not result.due_today:
        print("All caught up!")
    else:
        print(f"Due today ({len(result.due_today)}, {result.rollover_count} rolled over):")
        for status in result.due_today:
            marker = "*" if status.is_rollover else "-"
            print(f"  {marker} {_describe(status)}")

    print()
    print(f"Due {result.next_business_day:%A, %B %d} ({len(result.due_next_business_day)}):")
    for status in result.due_next_business_day:
        print(f"  - {_describe(status)}")


def print_dashboard(stats: DashboardStats) -> None:
    """Print weekly dashboard statistics."""
    print(f"Accounts: {stats.total_accounts}  Opportunities: {stats.total_opportunities}  "
          f"Contacts: {stats.total_contacts}")
    print(f"Emailed this week: {stats.opportunities_covered_this_week}/"
          f"{stats.total_opportunities} ({stats.weekly_completion_rate}%), "
          f"{stats.opportunities_needing_email} still need an email")
    print(f"This week: {stats.calls_this_week} calls, {stats.emails_this_week} emails, "
          f"{stats.meetings_this_week} meetings")
    print(f"Email streak: {stats.current_streak} day(s)")
    if stats.recent_activity:
        print("\nRecent activity:")
        for item in stats.recent_activity:
            print(f"  {item.date} {item.method:<7} {item.contact_name} "
                  f"({item.account_name} / {item.product})")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for Pursuit.

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = argparse.ArgumentParser(description="Pursuit - Health-system outreach CRM")
    view = parser.add_mutually_exclusive_group()
    view.add_argument(
        "--todo", action="store_true", help="Show contacts due today (default view)"
    )
    view.add_argument("--dashboard", action="store_true", help="Show weekly statistics")
    view.add_argument(
        "--prompt",
        type=int,
        metavar="CONTACT_ID",
        help="Print an email-writing prompt for a contact",
    )
    parser.add_argument(
        "--today",
        type=_parse_today,
        help="Evaluate as of this date (YYYY-MM-DD) instead of the system date",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if args.version:
        print(f"Pursuit v{__version__}")
        return 0

    try:
        config = get_config()
    except PursuitError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging_from_config(config, debug=args.debug)
    logger = get_logger("main")
    logger.info(f"Pursuit v{__version__} starting...")

    issues = validate_config(config)
    for issue in issues:
        if issue.startswith("CRITICAL:"):
            logger.error(f"Configuration: {issue}")
        else:
            logger.warning(f"Configuration issue: {issue}")

    from pursuit.db.database import Database

    try:
        db = Database()
        db.initialize()
    except PursuitError as e:
        logger.error(f"Failed to initialize database: {e}")
        return 1

    # The only place the system clock is read
    today = args.today or date.today()

    try:
        if args.prompt is not None:
            from pursuit.engine.email_prompt import build_prompt_for_contact

            print(build_prompt_for_contact(db, args.prompt))
        elif args.dashboard:
            from pursuit.content.dashboard import get_dashboard_stats

            print_dashboard(get_dashboard_stats(db, today))
        else:
            # --todo, or no view flag at all
            from pursuit.engine.todo import get_todays_todo

            print_todo(get_todays_todo(db, today))
    except PursuitError as e:
        logger.error(f"Command failed: {e}")
        return 1
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
