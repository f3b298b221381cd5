"""Weekly dashboard statistics.

Produces the numbers behind the dashboard screen:
    - Account, opportunity and contact totals
    - This week's calls, emails and meetings
    - Opportunities emailed this week vs. still needing an email
    - Consecutive-day email streak
    - Most recent activity

Weeks start on Sunday. Like the cadence engine, "today" is supplied by
the caller.

Usage:
    from pursuit.content.dashboard import get_dashboard_stats

    stats = get_dashboard_stats(db, date.today())
    print(stats.weekly_completion_rate)
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from pursuit.core.logging import get_logger
from pursuit.db.database import Database
from pursuit.db.models import ContactMethod, OutreachLog
from pursuit.engine.calendar import to_date

logger = get_logger(__name__)

RECENT_ACTIVITY_LIMIT = 5
UNKNOWN = "Unknown"


@dataclass
class RecentActivity:
    """One line of the recent activity feed."""

    contact_name: str
    account_name: str
    product: str
    method: str
    date: Optional[date]
    notes: Optional[str] = None


@dataclass
class DashboardStats:
    """Dashboard metrics for one day."""

    total_opportunities: int
    total_accounts: int
    total_contacts: int
    opportunities_covered_this_week: int
    opportunities_needing_email: int
    weekly_completion_rate: int
    calls_this_week: int
    emails_this_week: int
    meetings_this_week: int
    current_streak: int
    recent_activity: list[RecentActivity] = field(default_factory=list)

    @property
    def total_outreach_this_week(self) -> int:
        return self.calls_this_week + self.emails_this_week + self.meetings_this_week


def start_of_week(day: date) -> date:
    """Sunday on or before the given date."""
    day = to_date(day)
    # weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def email_streak(logs: list[OutreachLog], today: date) -> int:
    """Count consecutive days, ending today, with at least one email."""
    email_days = {
        log.contact_date
        for log in logs
        if log.contact_method == ContactMethod.EMAIL and log.contact_date is not None
    }
    streak = 0
    day = to_date(today)
    while day in email_days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def get_dashboard_stats(db: Database, today: date) -> DashboardStats:
    """Compute dashboard metrics.

    Args:
        db: Database instance
        today: Reference date

    Returns:
        DashboardStats
    """
    today = to_date(today)
    week_start = start_of_week(today)

    accounts = db.get_health_systems()
    opportunities = db.get_opportunities()
    contacts = db.get_contacts()
    assignments = db.get_assignments()
    logs = db.get_outreach_logs()

    account_names = {a.id: a.name for a in accounts}
    opportunity_by_id = {o.id: o for o in opportunities}
    contact_by_id = {c.id: c for c in contacts}

    opportunities_by_contact: dict[int, list[int]] = {}
    for assignment in assignments:
        opportunities_by_contact.setdefault(assignment.contact_id, []).append(
            assignment.opportunity_id
        )

    week_logs = [
        log
        for log in logs
        if log.contact_date is not None and week_start <= log.contact_date <= today
    ]

    # An unscoped email counts for every opportunity the contact is on
    covered: set[int] = set()
    for log in week_logs:
        if log.contact_method != ContactMethod.EMAIL:
            continue
        if log.opportunity_id is not None:
            covered.add(log.opportunity_id)
        else:
            covered.update(opportunities_by_contact.get(log.contact_id, []))
    covered &= set(opportunity_by_id)

    total_opportunities = len(opportunities)
    if total_opportunities:
        completion = round(len(covered) / total_opportunities * 100)
    else:
        completion = 100

    def _count(method: ContactMethod) -> int:
        return sum(1 for log in week_logs if log.contact_method == method)

    recent: list[RecentActivity] = []
    for log in logs[:RECENT_ACTIVITY_LIMIT]:
        contact = contact_by_id.get(log.contact_id)
        opportunity_id = log.opportunity_id
        if opportunity_id is None:
            assigned = opportunities_by_contact.get(log.contact_id, [])
            opportunity_id = assigned[0] if assigned else None
        opportunity = opportunity_by_id.get(opportunity_id) if opportunity_id else None
        recent.append(
            RecentActivity(
                contact_name=contact.name if contact else UNKNOWN,
                account_name=(
                    account_names.get(contact.health_system_id, UNKNOWN) if contact else UNKNOWN
                ),
                product=opportunity.product if opportunity else UNKNOWN,
                method=log.contact_method.value,
                date=log.contact_date,
                notes=log.notes,
            )
        )

    stats = DashboardStats(
        total_opportunities=total_opportunities,
        total_accounts=len(accounts),
        total_contacts=len(contacts),
        opportunities_covered_this_week=len(covered),
        opportunities_needing_email=total_opportunities - len(covered),
        weekly_completion_rate=completion,
        calls_this_week=_count(ContactMethod.CALL),
        emails_this_week=_count(ContactMethod.EMAIL),
        meetings_this_week=_count(ContactMethod.MEETING),
        current_streak=email_streak(logs, today),
        recent_activity=recent,
    )
    logger.debug(
        "Dashboard stats computed",
        extra={
            "context": {
                "today": today.isoformat(),
                "covered": stats.opportunities_covered_this_week,
                "streak": stats.current_streak,
            }
        },
    )
    return stats
