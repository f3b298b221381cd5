"""Cadence due-date engine.

Decides which contacts need a touch today. Each contact/opportunity
assignment carries a cadence in business days; the contact is due that
many business days after their most recent outreach, regardless of which
opportunity the outreach was about.

    - Never contacted: due today, or the next business day on weekends
    - Contacted: due = last touch + cadence business days
    - Rollover: due on an earlier business day and still untouched

"Days since contact" is in calendar days ("12d ago"). Due dates and
overdue counts are in business days.

Usage:
    from pursuit.engine.cadence import CadenceInput, build_due_lists

    result = build_due_lists(today, items)
    for status in result.due_today:
        print(status.account_name, status.days_overdue)
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional

from pursuit.core.config import DEFAULT_CADENCE_DAYS
from pursuit.core.logging import get_logger
from pursuit.engine.calendar import (
    add_business_days,
    count_business_days,
    is_business_day,
    next_business_day,
    parse_date,
    to_date,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class CadenceInput:
    """One contact on one prospect opportunity.

    Callers filter out active and won opportunities before building these.

    Attributes:
        contact_id: Contact identifier
        account_name: Health system name, used for ordering
        cadence_days: Business days between touches
        last_outreach_date: Most recent touch, None if never contacted
        contact_name: Display name
        opportunity_id: Opportunity the assignment belongs to
        product: Opportunity product
        last_outreach_method: call/email/meeting of the latest touch
    """

    contact_id: int
    account_name: str
    cadence_days: Any = DEFAULT_CADENCE_DAYS
    last_outreach_date: Optional[Any] = None
    contact_name: str = ""
    opportunity_id: Optional[int] = None
    product: str = ""
    last_outreach_method: Optional[str] = None


@dataclass(frozen=True)
class DueStatus:
    """Due-date figures for one CadenceInput."""

    item: CadenceInput
    due_date: date
    days_since_contact: Optional[int]
    days_overdue: int
    is_rollover: bool
    never_contacted: bool

    @property
    def contact_id(self) -> int:
        return self.item.contact_id

    @property
    def account_name(self) -> str:
        return self.item.account_name

    @property
    def contact_name(self) -> str:
        return self.item.contact_name

    @property
    def product(self) -> str:
        return self.item.product

    @property
    def cadence_days(self) -> int:
        return effective_cadence(self.item.cadence_days)

    def is_due_on(self, today: date) -> bool:
        """Due today or carried over from an earlier day."""
        return self.due_date <= to_date(today)


@dataclass(frozen=True)
class CadenceResult:
    """Everything the to-do view needs for one day."""

    today: date
    is_business_day_today: bool
    next_business_day: date
    due_today: list[DueStatus] = field(default_factory=list)
    due_next_business_day: list[DueStatus] = field(default_factory=list)

    @property
    def rollover_count(self) -> int:
        return sum(1 for s in self.due_today if s.is_rollover)


def effective_cadence(value: Any) -> int:
    """Cadence used for scheduling.

    Missing, non-numeric or non-positive values use the default.
    """
    if isinstance(value, bool):
        return DEFAULT_CADENCE_DAYS
    try:
        days = int(value)
    except (TypeError, ValueError):
        return DEFAULT_CADENCE_DAYS
    if days < 1:
        return DEFAULT_CADENCE_DAYS
    return days


def compute_due_status(today: date, item: CadenceInput) -> DueStatus:
    """Compute due date and overdue figures for one contact.

    Args:
        today: Reference date (time-of-day is ignored)
        item: Contact assignment with its latest outreach date

    Returns:
        DueStatus for the item
    """
    today = to_date(today)
    last_date = parse_date(item.last_outreach_date)

    if last_date is None:
        due_date = today if is_business_day(today) else next_business_day(today)
        days_since_contact = None
    else:
        due_date = add_business_days(last_date, effective_cadence(item.cadence_days))
        days_since_contact = (today - last_date).days

    return DueStatus(
        item=item,
        due_date=due_date,
        days_since_contact=days_since_contact,
        days_overdue=count_business_days(due_date, today),
        is_rollover=due_date < today and is_business_day(today),
        never_contacted=last_date is None,
    )


def _due_today_key(status: DueStatus) -> tuple:
    # Rollovers first, most overdue first, then account name A-Z
    return (
        not status.is_rollover,
        -status.days_overdue,
        status.account_name.casefold(),
        status.contact_name.casefold(),
        status.contact_id,
        status.item.opportunity_id or 0,
    )


def _preview_key(status: DueStatus) -> tuple:
    return (
        status.account_name.casefold(),
        status.contact_name.casefold(),
        status.contact_id,
        status.item.opportunity_id or 0,
    )


def build_due_lists(today: date, items: Iterable[CadenceInput]) -> CadenceResult:
    """Split contacts into due-today and due-next-business-day lists.

    Contacts due further out appear in neither list.

    Args:
        today: Reference date supplied by the caller
        items: Prospect-opportunity assignments to evaluate

    Returns:
        CadenceResult with both lists ordered for display
    """
    today = to_date(today)
    upcoming = next_business_day(today)

    due_today: list[DueStatus] = []
    due_next: list[DueStatus] = []

    for item in items:
        status = compute_due_status(today, item)
        if status.is_due_on(today):
            due_today.append(status)
        elif status.due_date == upcoming:
            due_next.append(status)

    due_today.sort(key=_due_today_key)
    due_next.sort(key=_preview_key)

    logger.debug(
        "Cadence lists built",
        extra={
            "context": {
                "today": today.isoformat(),
                "due_today": len(due_today),
                "due_next_business_day": len(due_next),
            }
        },
    )

    return CadenceResult(
        today=today,
        is_business_day_today=is_business_day(today),
        next_business_day=upcoming,
        due_today=due_today,
        due_next_business_day=due_next,
    )
