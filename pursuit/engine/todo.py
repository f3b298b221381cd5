"""Daily to-do list assembly.

Joins storage into cadence engine inputs:
    1. Prospect opportunities only (active/won are hidden)
    2. Every contact assigned to them, with the assignment's cadence
    3. The contact's most recent outreach, whichever opportunity it was for

Also records new outreach from the to-do screen.

Usage:
    from pursuit.engine.todo import get_todays_todo, log_outreach

    result = get_todays_todo(db, date.today())
    log_outreach(db, contact_id=4, method="email", notes="Sent deck")
"""

import sqlite3
from datetime import date
from typing import Optional

from pursuit.core.exceptions import DatabaseError, ValidationError
from pursuit.core.logging import get_logger
from pursuit.db.database import Database
from pursuit.db.models import ContactMethod, OpportunityStatus, OutreachLog
from pursuit.engine.cadence import CadenceInput, CadenceResult, build_due_lists

logger = get_logger(__name__)


def gather_cadence_inputs(db: Database) -> list[CadenceInput]:
    """Build one CadenceInput per contact assignment on a prospect opportunity.

    A failed fetch returns an empty list rather than partial data.

    Args:
        db: Database instance

    Returns:
        Engine inputs, unordered
    """
    try:
        conn = db._get_connection()
        rows = conn.execute(
            """SELECT co.contact_id, co.opportunity_id, co.cadence_days,
                      c.name AS contact_name, o.product, h.name AS account_name
               FROM contact_opportunities co
               JOIN opportunities o ON co.opportunity_id = o.id
               JOIN contacts c ON co.contact_id = c.id
               JOIN health_systems h ON o.health_system_id = h.id
               WHERE o.status IS NULL OR o.status = '' OR o.status = ?
               ORDER BY co.id""",
            (OpportunityStatus.PROSPECT.value,),
        ).fetchall()
        latest = db.get_latest_outreach_by_contact()
    except (DatabaseError, sqlite3.Error, ValueError) as e:
        # Raw sqlite3 errors come from the join when the schema is missing
        logger.error(
            "Failed to load to-do data",
            extra={"context": {"error": str(e)}},
        )
        return []

    inputs: list[CadenceInput] = []
    for row in rows:
        last = latest.get(row["contact_id"])
        inputs.append(
            CadenceInput(
                contact_id=row["contact_id"],
                account_name=row["account_name"] or "",
                cadence_days=row["cadence_days"],
                last_outreach_date=last.contact_date if last else None,
                contact_name=row["contact_name"] or "",
                opportunity_id=row["opportunity_id"],
                product=row["product"] or "",
                last_outreach_method=last.contact_method.value if last else None,
            )
        )
    return inputs


def get_todays_todo(db: Database, today: date) -> CadenceResult:
    """Compute the to-do lists for a day.

    Args:
        db: Database instance
        today: Date to evaluate, supplied by the caller

    Returns:
        CadenceResult with due-today and next-business-day lists
    """
    result = build_due_lists(today, gather_cadence_inputs(db))
    logger.info(
        "To-do list built",
        extra={
            "context": {
                "today": result.today.isoformat(),
                "due_today": len(result.due_today),
                "rollovers": result.rollover_count,
            }
        },
    )
    return result


def log_outreach(
    db: Database,
    contact_id: int,
    method: str,
    notes: Optional[str] = None,
    opportunity_id: Optional[int] = None,
    contact_date: Optional[date] = None,
) -> int:
    """Record a call, email or meeting.

    Callers re-fetch the to-do list afterwards; nothing is updated in place.

    Args:
        db: Database instance
        contact_id: Contact that was reached
        method: "call", "email" or "meeting"
        notes: Optional free text, blank stored as NULL
        opportunity_id: Opportunity the touch was about, if any
        contact_date: Defaults to the database's current date

    Returns:
        New outreach log ID

    Raises:
        ValidationError: If method is unknown or the contact does not exist
    """
    if isinstance(method, ContactMethod):
        contact_method = method
    else:
        try:
            contact_method = ContactMethod(str(method).strip().lower())
        except ValueError as e:
            raise ValidationError(f"Unknown contact method: {method!r}") from e

    if db.get_contact(contact_id) is None:
        raise ValidationError(f"Contact {contact_id} does not exist")

    return db.create_outreach_log(
        OutreachLog(
            contact_id=contact_id,
            contact_method=contact_method,
            contact_date=contact_date,
            opportunity_id=opportunity_id,
            notes=notes,
        )
    )
