"""Data models and enumerations for Pursuit.

All enums stored as TEXT in SQLite.
Dataclasses use frozen=False for mutability during form edits.

This module defines:
    - Enumerations for all categorical fields
    - Dataclasses for database records
    - Utility functions (cadence normalization, status parsing)
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pursuit.core.config import DEFAULT_CADENCE_DAYS, MAX_CADENCE_DAYS, MIN_CADENCE_DAYS

# =============================================================================
# ENUMERATIONS
# =============================================================================


class OpportunityStatus(str, Enum):
    """Where an opportunity sits in the sales cycle.

    Values:
        PROSPECT: Still being pursued, feeds the daily to-do list
        ACTIVE: Engaged customer work, hidden from the to-do list
        WON: Closed, hidden from the to-do list
    """

    PROSPECT = "prospect"
    ACTIVE = "active"
    WON = "won"


class ContactMethod(str, Enum):
    """How an outreach touch was made."""

    CALL = "call"
    EMAIL = "email"
    MEETING = "meeting"


# =============================================================================
# HELPERS
# =============================================================================


def parse_status(value: Any) -> OpportunityStatus:
    """Parse a stored status.

    NULL, blank and unknown values read as PROSPECT. Rows created before
    statuses existed have no value and must keep showing on the to-do list.
    """
    if isinstance(value, OpportunityStatus):
        return value
    if not value:
        return OpportunityStatus.PROSPECT
    try:
        return OpportunityStatus(str(value).strip().lower())
    except ValueError:
        return OpportunityStatus.PROSPECT


def normalize_cadence(value: Any, default: int = DEFAULT_CADENCE_DAYS) -> int:
    """Clamp a cadence entry to the allowed range.

    Mirrors the assignment form: non-numeric input falls back to the
    default, numbers are clamped to [1, 90].

    Args:
        value: Raw cadence (int, numeric string, or junk)
        default: Value used when input cannot be parsed

    Returns:
        Cadence in business days
    """
    if isinstance(value, bool):
        return default
    try:
        days = int(value)
    except (TypeError, ValueError):
        return default
    return max(MIN_CADENCE_DAYS, min(MAX_CADENCE_DAYS, days))


# =============================================================================
# DATACLASSES
# =============================================================================


@dataclass
class HealthSystem:
    """An account: a hospital or health system being sold into."""

    id: Optional[int] = None
    name: str = ""
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Opportunity:
    """A (health system, product) pairing being pursued.

    Attributes:
        health_system_id: Owning account
        product: Solution name, unique per account
        status: None is treated as PROSPECT
    """

    id: Optional[int] = None
    health_system_id: int = 0
    product: str = ""
    status: Optional[OpportunityStatus] = OpportunityStatus.PROSPECT
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def effective_status(self) -> OpportunityStatus:
        return parse_status(self.status)

    @property
    def is_prospect(self) -> bool:
        """True when the opportunity belongs on the daily to-do list."""
        return self.effective_status == OpportunityStatus.PROSPECT


@dataclass
class Contact:
    """A person at a health system."""

    id: Optional[int] = None
    health_system_id: int = 0
    name: str = ""
    role: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ContactOpportunity:
    """Assignment of a contact to an opportunity.

    Attributes:
        cadence_days: Business days between required touches
    """

    id: Optional[int] = None
    contact_id: int = 0
    opportunity_id: int = 0
    cadence_days: int = DEFAULT_CADENCE_DAYS
    created_at: Optional[datetime] = None


@dataclass
class OutreachLog:
    """One call, email or meeting with a contact.

    Append-only. opportunity_id is optional because a touch may not be
    about any single opportunity.
    """

    id: Optional[int] = None
    contact_id: int = 0
    contact_method: ContactMethod = ContactMethod.EMAIL
    contact_date: Optional[date] = None
    opportunity_id: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
