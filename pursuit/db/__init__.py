"""Database package - SQLite database and models.

Modules:
    - database: SQLite connection and operations
    - models: Data models and enumerations
"""

from pursuit.db.models import (
    Contact,
    ContactMethod,
    ContactOpportunity,
    HealthSystem,
    Opportunity,
    OpportunityStatus,
    OutreachLog,
)

__all__ = [
    # Enums
    "OpportunityStatus",
    "ContactMethod",
    # Dataclasses
    "HealthSystem",
    "Opportunity",
    "Contact",
    "ContactOpportunity",
    "OutreachLog",
]
