"""Engine package - Business logic layer.

Modules:
    - calendar: Business-day arithmetic
    - cadence: Due-date engine
    - todo: Builds engine input from storage, logs outreach
    - email_prompt: LLM prompt for first-touch emails
"""

from pursuit.engine.cadence import (
    CadenceInput,
    CadenceResult,
    DueStatus,
    build_due_lists,
    compute_due_status,
    effective_cadence,
)
from pursuit.engine.calendar import (
    add_business_days,
    count_business_days,
    is_business_day,
    next_business_day,
)

__all__ = [
    # Calendar
    "add_business_days",
    "count_business_days",
    "is_business_day",
    "next_business_day",
    # Cadence
    "CadenceInput",
    "CadenceResult",
    "DueStatus",
    "build_due_lists",
    "compute_due_status",
    "effective_cadence",
]
