"""LLM prompt builder for first-touch outreach emails.

Fills a Jinja2 text template with the contact, their account, and the
positioning copy for the opportunity's product. The prompt is pasted into
an LLM by the rep; nothing is sent from here.

Usage:
    from pursuit.engine.email_prompt import build_llm_prompt_for_contact

    prompt = build_llm_prompt_for_contact(
        contact_name="Dr. Ada Lovelace",
        role="CMIO",
        notes="Interested in data quality",
        account_name="Aruba Health System",
        product="Core",
    )
"""

from pathlib import Path
from typing import Optional

import jinja2

from pursuit.core.exceptions import ValidationError
from pursuit.core.logging import get_logger
from pursuit.db.database import Database
from pursuit.db.models import Opportunity
from pursuit.engine.cadence import DueStatus

logger = get_logger(__name__)


TEMPLATE_DIR = Path(__file__).parent.parent / "templates" / "prompts"
PROMPT_TEMPLATE = "email_intro.txt.j2"

MAX_NOTES_LENGTH = 500
NO_NOTES_TEXT = "No additional internal notes."

PRODUCTS: tuple[str, ...] = ("Core", "Cardiology", "Oncology", "Quality", "Research")

PRODUCT_EMAIL_CONTEXT: dict[str, str] = {
    "Core": (
        "Core is our clinical data platform. It unifies EHR, claims and registry data "
        "into one curated, analytics-ready record per patient, so service line leaders "
        "stop reconciling spreadsheets and start answering questions. Position it as the "
        "foundation every later initiative builds on: faster reporting, one source of "
        "truth, and no rip-and-replace of existing systems."
    ),
    "Cardiology": (
        "Cardiology gives heart and vascular programs registry-grade outcomes tracking, "
        "automated NCDR abstraction support and benchmarking against peer programs. "
        "Lead with reduced abstraction workload and earlier visibility into readmission "
        "and complication trends."
    ),
    "Oncology": (
        "Oncology tracks patients across the cancer care journey, from diagnosis through "
        "treatment and survivorship, and flags gaps such as delayed starts or missed "
        "follow-ups. Emphasize navigation efficiency, accreditation reporting and "
        "trial-eligibility screening."
    ),
    "Quality": (
        "Quality automates measure calculation for CMS and payer programs and surfaces "
        "patient-level drill-downs behind every metric. Frame it around fewer manual "
        "chart reviews, earlier intervention on at-risk measures and audit-ready "
        "documentation."
    ),
    "Research": (
        "Research turns curated clinical data into a de-identified cohort-discovery and "
        "feasibility tool for investigators. Highlight shorter study start-up, better "
        "enrollment forecasting and governance controls the IRB will appreciate."
    ),
}

_env: Optional[jinja2.Environment] = None


def _get_env() -> jinja2.Environment:
    """Get or create the Jinja2 environment."""
    global _env
    if _env is None:
        _env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=False,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=False,
        )
    return _env


def _product_context(product: str) -> str:
    context = PRODUCT_EMAIL_CONTEXT.get(product)
    if context is None:
        return f"No detailed positioning information is on file for {product}."
    return context


def _internal_notes(notes: Optional[str]) -> str:
    cleaned = (notes or "").strip()
    if not cleaned:
        return NO_NOTES_TEXT
    return cleaned[:MAX_NOTES_LENGTH]


def build_llm_prompt_for_contact(
    contact_name: str,
    role: Optional[str],
    notes: Optional[str],
    account_name: str,
    product: str,
) -> str:
    """Render the first-touch email prompt.

    Args:
        contact_name: Recipient name
        role: Recipient title, omitted from the prompt when blank
        notes: Internal notes, truncated to 500 characters
        account_name: Health system name
        product: Opportunity product

    Returns:
        Prompt text ending with the response format placeholder
    """
    template = _get_env().get_template(PROMPT_TEMPLATE)
    rendered = template.render(
        contact_name=contact_name.strip(),
        role=(role or "").strip(),
        account_name=account_name.strip(),
        product=product,
        product_context=_product_context(product),
        internal_notes=_internal_notes(notes),
    )
    return rendered.strip()


def build_prompt_for_contact(
    db: Database,
    contact_id: int,
    opportunity_id: Optional[int] = None,
) -> str:
    """Build a prompt from stored records.

    Args:
        db: Database instance
        contact_id: Recipient contact
        opportunity_id: Opportunity to pitch. Defaults to the contact's
            first assigned prospect opportunity.

    Raises:
        ValidationError: If the contact, opportunity or account is missing
    """
    contact = db.get_contact(contact_id)
    if contact is None:
        raise ValidationError(f"Contact {contact_id} does not exist")

    opportunity: Optional[Opportunity] = None
    if opportunity_id is not None:
        opportunity = db.get_opportunity(opportunity_id)
    else:
        for assignment in db.get_assignments(contact_id=contact_id):
            candidate = db.get_opportunity(assignment.opportunity_id)
            if candidate is not None and candidate.is_prospect:
                opportunity = candidate
                break
    if opportunity is None:
        raise ValidationError(f"Contact {contact_id} has no opportunity to pitch")

    account = db.get_health_system(opportunity.health_system_id)
    if account is None:
        raise ValidationError(f"Opportunity {opportunity.id} has no account")

    logger.info(
        "Email prompt built",
        extra={"context": {"contact_id": contact_id, "opportunity_id": opportunity.id}},
    )
    return build_llm_prompt_for_contact(
        contact_name=contact.name,
        role=contact.role,
        notes=contact.notes,
        account_name=account.name,
        product=opportunity.product,
    )


def build_prompt_for_status(db: Database, status: DueStatus) -> str:
    """Build a prompt for a row of the to-do list."""
    return build_prompt_for_contact(db, status.contact_id, status.item.opportunity_id)
