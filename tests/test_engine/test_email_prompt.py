"""Tests for the email prompt builder."""

import pytest

from pursuit.core.exceptions import ValidationError
from pursuit.engine.email_prompt import (
    NO_NOTES_TEXT,
    PRODUCT_EMAIL_CONTEXT,
    PRODUCTS,
    build_llm_prompt_for_contact,
    build_prompt_for_contact,
    build_prompt_for_status,
)
from pursuit.engine.todo import get_todays_todo
from tests.conftest import NEXT_MONDAY


@pytest.fixture
def contact_kwargs():
    """Sample prompt input."""
    return {
        "contact_name": "Dr. Ada Lovelace",
        "role": "CMIO",
        "notes": "High-priority cardiology service line leader with strong interest in data quality.",
        "account_name": "Aruba Health System",
        "product": "Core",
    }


class TestBuildLlmPrompt:
    """Test prompt rendering."""

    def test_structure_and_details(self, contact_kwargs):
        """Prompt has the header, contact details, context and footer."""
        prompt = build_llm_prompt_for_contact(**contact_kwargs)

        assert prompt.startswith("You are an expert B2B sales email writer.")
        assert "Generate a concise, friendly, relatively formal outreach email." in prompt
        assert "The email is to Dr. Ada Lovelace, CMIO at Aruba Health System." in prompt
        assert "I want to introduce them for the first time to our Core solution." in prompt
        assert PRODUCT_EMAIL_CONTEXT["Core"] in prompt
        assert contact_kwargs["notes"] in prompt

        assert "First, generate a concise, professional subject line." in prompt
        assert "Then generate the email body." in prompt
        assert "Subject: <subject line>" in prompt
        assert prompt.endswith("<email body here>")

    @pytest.mark.parametrize("role", [None, "", "   "])
    def test_missing_role(self, contact_kwargs, role):
        """No dangling comma when role is blank."""
        contact_kwargs["role"] = role
        prompt = build_llm_prompt_for_contact(**contact_kwargs)
        assert "The email is to Dr. Ada Lovelace at Aruba Health System." in prompt
        assert ",  at" not in prompt

    @pytest.mark.parametrize("notes", [None, "", "   \n  "])
    def test_missing_notes(self, contact_kwargs, notes):
        """Blank notes are replaced with a placeholder."""
        contact_kwargs["notes"] = notes
        prompt = build_llm_prompt_for_contact(**contact_kwargs)
        assert NO_NOTES_TEXT in prompt

    def test_every_product_has_context(self, contact_kwargs):
        """Each product's positioning copy is included."""
        for product in PRODUCTS:
            contact_kwargs["product"] = product
            prompt = build_llm_prompt_for_contact(**contact_kwargs)
            assert PRODUCT_EMAIL_CONTEXT[product] in prompt
            assert (
                f"Here is detailed product and positioning information for {product}." in prompt
            )

    def test_notes_truncated(self, contact_kwargs):
        """Notes are cut at 500 characters."""
        contact_kwargs["notes"] = "X" * 600
        prompt = build_llm_prompt_for_contact(**contact_kwargs)
        assert "X" * 500 in prompt
        assert "X" * 501 not in prompt

    def test_unknown_product(self, contact_kwargs):
        """Products without copy still render."""
        contact_kwargs["product"] = "Telehealth"
        prompt = build_llm_prompt_for_contact(**contact_kwargs)
        assert "our Telehealth solution" in prompt
        assert "No detailed positioning information is on file for Telehealth." in prompt

    def test_no_html_escaping(self, contact_kwargs):
        """Plain-text prompt keeps ampersands and quotes as typed."""
        contact_kwargs["account_name"] = "Johnson & Johnson \"Health\""
        prompt = build_llm_prompt_for_contact(**contact_kwargs)
        assert 'Johnson & Johnson "Health"' in prompt


class TestProductContext:
    """Test the product catalogue."""

    def test_entries_for_all_products(self):
        """Every product has non-empty copy."""
        for product in PRODUCTS:
            entry = PRODUCT_EMAIL_CONTEXT[product]
            assert isinstance(entry, str)
            assert entry.strip()


class TestBuildFromStorage:
    """Test prompts built from stored records."""

    def test_default_opportunity(self, populated_db):
        """Uses the contact's prospect opportunity and account."""
        prompt = build_prompt_for_contact(populated_db["db"], populated_db["ada"])
        assert "The email is to Ada, CMIO at Aruba Health System." in prompt
        assert "our Core solution" in prompt

    def test_explicit_opportunity(self, populated_db):
        """An explicit opportunity overrides the default."""
        prompt = build_prompt_for_contact(
            populated_db["db"], populated_db["alan"], populated_db["research"]
        )
        assert "our Research solution" in prompt

    def test_skips_non_prospect(self, populated_db):
        """A contact only on a won opportunity has nothing to pitch by default."""
        with pytest.raises(ValidationError):
            build_prompt_for_contact(populated_db["db"], populated_db["alan"])

    def test_missing_contact(self, populated_db):
        """Unknown contact is rejected."""
        with pytest.raises(ValidationError):
            build_prompt_for_contact(populated_db["db"], 9999)

    def test_from_todo_row(self, populated_db):
        """A due-today row builds a prompt for its own opportunity."""
        db = populated_db["db"]
        result = get_todays_todo(db, NEXT_MONDAY)
        grace_row = [s for s in result.due_today if s.contact_id == populated_db["grace"]][0]
        prompt = build_prompt_for_status(db, grace_row)
        assert "The email is to Grace at Mercy Health." in prompt
        assert "our Quality solution" in prompt
