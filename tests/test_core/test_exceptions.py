"""Tests for exception hierarchy."""

import pytest

from pursuit.core.exceptions import (
    ConfigurationError,
    DatabaseError,
    PursuitError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance."""

    def test_all_exceptions_inherit_from_pursuiterror(self):
        """All custom exceptions should inherit from PursuitError."""
        for exc_class in (ConfigurationError, ValidationError, DatabaseError):
            assert issubclass(exc_class, PursuitError)

    def test_can_catch_as_base(self):
        """Specific errors are caught by the base class."""
        with pytest.raises(PursuitError):
            raise DatabaseError("locked")

    def test_message_preserved(self):
        """Message is available via str()."""
        assert str(ValidationError("Contact name is required")) == "Contact name is required"
