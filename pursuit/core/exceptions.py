"""Pursuit Exception Hierarchy.

All custom exceptions inherit from PursuitError.

The cadence engine never raises for bad input data; it falls back to
defaults instead. These exceptions belong to the storage and
configuration layers around it.

Exception Hierarchy:
    PursuitError (base)
    ├── ConfigurationError
    ├── ValidationError
    └── DatabaseError
"""


class PursuitError(Exception):
    """Base exception for all Pursuit errors.

    All custom exceptions in Pursuit inherit from this class,
    allowing for broad exception handling when needed.
    """

    pass


class ConfigurationError(PursuitError):
    """Configuration is invalid or missing.

    Raised when:
        - Required environment variable is missing
        - Configuration value cannot be parsed
        - Path is not writable
    """

    pass


class ValidationError(PursuitError):
    """Data validation failed.

    Raised when:
        - Required field is missing
        - Contact method or opportunity status is not recognized
        - Record ID is missing on update
    """

    pass


class DatabaseError(PursuitError):
    """Database operation failed.

    Raised when:
        - Database file cannot be opened
        - Database is locked
        - Query execution fails
        - Unique or foreign key constraint violated
    """

    pass
