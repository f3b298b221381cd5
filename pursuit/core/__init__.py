"""Core package - Configuration, logging, exceptions.

This package provides foundational infrastructure used by all other layers.

Modules:
    - config: Environment and configuration management
    - logging: Structured JSON logging
    - exceptions: Custom exception hierarchy
"""

from pursuit.core.exceptions import (
    ConfigurationError,
    DatabaseError,
    PursuitError,
    ValidationError,
)

__all__ = [
    "PursuitError",
    "ConfigurationError",
    "ValidationError",
    "DatabaseError",
]
