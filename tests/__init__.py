"""Pursuit Test Suite.

Test organization mirrors the pursuit/ package:
    tests/
    ├── conftest.py          # Shared fixtures
    ├── test_core/           # Config, logging, exceptions
    ├── test_db/             # Database and models
    ├── test_engine/         # Calendar, cadence, to-do, email prompts
    ├── test_content/        # Dashboard statistics
    └── test_cli/            # Command line entry point

Markers:
    - @pytest.mark.slow: Tests taking > 1 second
    - @pytest.mark.database: Tests requiring database
"""
