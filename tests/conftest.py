"""Shared pytest fixtures for Pursuit tests.

Fixtures:
    - temp_db: Fresh file-backed SQLite database
    - memory_db: Fresh in-memory SQLite database
    - sample_health_system / sample_opportunity / sample_contact: Records
    - populated_db: Database with accounts, opportunities, contacts, logs
    - mock_config: Test configuration
"""

from datetime import date
from pathlib import Path
from typing import Generator

import pytest

from pursuit.core.config import Config
from pursuit.db.database import Database
from pursuit.db.models import (
    Contact,
    ContactMethod,
    HealthSystem,
    Opportunity,
    OpportunityStatus,
    OutreachLog,
)

# Reference week used across tests (February 2026):
#   Mon 2  Tue 3  Wed 4  Thu 5  Fri 6  Sat 7  Sun 8
#   Mon 9  Tue 10 Wed 11 Thu 12 Fri 13 Sat 14 Sun 15
MONDAY = date(2026, 2, 2)
WEDNESDAY = date(2026, 2, 4)
FRIDAY = date(2026, 2, 6)
SATURDAY = date(2026, 2, 7)
SUNDAY = date(2026, 2, 8)
NEXT_MONDAY = date(2026, 2, 9)


@pytest.fixture
def temp_db(tmp_path: Path) -> Generator[Database, None, None]:
    """Create a temporary database for testing.

    Yields:
        Database connected to temp file, cleaned up after test
    """
    db_path = tmp_path / "test.db"
    db = Database(str(db_path))
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def memory_db() -> Generator[Database, None, None]:
    """Create an in-memory database for fast tests.

    Yields:
        Database using :memory:, no cleanup needed
    """
    db = Database(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def sample_health_system() -> HealthSystem:
    """Sample account for testing."""
    return HealthSystem(name="Aruba Health System", notes="Regional system, 6 hospitals")


@pytest.fixture
def sample_opportunity() -> Opportunity:
    """Sample prospect opportunity (health_system_id filled in by tests)."""
    return Opportunity(product="Core", status=OpportunityStatus.PROSPECT)


@pytest.fixture
def sample_contact() -> Contact:
    """Sample contact (health_system_id filled in by tests)."""
    return Contact(
        name="Dr. Ada Lovelace",
        role="CMIO",
        email="ada@aruba.example",
        notes="High-priority cardiology service line leader.",
    )


@pytest.fixture
def mock_config(tmp_path: Path) -> Config:
    """Test configuration with temp paths."""
    return Config(
        db_path=tmp_path / "test.db",
        log_path=tmp_path / "logs",
        app_password="secret",
        debug=True,
    )


@pytest.fixture
def populated_db(memory_db: Database) -> dict:
    """Database pre-populated with sample data.

    Contains:
        - 2 accounts (Aruba Health System, Mercy Health)
        - 3 opportunities (Aruba/Core prospect, Mercy/Quality with NULL
          status, Mercy/Research won)
        - 3 contacts: Ada (Aruba/Core, cadence 5, emailed Mon Feb 2),
          Grace (Mercy/Quality, cadence 10, never contacted),
          Alan (Mercy/Research only, won, never contacted)

    Returns:
        Dict with the database and the created IDs
    """
    aruba = memory_db.create_health_system(HealthSystem(name="Aruba Health System"))
    mercy = memory_db.create_health_system(HealthSystem(name="Mercy Health"))

    core = memory_db.create_opportunity(Opportunity(health_system_id=aruba, product="Core"))
    quality = memory_db.create_opportunity(
        Opportunity(health_system_id=mercy, product="Quality")
    )
    research = memory_db.create_opportunity(
        Opportunity(health_system_id=mercy, product="Research", status=OpportunityStatus.WON)
    )
    # Rows from before statuses existed have NULL status
    memory_db._get_connection().execute(
        "UPDATE opportunities SET status = NULL WHERE id = ?", (quality,)
    )
    memory_db._get_connection().commit()

    ada = memory_db.create_contact(Contact(health_system_id=aruba, name="Ada", role="CMIO"))
    grace = memory_db.create_contact(Contact(health_system_id=mercy, name="Grace"))
    alan = memory_db.create_contact(Contact(health_system_id=mercy, name="Alan"))

    memory_db.assign_contact(ada, core, cadence_days=5)
    memory_db.assign_contact(grace, quality, cadence_days=10)
    memory_db.assign_contact(alan, research, cadence_days=3)

    memory_db.create_outreach_log(
        OutreachLog(
            contact_id=ada,
            opportunity_id=core,
            contact_method=ContactMethod.EMAIL,
            contact_date=MONDAY,
        )
    )

    return {
        "db": memory_db,
        "aruba": aruba,
        "mercy": mercy,
        "core": core,
        "quality": quality,
        "research": research,
        "ada": ada,
        "grace": grace,
        "alan": alan,
    }


# Markers for different test types
def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "database: marks tests requiring database")
