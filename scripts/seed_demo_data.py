"""Create a small demo database for manual to-do and dashboard checks."""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pursuit.db.database import Database
from pursuit.db.models import (
    Contact,
    ContactMethod,
    HealthSystem,
    Opportunity,
    OpportunityStatus,
    OutreachLog,
)


def main() -> None:
    demo_dir = Path("data/demo")
    demo_dir.mkdir(parents=True, exist_ok=True)
    demo_db = demo_dir / "pursuit_demo.db"

    db = Database(str(demo_db))
    db.initialize()
    today = date.today()

    mercy = db.create_health_system(HealthSystem(name="Mercy Health"))
    aruba = db.create_health_system(HealthSystem(name="Aruba Health System"))

    core = db.create_opportunity(Opportunity(health_system_id=mercy, product="Core"))
    quality = db.create_opportunity(
        Opportunity(health_system_id=aruba, product="Quality", status=OpportunityStatus.PROSPECT)
    )
    db.create_opportunity(
        Opportunity(health_system_id=aruba, product="Research", status=OpportunityStatus.WON)
    )

    ada = db.create_contact(Contact(health_system_id=aruba, name="Ada Lovelace", role="CMIO"))
    grace = db.create_contact(Contact(health_system_id=mercy, name="Grace Hopper", role="CIO"))
    alan = db.create_contact(Contact(health_system_id=mercy, name="Alan Turing"))

    db.assign_contact(ada, quality, cadence_days=5)
    db.assign_contact(grace, core, cadence_days=10)
    db.assign_contact(alan, core)

    db.create_outreach_log(
        OutreachLog(
            contact_id=grace,
            opportunity_id=core,
            contact_method=ContactMethod.EMAIL,
            contact_date=today - timedelta(days=21),
            notes="Intro email",
        )
    )
    db.create_outreach_log(
        OutreachLog(
            contact_id=ada,
            opportunity_id=quality,
            contact_method=ContactMethod.CALL,
            contact_date=today - timedelta(days=2),
        )
    )

    db.close()

    print(f"Demo database ready: {demo_db}")


if __name__ == "__main__":
    main()
