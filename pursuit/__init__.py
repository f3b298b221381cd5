"""Pursuit Source Package.

Outreach CRM for health-system sales: accounts, solution opportunities,
contacts, and a business-day cadence that decides who is due today.

Layers:
    - core: Configuration, logging, exceptions
    - db: Database and models
    - engine: Business logic (calendar, cadence, to-do, email prompts)
    - content: Generated content (dashboard statistics)
"""

__version__ = "0.1.0"
