"""SQLite database connection and operations for Pursuit.

Provides:
    - Connection management with WAL mode
    - Schema creation
    - CRUD operations for accounts, opportunities, contacts,
      assignments and outreach logs

Usage:
    from pursuit.db.database import Database

    db = Database()
    db.initialize()

    account_id = db.create_health_system(HealthSystem(name="Mercy Health"))
"""

import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, TypeVar

from pursuit.core.config import DEFAULT_CADENCE_DAYS, get_config
from pursuit.core.exceptions import DatabaseError, ValidationError
from pursuit.core.logging import get_logger
from pursuit.db.models import (
    Contact,
    ContactMethod,
    ContactOpportunity,
    HealthSystem,
    Opportunity,
    OpportunityStatus,
    OutreachLog,
    normalize_cadence,
    parse_status,
)

logger = get_logger(__name__)

T = TypeVar("T")


SCHEMA_VERSION = 1


def _to_date(value: Any) -> Optional[date]:
    """Read a DATE column stored as ISO text. Malformed values read as None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        # DATE affinity does not reject text like "02/03/2026"
        return None


def _to_datetime(value: Any) -> Optional[datetime]:
    """Read a TIMESTAMP column written by CURRENT_TIMESTAMP."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _clean_text(value: Optional[str]) -> Optional[str]:
    """Blank strings are stored as NULL."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class Database:
    """SQLite database manager.

    Attributes:
        db_path: Path to database file
        default_cadence_days: Cadence used when an assignment gives none
    """

    def __init__(self, db_path: Optional[str] = None, default_cadence_days: Optional[int] = None):
        """Initialize database.

        Args:
            db_path: Path to database file. Use ":memory:" for in-memory.
                    Defaults to config path.
            default_cadence_days: Defaults to config value when db_path is
                    taken from config, otherwise 10.
        """
        if db_path is None:
            config = get_config()
            self.db_path = str(config.db_path)
            if default_cadence_days is None:
                default_cadence_days = config.default_cadence_days
        else:
            self.db_path = db_path

        self.default_cadence_days = normalize_cadence(
            default_cadence_days if default_cadence_days is not None else DEFAULT_CADENCE_DAYS
        )
        self._conn: Optional[sqlite3.Connection] = None

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            try:
                if self.db_path != ":memory:":
                    Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

                self._conn = sqlite3.connect(self.db_path)
                self._conn.row_factory = sqlite3.Row

                self._conn.execute("PRAGMA foreign_keys = ON")

                if self.db_path != ":memory:":
                    self._conn.execute("PRAGMA journal_mode = WAL")

            except sqlite3.Error as e:
                raise DatabaseError(f"Cannot connect to database: {e}") from e

        return self._conn

    @staticmethod
    def _lastrowid(cursor: sqlite3.Cursor) -> int:
        """Extract lastrowid from cursor (always set after INSERT in SQLite)."""
        row_id = cursor.lastrowid
        assert row_id is not None, "lastrowid was None after INSERT"
        return row_id

    def close(self) -> None:
        """Close database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def initialize(self) -> None:
        """Create schema if not exists."""
        conn = self._get_connection()

        try:
            conn.executescript(self._get_schema_ddl())
            conn.commit()
            logger.info("Database initialized", extra={"context": {"path": self.db_path}})
        except sqlite3.Error as e:
            raise DatabaseError(f"Cannot initialize database: {e}") from e

    def _get_schema_ddl(self) -> str:
        """Return complete schema DDL."""
        return """
        -- Health Systems (accounts)
        CREATE TABLE IF NOT EXISTS health_systems (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_health_systems_name ON health_systems(name);

        -- Opportunities (account + product pairings)
        CREATE TABLE IF NOT EXISTS opportunities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            health_system_id INTEGER NOT NULL,
            product TEXT NOT NULL,
            status TEXT DEFAULT 'prospect',
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (health_system_id) REFERENCES health_systems(id) ON DELETE CASCADE,
            UNIQUE(health_system_id, product)
        );

        CREATE INDEX IF NOT EXISTS idx_opportunities_status ON opportunities(status);

        -- Contacts
        CREATE TABLE IF NOT EXISTS contacts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            health_system_id INTEGER NOT NULL,
            name TEXT NOT NULL,
            role TEXT,
            email TEXT,
            phone TEXT,
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (health_system_id) REFERENCES health_systems(id) ON DELETE CASCADE
        );

        CREATE INDEX IF NOT EXISTS idx_contacts_health_system ON contacts(health_system_id);

        -- Contact <-> Opportunity assignments
        CREATE TABLE IF NOT EXISTS contact_opportunities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            contact_id INTEGER NOT NULL,
            opportunity_id INTEGER NOT NULL,
            cadence_days INTEGER NOT NULL DEFAULT 10,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (contact_id) REFERENCES contacts(id) ON DELETE CASCADE,
            FOREIGN KEY (opportunity_id) REFERENCES opportunities(id) ON DELETE CASCADE,
            UNIQUE(contact_id, opportunity_id)
        );

        CREATE INDEX IF NOT EXISTS idx_contact_opportunities_contact
            ON contact_opportunities(contact_id);
        CREATE INDEX IF NOT EXISTS idx_contact_opportunities_opportunity
            ON contact_opportunities(opportunity_id);

        -- Outreach Logs
        CREATE TABLE IF NOT EXISTS outreach_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            contact_id INTEGER NOT NULL,
            opportunity_id INTEGER,
            contact_method TEXT NOT NULL CHECK (contact_method IN ('call', 'email', 'meeting')),
            contact_date DATE NOT NULL DEFAULT CURRENT_DATE,
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (contact_id) REFERENCES contacts(id) ON DELETE CASCADE,
            FOREIGN KEY (opportunity_id) REFERENCES opportunities(id) ON DELETE SET NULL
        );

        CREATE INDEX IF NOT EXISTS idx_outreach_logs_contact_date
            ON outreach_logs(contact_id, contact_date DESC);
        CREATE INDEX IF NOT EXISTS idx_outreach_logs_opportunity ON outreach_logs(opportunity_id);

        -- Schema Version
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        INSERT OR IGNORE INTO schema_version (version) VALUES (1);
        """

    # =========================================================================
    # ROW-TO-MODEL HELPERS
    # =========================================================================

    def _row_to_health_system(self, row: sqlite3.Row) -> HealthSystem:
        return HealthSystem(
            id=row["id"],
            name=row["name"],
            notes=row["notes"],
            created_at=_to_datetime(row["created_at"]),
            updated_at=_to_datetime(row["updated_at"]),
        )

    def _row_to_opportunity(self, row: sqlite3.Row) -> Opportunity:
        return Opportunity(
            id=row["id"],
            health_system_id=row["health_system_id"],
            product=row["product"],
            status=parse_status(row["status"]),
            notes=row["notes"],
            created_at=_to_datetime(row["created_at"]),
            updated_at=_to_datetime(row["updated_at"]),
        )

    def _row_to_contact(self, row: sqlite3.Row) -> Contact:
        return Contact(
            id=row["id"],
            health_system_id=row["health_system_id"],
            name=row["name"],
            role=row["role"],
            email=row["email"],
            phone=row["phone"],
            notes=row["notes"],
            created_at=_to_datetime(row["created_at"]),
            updated_at=_to_datetime(row["updated_at"]),
        )

    def _row_to_assignment(self, row: sqlite3.Row) -> ContactOpportunity:
        return ContactOpportunity(
            id=row["id"],
            contact_id=row["contact_id"],
            opportunity_id=row["opportunity_id"],
            cadence_days=row["cadence_days"],
            created_at=_to_datetime(row["created_at"]),
        )

    def _row_to_outreach_log(self, row: sqlite3.Row) -> OutreachLog:
        return OutreachLog(
            id=row["id"],
            contact_id=row["contact_id"],
            opportunity_id=row["opportunity_id"],
            contact_method=ContactMethod(row["contact_method"]),
            contact_date=_to_date(row["contact_date"]),
            notes=row["notes"],
            created_at=_to_datetime(row["created_at"]),
        )

    def _execute_write(self, sql: str, params: tuple, action: str) -> sqlite3.Cursor:
        """Run a single write statement, committing or rolling back."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(sql, params)
            conn.commit()
            return cursor
        except sqlite3.Error as e:
            conn.rollback()
            raise DatabaseError(f"Failed to {action}: {e}") from e

    def _fetch_all(
        self,
        sql: str,
        params: Sequence[Any],
        convert: Callable[[sqlite3.Row], T],
        action: str,
    ) -> list[T]:
        """Run a read query and convert every row.

        Raises:
            DatabaseError: If the query fails or a stored row cannot be read
        """
        try:
            rows = self._get_connection().execute(sql, tuple(params)).fetchall()
            return [convert(row) for row in rows]
        except (sqlite3.Error, ValueError) as e:
            raise DatabaseError(f"Failed to {action}: {e}") from e

    def _fetch_one(
        self,
        sql: str,
        params: Sequence[Any],
        convert: Callable[[sqlite3.Row], T],
        action: str,
    ) -> Optional[T]:
        """Run a read query expected to match at most one row."""
        results = self._fetch_all(sql, params, convert, action)
        return results[0] if results else None

    # =========================================================================
    # HEALTH SYSTEM OPERATIONS
    # =========================================================================

    def create_health_system(self, health_system: HealthSystem) -> int:
        """Create an account record.

        Raises:
            ValidationError: If the name is blank
        """
        name = _clean_text(health_system.name)
        if not name:
            raise ValidationError("Health system name is required")

        cursor = self._execute_write(
            "INSERT INTO health_systems (name, notes) VALUES (?, ?)",
            (name, _clean_text(health_system.notes)),
            "create health system",
        )
        health_system_id = self._lastrowid(cursor)
        logger.info(
            "Health system created",
            extra={"context": {"health_system_id": health_system_id, "name": name}},
        )
        return health_system_id

    def get_health_system(self, health_system_id: int) -> Optional[HealthSystem]:
        """Get account by ID."""
        return self._fetch_one(
            "SELECT * FROM health_systems WHERE id = ?",
            (health_system_id,),
            self._row_to_health_system,
            "get health system",
        )

    def get_health_systems(self) -> list[HealthSystem]:
        """Get all accounts ordered by name."""
        return self._fetch_all(
            "SELECT * FROM health_systems ORDER BY name COLLATE NOCASE",
            (),
            self._row_to_health_system,
            "list health systems",
        )

    def update_health_system(self, health_system: HealthSystem) -> bool:
        """Update account. Returns True if updated."""
        if health_system.id is None:
            return False
        name = _clean_text(health_system.name)
        if not name:
            raise ValidationError("Health system name is required")
        cursor = self._execute_write(
            """UPDATE health_systems SET
               name = ?, notes = ?, updated_at = CURRENT_TIMESTAMP
               WHERE id = ?""",
            (name, _clean_text(health_system.notes), health_system.id),
            "update health system",
        )
        return cursor.rowcount > 0

    def delete_health_system(self, health_system_id: int) -> bool:
        """Delete account and, by cascade, its opportunities and contacts."""
        cursor = self._execute_write(
            "DELETE FROM health_systems WHERE id = ?",
            (health_system_id,),
            "delete health system",
        )
        return cursor.rowcount > 0

    # =========================================================================
    # OPPORTUNITY OPERATIONS
    # =========================================================================

    def create_opportunity(self, opportunity: Opportunity) -> int:
        """Create an opportunity.

        Raises:
            ValidationError: If product is blank
            DatabaseError: If the account already has this product
        """
        product = _clean_text(opportunity.product)
        if not product:
            raise ValidationError("Opportunity product is required")

        cursor = self._execute_write(
            """INSERT INTO opportunities (health_system_id, product, status, notes)
               VALUES (?, ?, ?, ?)""",
            (
                opportunity.health_system_id,
                product,
                opportunity.effective_status.value,
                _clean_text(opportunity.notes),
            ),
            "create opportunity",
        )
        opportunity_id = self._lastrowid(cursor)
        logger.info(
            "Opportunity created",
            extra={"context": {"opportunity_id": opportunity_id, "product": product}},
        )
        return opportunity_id

    def get_opportunity(self, opportunity_id: int) -> Optional[Opportunity]:
        """Get opportunity by ID."""
        return self._fetch_one(
            "SELECT * FROM opportunities WHERE id = ?",
            (opportunity_id,),
            self._row_to_opportunity,
            "get opportunity",
        )

    def get_opportunities(
        self,
        status: Optional[OpportunityStatus] = None,
        health_system_id: Optional[int] = None,
    ) -> list[Opportunity]:
        """Get opportunities ordered by account name, then product.

        Args:
            status: Only this status. NULL status rows match PROSPECT.
            health_system_id: Only this account
        """
        query = """SELECT o.* FROM opportunities o
                   JOIN health_systems h ON o.health_system_id = h.id
                   WHERE 1=1"""
        params: list[Any] = []

        if status is not None:
            if parse_status(status) == OpportunityStatus.PROSPECT:
                query += " AND (o.status IS NULL OR o.status = '' OR o.status = ?)"
            else:
                query += " AND o.status = ?"
            params.append(parse_status(status).value)

        if health_system_id is not None:
            query += " AND o.health_system_id = ?"
            params.append(health_system_id)

        query += " ORDER BY h.name COLLATE NOCASE, o.product COLLATE NOCASE"
        return self._fetch_all(query, params, self._row_to_opportunity, "list opportunities")

    def update_opportunity(self, opportunity: Opportunity) -> bool:
        """Update opportunity. Returns True if updated."""
        if opportunity.id is None:
            return False
        product = _clean_text(opportunity.product)
        if not product:
            raise ValidationError("Opportunity product is required")
        cursor = self._execute_write(
            """UPDATE opportunities SET
               health_system_id = ?, product = ?, status = ?, notes = ?,
               updated_at = CURRENT_TIMESTAMP
               WHERE id = ?""",
            (
                opportunity.health_system_id,
                product,
                opportunity.effective_status.value,
                _clean_text(opportunity.notes),
                opportunity.id,
            ),
            "update opportunity",
        )
        return cursor.rowcount > 0

    def set_opportunity_status(self, opportunity_id: int, status: OpportunityStatus) -> bool:
        """Change status. Non-prospect opportunities leave the to-do list."""
        try:
            new_status = OpportunityStatus(status)
        except ValueError as e:
            raise ValidationError(f"Unknown opportunity status: {status!r}") from e

        cursor = self._execute_write(
            """UPDATE opportunities SET status = ?, updated_at = CURRENT_TIMESTAMP
               WHERE id = ?""",
            (new_status.value, opportunity_id),
            "update opportunity status",
        )
        if cursor.rowcount > 0:
            logger.info(
                "Opportunity status changed",
                extra={
                    "context": {"opportunity_id": opportunity_id, "status": new_status.value}
                },
            )
        return cursor.rowcount > 0

    def delete_opportunity(self, opportunity_id: int) -> bool:
        """Delete opportunity. Its outreach logs are kept, unscoped."""
        cursor = self._execute_write(
            "DELETE FROM opportunities WHERE id = ?",
            (opportunity_id,),
            "delete opportunity",
        )
        return cursor.rowcount > 0

    # =========================================================================
    # CONTACT OPERATIONS
    # =========================================================================

    def create_contact(self, contact: Contact) -> int:
        """Create a contact.

        Raises:
            ValidationError: If name is blank
        """
        name = _clean_text(contact.name)
        if not name:
            raise ValidationError("Contact name is required")

        cursor = self._execute_write(
            """INSERT INTO contacts (health_system_id, name, role, email, phone, notes)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                contact.health_system_id,
                name,
                _clean_text(contact.role),
                _clean_text(contact.email),
                _clean_text(contact.phone),
                _clean_text(contact.notes),
            ),
            "create contact",
        )
        contact_id = self._lastrowid(cursor)
        logger.info(
            "Contact created",
            extra={"context": {"contact_id": contact_id, "name": name}},
        )
        return contact_id

    def get_contact(self, contact_id: int) -> Optional[Contact]:
        """Get contact by ID."""
        return self._fetch_one(
            "SELECT * FROM contacts WHERE id = ?", (contact_id,), self._row_to_contact, "get contact"
        )

    def get_contacts(self, health_system_id: Optional[int] = None) -> list[Contact]:
        """Get contacts ordered by name, optionally for one account."""
        query = "SELECT * FROM contacts"
        params: list[Any] = []
        if health_system_id is not None:
            query += " WHERE health_system_id = ?"
            params.append(health_system_id)
        query += " ORDER BY name COLLATE NOCASE"
        return self._fetch_all(query, params, self._row_to_contact, "list contacts")

    def update_contact(self, contact: Contact) -> bool:
        """Update contact. Returns True if updated."""
        if contact.id is None:
            return False
        name = _clean_text(contact.name)
        if not name:
            raise ValidationError("Contact name is required")
        cursor = self._execute_write(
            """UPDATE contacts SET
               health_system_id = ?, name = ?, role = ?, email = ?, phone = ?, notes = ?,
               updated_at = CURRENT_TIMESTAMP
               WHERE id = ?""",
            (
                contact.health_system_id,
                name,
                _clean_text(contact.role),
                _clean_text(contact.email),
                _clean_text(contact.phone),
                _clean_text(contact.notes),
                contact.id,
            ),
            "update contact",
        )
        return cursor.rowcount > 0

    def delete_contact(self, contact_id: int) -> bool:
        """Delete contact with its assignments and outreach history."""
        cursor = self._execute_write(
            "DELETE FROM contacts WHERE id = ?", (contact_id,), "delete contact"
        )
        return cursor.rowcount > 0

    # =========================================================================
    # ASSIGNMENT OPERATIONS
    # =========================================================================

    def assign_contact(
        self,
        contact_id: int,
        opportunity_id: int,
        cadence_days: Optional[int] = None,
    ) -> int:
        """Assign a contact to an opportunity.

        Re-assigning an existing pair updates its cadence instead of
        creating a duplicate.

        Args:
            contact_id: Contact to assign
            opportunity_id: Opportunity to assign to
            cadence_days: Business days between touches, clamped to [1, 90].
                    None uses the database default.

        Returns:
            Assignment ID
        """
        cadence = normalize_cadence(
            cadence_days if cadence_days is not None else self.default_cadence_days,
            default=self.default_cadence_days,
        )
        self._execute_write(
            """INSERT INTO contact_opportunities (contact_id, opportunity_id, cadence_days)
               VALUES (?, ?, ?)
               ON CONFLICT(contact_id, opportunity_id)
               DO UPDATE SET cadence_days = excluded.cadence_days""",
            (contact_id, opportunity_id, cadence),
            "assign contact",
        )
        assignment = self._fetch_one(
            "SELECT * FROM contact_opportunities WHERE contact_id = ? AND opportunity_id = ?",
            (contact_id, opportunity_id),
            self._row_to_assignment,
            "assign contact",
        )
        logger.info(
            "Contact assigned",
            extra={
                "context": {
                    "contact_id": contact_id,
                    "opportunity_id": opportunity_id,
                    "cadence_days": cadence,
                }
            },
        )
        assert assignment is not None and assignment.id is not None
        return assignment.id

    def get_assignments(
        self,
        opportunity_id: Optional[int] = None,
        contact_id: Optional[int] = None,
    ) -> list[ContactOpportunity]:
        """Get assignments, filtered by opportunity and/or contact."""
        query = "SELECT * FROM contact_opportunities WHERE 1=1"
        params: list[Any] = []
        if opportunity_id is not None:
            query += " AND opportunity_id = ?"
            params.append(opportunity_id)
        if contact_id is not None:
            query += " AND contact_id = ?"
            params.append(contact_id)
        query += " ORDER BY id"
        return self._fetch_all(query, params, self._row_to_assignment, "list assignments")

    def update_assignment_cadence(self, assignment_id: int, cadence_days: Any) -> bool:
        """Change an assignment's cadence. Invalid input falls back to the default."""
        cadence = normalize_cadence(cadence_days, default=self.default_cadence_days)
        cursor = self._execute_write(
            "UPDATE contact_opportunities SET cadence_days = ? WHERE id = ?",
            (cadence, assignment_id),
            "update cadence",
        )
        return cursor.rowcount > 0

    def unassign_contact(self, contact_id: int, opportunity_id: int) -> bool:
        """Remove a contact from an opportunity. History is kept."""
        cursor = self._execute_write(
            "DELETE FROM contact_opportunities WHERE contact_id = ? AND opportunity_id = ?",
            (contact_id, opportunity_id),
            "unassign contact",
        )
        return cursor.rowcount > 0

    # =========================================================================
    # OUTREACH LOG OPERATIONS
    # =========================================================================

    def create_outreach_log(self, log: OutreachLog) -> int:
        """Append an outreach event.

        contact_date defaults to the database's current date.

        Raises:
            ValidationError: If the contact method is not call/email/meeting,
                or contact_date is not a valid date
        """
        try:
            method = ContactMethod(log.contact_method)
        except ValueError as e:
            raise ValidationError(f"Unknown contact method: {log.contact_method!r}") from e

        contact_date = _to_date(log.contact_date)
        if log.contact_date is not None and contact_date is None:
            raise ValidationError(f"Invalid contact date: {log.contact_date!r}")

        if contact_date is None:
            sql = """INSERT INTO outreach_logs (contact_id, opportunity_id, contact_method, notes)
                     VALUES (?, ?, ?, ?)"""
            params: tuple = (log.contact_id, log.opportunity_id, method.value, _clean_text(log.notes))
        else:
            sql = """INSERT INTO outreach_logs
                     (contact_id, opportunity_id, contact_method, contact_date, notes)
                     VALUES (?, ?, ?, ?, ?)"""
            params = (
                log.contact_id,
                log.opportunity_id,
                method.value,
                contact_date.isoformat(),
                _clean_text(log.notes),
            )

        cursor = self._execute_write(sql, params, "create outreach log")
        log_id = self._lastrowid(cursor)
        logger.info(
            "Outreach logged",
            extra={
                "context": {
                    "log_id": log_id,
                    "contact_id": log.contact_id,
                    "method": method.value,
                }
            },
        )
        return log_id

    def get_outreach_logs(
        self,
        contact_id: Optional[int] = None,
        opportunity_id: Optional[int] = None,
        since: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[OutreachLog]:
        """Get outreach history, newest first.

        Args:
            contact_id: Only this contact
            opportunity_id: Only events scoped to this opportunity
            since: Only events on or after this date
            limit: Maximum rows
        """
        query = "SELECT * FROM outreach_logs WHERE 1=1"
        params: list[Any] = []
        if contact_id is not None:
            query += " AND contact_id = ?"
            params.append(contact_id)
        if opportunity_id is not None:
            query += " AND opportunity_id = ?"
            params.append(opportunity_id)
        if since is not None:
            query += " AND contact_date >= ?"
            params.append(since.isoformat())
        query += " ORDER BY contact_date DESC, id DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        return self._fetch_all(query, params, self._row_to_outreach_log, "list outreach logs")

    def get_latest_outreach_by_contact(self) -> dict[int, OutreachLog]:
        """Most recent outreach event per contact.

        Ties on contact_date go to the most recently inserted row.
        """
        latest: dict[int, OutreachLog] = {}
        for log in self.get_outreach_logs():
            if log.contact_id not in latest:
                latest[log.contact_id] = log
        return latest
