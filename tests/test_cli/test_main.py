"""Tests for the command line entry point."""

import logging
import sqlite3

import pytest

import pursuit.core.logging as log_module
from pursuit import __version__
from pursuit.core.config import reset_config
from pursuit.db.database import Database
from pursuit.db.models import Contact, HealthSystem, Opportunity
from pursuit_cli import main


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point configuration at a seeded temp database."""
    db_path = tmp_path / "cli.db"
    monkeypatch.setenv("PURSUIT_DB_PATH", str(db_path))
    monkeypatch.setenv("PURSUIT_LOG_PATH", str(tmp_path / "logs"))
    monkeypatch.setenv("APP_PASSWORD", "secret")
    monkeypatch.chdir(tmp_path)
    reset_config()

    db = Database(str(db_path))
    db.initialize()
    hs_id = db.create_health_system(HealthSystem(name="Mercy Health"))
    opp_id = db.create_opportunity(Opportunity(health_system_id=hs_id, product="Quality"))
    contact_id = db.create_contact(Contact(health_system_id=hs_id, name="Grace", role="CNO"))
    db.assign_contact(contact_id, opp_id)
    db.close()

    root_logger = logging.getLogger(log_module.ROOT_LOGGER_NAME)
    existing = list(root_logger.handlers)
    log_module._logging_initialized = False

    yield {"contact_id": contact_id}

    for handler in list(root_logger.handlers):
        if handler not in existing:
            root_logger.removeHandler(handler)
            handler.close()
    log_module._logging_initialized = False
    reset_config()


class TestMain:
    """Test CLI dispatch."""

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_todo(self, cli_env, capsys):
        """Never-contacted Grace is due on a Wednesday."""
        assert main(["--todo", "--today", "2026-02-04"]) == 0
        out = capsys.readouterr().out
        assert "Due today (1, 0 rolled over)" in out
        assert "Mercy Health / Quality: Grace (never contacted" in out

    def test_weekend_todo_previews_monday(self, cli_env, capsys):
        assert main(["--today", "2026-02-07"]) == 0
        out = capsys.readouterr().out
        assert "All caught up!" in out
        assert "Due Monday, February 09 (1)" in out

    def test_dashboard(self, cli_env, capsys):
        assert main(["--dashboard", "--today", "2026-02-04"]) == 0
        assert "Emailed this week: 0/1 (0%)" in capsys.readouterr().out

    def test_prompt(self, cli_env, capsys):
        assert main(["--prompt", str(cli_env["contact_id"])]) == 0
        assert "The email is to Grace, CNO at Mercy Health." in capsys.readouterr().out

    def test_prompt_unknown_contact(self, cli_env):
        assert main(["--prompt", "999"]) == 1

    def test_bad_date(self):
        with pytest.raises(SystemExit):
            main(["--today", "02/04/2026"])

    def test_explicit_todo_matches_default(self, cli_env, capsys):
        """--todo and no view flag print the same list."""
        main(["--todo", "--today", "2026-02-04"])
        explicit = capsys.readouterr().out
        main(["--today", "2026-02-04"])
        assert capsys.readouterr().out == explicit

    def test_views_are_exclusive(self):
        """Only one view flag may be given."""
        with pytest.raises(SystemExit):
            main(["--todo", "--dashboard"])

    def test_dashboard_read_failure(self, cli_env, tmp_path, capsys):
        """An unreadable outreach row fails the command with exit code 1."""
        conn = sqlite3.connect(tmp_path / "cli.db")
        conn.execute("PRAGMA ignore_check_constraints = ON")
        conn.execute(
            """INSERT INTO outreach_logs (contact_id, contact_method, contact_date)
               VALUES (?, 'fax', '2026-02-04')""",
            (cli_env["contact_id"],),
        )
        conn.commit()
        conn.close()

        assert main(["--dashboard", "--today", "2026-02-04"]) == 1
        assert "Accounts:" not in capsys.readouterr().out
