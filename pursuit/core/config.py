"""Configuration management for Pursuit.

Loads configuration from environment variables and .env file.
Provides validation and sensible defaults.

Usage:
    from pursuit.core.config import get_config, validate_config

    config = get_config()
    issues = validate_config(config)
    if issues:
        for issue in issues:
            print(f"Config issue: {issue}")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pursuit.core.exceptions import ConfigurationError

# Cadence bounds shared with the assignment forms
MIN_CADENCE_DAYS = 1
MAX_CADENCE_DAYS = 90
DEFAULT_CADENCE_DAYS = 10


@dataclass
class Config:
    """Application configuration.

    Attributes:
        db_path: Path to SQLite database file
        log_path: Directory for log files
        default_cadence_days: Business days between touches for new assignments
        app_password: Shared password for the web login (not checked here)
        debug: Enable debug mode
    """

    db_path: Path = field(default_factory=lambda: Path.home() / ".pursuit" / "pursuit.db")
    log_path: Path = field(default_factory=lambda: Path.home() / ".pursuit" / "logs")
    default_cadence_days: int = DEFAULT_CADENCE_DAYS
    app_password: Optional[str] = None
    debug: bool = False


def load_env_file(path: Path) -> dict[str, str]:
    """Parse .env file.

    Handles:
        - KEY=VALUE format
        - Comments (lines starting with #)
        - Blank lines
        - Quoted values

    Args:
        path: Path to .env file

    Returns:
        Dictionary of environment variables
    """
    env_vars: dict[str, str] = {}

    if not path.exists():
        return env_vars

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()

                if value and value[0] in ('"', "'") and value[-1] == value[0]:
                    value = value[1:-1]

                if key:
                    env_vars[key] = value

    return env_vars


def _get_path(key: str, default: Path, env_vars: dict[str, str]) -> Path:
    """Get path from environment, expanding ~ and resolving."""
    value = os.environ.get(key) or env_vars.get(key)
    if value:
        return Path(value).expanduser().resolve()
    return default


def _get_str(key: str, env_vars: dict[str, str]) -> Optional[str]:
    """Get string from environment."""
    return os.environ.get(key) or env_vars.get(key) or None


def _get_bool(key: str, default: bool, env_vars: dict[str, str]) -> bool:
    """Get boolean from environment."""
    value = os.environ.get(key) or env_vars.get(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _get_int(key: str, default: int, env_vars: dict[str, str]) -> int:
    """Get integer from environment.

    Raises:
        ConfigurationError: If the value is set but not an integer
    """
    value = os.environ.get(key) or env_vars.get(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value.strip())
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e


DEFAULT_DB_PATH = Path.home() / ".pursuit" / "pursuit.db"
DEFAULT_LOG_PATH = Path.home() / ".pursuit" / "logs"


def load_config(env_file: Optional[Path] = None) -> Config:
    """Load configuration from environment and .env file.

    Priority:
        1. Environment variables (highest)
        2. .env file
        3. Default values (lowest)

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If a numeric setting cannot be parsed
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    env_vars = load_env_file(Path(env_file))

    return Config(
        db_path=_get_path("PURSUIT_DB_PATH", DEFAULT_DB_PATH, env_vars),
        log_path=_get_path("PURSUIT_LOG_PATH", DEFAULT_LOG_PATH, env_vars),
        default_cadence_days=_get_int(
            "PURSUIT_DEFAULT_CADENCE", DEFAULT_CADENCE_DAYS, env_vars
        ),
        app_password=_get_str("APP_PASSWORD", env_vars),
        debug=_get_bool("PURSUIT_DEBUG", False, env_vars),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration.

    Checks:
        - Database and log directories exist or can be created
        - Directories are writable
        - Default cadence is within the allowed range
        - Login password is set

    Args:
        config: Configuration to validate

    Returns:
        List of issues (empty if valid)
    """
    issues: list[str] = []

    db_dir = config.db_path.parent
    try:
        db_dir.mkdir(parents=True, exist_ok=True)
        if not os.access(db_dir, os.W_OK):
            issues.append(f"CRITICAL: Database directory not writable: {db_dir}")
    except OSError as e:
        issues.append(f"CRITICAL: Cannot create database directory {db_dir}: {e}")

    try:
        config.log_path.mkdir(parents=True, exist_ok=True)
        if not os.access(config.log_path, os.W_OK):
            issues.append(f"Log directory not writable: {config.log_path}")
    except OSError as e:
        issues.append(f"Cannot create log directory {config.log_path}: {e}")

    if not MIN_CADENCE_DAYS <= config.default_cadence_days <= MAX_CADENCE_DAYS:
        issues.append(
            f"PURSUIT_DEFAULT_CADENCE must be between {MIN_CADENCE_DAYS} and "
            f"{MAX_CADENCE_DAYS} business days, got {config.default_cadence_days}. "
            "New assignments will use the nearest allowed value."
        )

    if not config.app_password:
        issues.append("APP_PASSWORD is not set. The web login will reject every attempt.")

    return issues


# Singleton config
_config: Optional[Config] = None


def get_config() -> Config:
    """Return cached configuration singleton.

    Loads configuration on first call, returns cached version thereafter.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached configuration.

    Used primarily for testing.
    """
    global _config
    _config = None
