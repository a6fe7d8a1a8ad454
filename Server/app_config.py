"""
Watchpost Server - Application Configuration

Locations of the configuration files and the choices offered by the forms.
Paths and the authentication header are read from WATCHPOST_* environment
variables, e.g. WATCHPOST_CONFIG_DIR=/etc/watchpost.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Deployment settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_prefix="WATCHPOST_")

    # Directory holding config.ini and roles.ini
    config_dir: Path = Path("config")

    # SQLite database for per-user preferences
    database: str = "database/watchpost.db"

    # Root of the translation catalogs (<locale_dir>/<code>/LC_MESSAGES)
    locale_dir: Path = Path("locale")

    # Header set by the fronting web server after it authenticated the user
    remote_user_header: str = "X-Remote-User"


settings = Settings()

CONFIG_DIR = settings.config_dir

# Global configuration file, [global] section holds the preference defaults
CONFIG_FILE = CONFIG_DIR / "config.ini"

# Role definitions, one section per role
ROLES_FILE = CONFIG_DIR / "roles.ini"

DATABASE_PATH = settings.database

LOCALE_DIR = settings.locale_dir

REMOTE_USER_HEADER = settings.remote_user_header

# Page users are sent to after a role was created, updated or removed
ROLES_REDIRECT_URL = "/security"

# Permissions that can be granted through the role form
KNOWN_PERMISSIONS = {
    "*": "Allow everything",
    "config/*": "Allow config access",
    "monitoring/command/*": "Allow all commands",
    "monitoring/command/schedule-check": "Allow scheduling checks",
    "monitoring/command/acknowledge-problem": "Allow acknowledging problems",
    "monitoring/command/remove-acknowledgement": "Allow removing acknowledgements",
    "monitoring/command/comment/*": "Allow adding and deleting comments",
    "monitoring/command/downtime/*": "Allow scheduling and deleting downtimes",
}

# Restrictions that can be configured through the role form
KNOWN_RESTRICTIONS = {
    "monitoring/filter/objects": "Restrict views to the hosts and services that match the filter",
    "monitoring/blacklist/properties": "Hide the properties of monitored objects that match the filter",
}
