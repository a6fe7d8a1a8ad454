"""
Watchpost Server - Locale and Timezone Enumeration

Provides the choices of the language and timezone preferences.
"""

import logging
import os
from pathlib import Path
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

# Create logger
logger = logging.getLogger(__name__)

# Locale used when neither the user nor the global configuration sets one
DEFAULT_LOCALE = "en_US"


def GetAvailableLocaleCodes(locale_dir) -> List[str]:
    """
    List the locales a translation catalog is installed for

    A locale is available if <locale_dir>/<code>/LC_MESSAGES exists.

    Args:
        locale_dir: Root directory of the translation catalogs

    Returns:
        list: Sorted locale codes, e.g. ["de_DE", "fr_FR"]
    """
    locale_dir = Path(locale_dir)
    if not locale_dir.is_dir():
        logger.debug(f"Locale directory {locale_dir} does not exist")
        return []

    return sorted(
        entry.name for entry in locale_dir.iterdir()
        if entry.is_dir() and (entry / "LC_MESSAGES").is_dir()
    )


def ListTimezones() -> List[str]:
    """Return all IANA timezone identifiers, sorted"""
    return sorted(available_timezones())


def IsValidTimezone(name: str) -> bool:
    if not name:
        return False
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def GetSystemTimezone() -> str:
    """
    Determine the timezone the server runs in

    Checks the TZ environment variable first, then the /etc/localtime link.

    Returns:
        str: IANA identifier, "UTC" if it cannot be determined
    """
    tz_name = os.environ.get("TZ", "").lstrip(":")
    if IsValidTimezone(tz_name):
        return tz_name

    localtime = Path("/etc/localtime")
    if localtime.is_symlink():
        target = str(localtime.resolve())
        marker = "zoneinfo/"
        if marker in target:
            tz_name = target.split(marker, 1)[1]
            if IsValidTimezone(tz_name):
                return tz_name

    return "UTC"
