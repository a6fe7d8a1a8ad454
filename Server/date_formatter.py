"""
Watchpost Server - Date Formatter

Renders timestamps with PHP date() style format strings, the format
language users enter for their preferred date and time formats.
A backslash renders the following character literally.
"""

import calendar
from datetime import datetime, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

# Tokens that render a part of the date
DATE_TOKENS = "dDjlNSwzWFmMntLoYy"

# Tokens that render a part of the time
TIME_TOKENS = "aABgGhHisuv"

# Tokens that render timezone information
TIMEZONE_TOKENS = "eIOPTZ"

# Tokens that render a complete date and time
FULL_DATE_TIME_TOKENS = "crU"

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December"
]


def _OrdinalSuffix(day: int) -> str:
    if 11 <= day <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _UtcOffset(dt: datetime, separator: str = "") -> str:
    offset = dt.utcoffset()
    seconds = int(offset.total_seconds()) if offset is not None else 0
    sign = "+" if seconds >= 0 else "-"
    hours, minutes = divmod(abs(seconds) // 60, 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _Swatch(dt: datetime) -> str:
    utc = dt.astimezone(timezone.utc)
    seconds = (utc.hour * 3600 + utc.minute * 60 + utc.second + 3600) % 86400
    return f"{int(seconds / 86.4):03d}"


def _RenderToken(token: str, dt: datetime) -> str:
    hour12 = dt.hour % 12 or 12

    if token == "d":
        return f"{dt.day:02d}"
    if token == "D":
        return DAY_NAMES[dt.weekday()][:3]
    if token == "j":
        return str(dt.day)
    if token == "l":
        return DAY_NAMES[dt.weekday()]
    if token == "N":
        return str(dt.isoweekday())
    if token == "S":
        return _OrdinalSuffix(dt.day)
    if token == "w":
        return str(dt.isoweekday() % 7)
    if token == "z":
        return str(dt.timetuple().tm_yday - 1)
    if token == "W":
        return f"{dt.isocalendar()[1]:02d}"
    if token == "F":
        return MONTH_NAMES[dt.month - 1]
    if token == "m":
        return f"{dt.month:02d}"
    if token == "M":
        return MONTH_NAMES[dt.month - 1][:3]
    if token == "n":
        return str(dt.month)
    if token == "t":
        return str(calendar.monthrange(dt.year, dt.month)[1])
    if token == "L":
        return "1" if calendar.isleap(dt.year) else "0"
    if token == "o":
        return str(dt.isocalendar()[0])
    if token == "Y":
        return str(dt.year)
    if token == "y":
        return f"{dt.year % 100:02d}"
    if token == "a":
        return "am" if dt.hour < 12 else "pm"
    if token == "A":
        return "AM" if dt.hour < 12 else "PM"
    if token == "B":
        return _Swatch(dt)
    if token == "g":
        return str(hour12)
    if token == "G":
        return str(dt.hour)
    if token == "h":
        return f"{hour12:02d}"
    if token == "H":
        return f"{dt.hour:02d}"
    if token == "i":
        return f"{dt.minute:02d}"
    if token == "s":
        return f"{dt.second:02d}"
    if token == "u":
        return f"{dt.microsecond:06d}"
    if token == "v":
        return f"{dt.microsecond // 1000:03d}"
    if token == "e":
        return getattr(dt.tzinfo, "key", None) or dt.tzname() or "UTC"
    if token == "I":
        dst = dt.dst()
        return "1" if dst else "0"
    if token == "O":
        return _UtcOffset(dt)
    if token == "P":
        return _UtcOffset(dt, ":")
    if token == "T":
        return dt.tzname() or "UTC"
    if token == "Z":
        offset = dt.utcoffset()
        return str(int(offset.total_seconds()) if offset is not None else 0)
    if token == "c":
        return Format(dt, "Y-m-d\\TH:i:sP")
    if token == "r":
        return Format(dt, "D, d M Y H:i:s O")
    if token == "U":
        return str(int(dt.timestamp()))
    return token


def Format(timestamp: Union[int, float, datetime], format_string: str,
           tz: Optional[Union[str, tzinfo]] = None) -> str:
    """
    Format a timestamp according to a PHP date() format string

    Args:
        timestamp: Unix timestamp or datetime (naive datetimes are taken as local time)
        format_string: Format such as "d/m/Y" or "g:i A"
        tz: Timezone name or tzinfo to render in, local timezone if None

    Returns:
        str: Formatted date/time
    """
    if isinstance(tz, str):
        tz = ZoneInfo(tz)

    if isinstance(timestamp, datetime):
        dt = timestamp if timestamp.tzinfo is not None else timestamp.astimezone()
        if tz is not None:
            dt = dt.astimezone(tz)
    else:
        dt = datetime.fromtimestamp(timestamp, tz) if tz is not None \
            else datetime.fromtimestamp(timestamp).astimezone()

    result = []
    escaped = False
    for char in format_string:
        if escaped:
            result.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            result.append(_RenderToken(char, dt))

    return "".join(result)
