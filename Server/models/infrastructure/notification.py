"""
Watchpost Server - Notification Model

Dataclass for a message shown to a user on the next rendered page.
"""

from datetime import datetime, timezone
from dataclasses import dataclass, field


@dataclass
class Notification:
    """A pending user-visible message"""
    level: str  # "success" or "error"
    message: str
    created_at_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
