"""
Watchpost Server - Notifications

Messages shown to a user after a redirect. Stored in-memory per user
(no persistence across restarts), drained when the next page renders.
"""

import logging
from typing import Dict, List

from models.infrastructure import Notification

logger = logging.getLogger(__name__)

# In-memory notification storage, keyed by username
_notifications: Dict[str, List[Notification]] = {}


def Success(username: str, message: str) -> None:
    """
    Queue a success message for a user

    Args:
        username: Recipient
        message: Text to show
    """
    _notifications.setdefault(username, []).append(Notification(level="success", message=message))


def Error(username: str, message: str) -> None:
    """
    Queue an error message for a user

    Args:
        username: Recipient
        message: Text to show
    """
    _notifications.setdefault(username, []).append(Notification(level="error", message=message))
    logger.info(f"Error notification for user '{username}': {message}")


def PopNotifications(username: str) -> List[Notification]:
    """
    Remove and return all pending messages of a user

    Args:
        username: Recipient

    Returns:
        list: Pending notifications in the order they were queued
    """
    return _notifications.pop(username, [])
