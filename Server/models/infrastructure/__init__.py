"""
Watchpost Server - Infrastructure Models Package

This package contains dataclass models for infrastructure components
like notifications and form results.
"""

from models.infrastructure.notification import Notification
from models.infrastructure.form_result import FormResult

__all__ = [
    'Notification',
    'FormResult',
]
