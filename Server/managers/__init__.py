"""
Watchpost Server - Managers Package

This package contains manager classes for the preferences database and
the role configuration.
"""

from managers.database_manager import DatabaseManager
from managers.role_manager import RoleManager

__all__ = ['DatabaseManager', 'RoleManager']
