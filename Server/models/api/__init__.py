"""
Watchpost Server - API Models Package

This package contains Pydantic models for the JSON API endpoints.
"""

from models.api.role_management import RoleInfo, RoleListResponse

__all__ = [
    'RoleInfo',
    'RoleListResponse',
]
