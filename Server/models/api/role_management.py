"""
Watchpost Server - Role Management API Models

Pydantic models for the role listing endpoint.
"""

from typing import Dict, List
from pydantic import BaseModel


class RoleInfo(BaseModel):
    """A role as returned by the API"""
    name: str
    users: List[str] = []
    groups: List[str] = []
    permissions: List[str] = []
    restrictions: Dict[str, str] = {}


class RoleListResponse(BaseModel):
    """Response model for listing all roles"""
    success: bool = True
    roles: List[RoleInfo]
