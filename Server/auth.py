"""
Watchpost Server - Authentication Utilities

Users are authenticated by the web server in front of Watchpost, which
passes the user name in a trusted header (REMOTE_USER convention).
This module only reads that name for the routes.
"""

import logging

from fastapi import HTTPException, Request, status

import app_config

logger = logging.getLogger(__name__)


def GetRemoteUser(request: Request) -> str:
    """
    Get the name of the authenticated user from the request

    Args:
        request: FastAPI request object

    Returns:
        str: User name, empty string if the header is missing
    """
    return request.headers.get(app_config.REMOTE_USER_HEADER, "").strip()


def RequireRemoteUser(request: Request) -> str:
    """
    Dependency to require an authenticated user

    Raises:
        HTTPException: 401 if the fronting web server did not pass a user
    """
    username = GetRemoteUser(request)
    if not username:
        logger.warning(f"Rejected request to {request.url.path} without {app_config.REMOTE_USER_HEADER} header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return username
