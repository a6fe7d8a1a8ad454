"""
Watchpost Server - Route Helpers

Template rendering and the dependencies that hand stores to the routes.
"""

import logging
from pathlib import Path
from typing import Dict

from fastapi import HTTPException, Request
from fastapi.templating import Jinja2Templates

import app_config
import notifications
from config_store import IniConfigStore
from exceptions import PersistenceFailure
from managers.role_manager import RoleManager

# Create logger
logger = logging.getLogger(__name__)

# Get the directory where server.py is located
script_dir = Path(__file__).parent.parent

# Initialize Jinja2 templates
templates = Jinja2Templates(directory=str(script_dir / "templates"))


def RenderPage(request: Request, username: str, template_name: str, context: dict, status_code: int = 200):
    """
    Render a page with the user's pending notifications

    Args:
        request: FastAPI request object
        username: Authenticated user
        template_name: Template file in templates/
        context: Template variables
        status_code: HTTP status of the response

    Returns:
        TemplateResponse: Rendered page
    """
    page_context = {
        "username": username,
        "notifications": notifications.PopNotifications(username),
    }
    page_context.update(context)
    return templates.TemplateResponse(request, template_name, page_context, status_code=status_code)


# ==================== Dependencies ====================

def GetRoleManager() -> RoleManager:
    """
    Dependency providing a role manager over roles.ini

    A new manager is built for every request so staged changes never
    leak into other requests.
    """
    try:
        return RoleManager(IniConfigStore(app_config.ROLES_FILE))
    except PersistenceFailure as e:
        logger.error(f"Error loading roles: {e.message}")
        raise HTTPException(status_code=500, detail="Failed to load roles")


def GetDatabaseManager():
    """Dependency providing the preferences database"""
    from database import db_manager
    return db_manager


def GetGlobalConfig() -> Dict[str, str]:
    """Dependency providing the [global] section of config.ini"""
    try:
        return IniConfigStore(app_config.CONFIG_FILE).GetSection("global")
    except PersistenceFailure as e:
        logger.error(f"Error loading global configuration: {e.message}")
        raise HTTPException(status_code=500, detail="Failed to load configuration")
