"""
Watchpost Server - Role Management Endpoints

List, create, update and remove the roles defined in roles.ini.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

import app_config
import notifications
from auth import RequireRemoteUser
from exceptions import InvalidNameError, MissingParameterError
from forms.form import RequestParams
from managers.role_manager import RoleManager, SplitList
from models.api import RoleInfo, RoleListResponse
from role_workflows import CreateRoleWorkflow, RemoveRoleWorkflow, UpdateRoleWorkflow
from routes.common import GetRoleManager, RenderPage

# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


def _RequireRole(params: RequestParams) -> str:
    """
    Get the "role" parameter of update and remove requests

    Raises:
        HTTPException: 400 if the parameter is missing
    """
    try:
        return params.GetRequiredParam("role")
    except MissingParameterError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


def _DescribeRoles(role_manager: RoleManager) -> List[RoleInfo]:
    roles = []
    for name, values in role_manager.GetRoles().items():
        restrictions = {
            key: value for key, value in values.items()
            if key not in ("users", "groups", "permissions")
        }
        roles.append(RoleInfo(
            name=name,
            users=SplitList(values.get("users", "")),
            groups=SplitList(values.get("groups", "")),
            permissions=SplitList(values.get("permissions", "")),
            restrictions=restrictions
        ))
    return roles


# ==================== Role Management ====================

@router.get("/security", response_class=HTMLResponse, tags=["Security"])
async def list_roles(
    request: Request,
    username: str = Depends(RequireRemoteUser),
    role_manager: RoleManager = Depends(GetRoleManager)
):
    """
    List all roles with their members and permissions

    Args:
        request: FastAPI request object
        username: Authenticated user from dependency
        role_manager: Role manager from dependency

    Returns:
        HTML role list
    """
    return RenderPage(request, username, "roles.html", {"roles": _DescribeRoles(role_manager)})


@router.get("/api/roles", response_model=RoleListResponse, tags=["Security"])
async def api_list_roles(
    username: str = Depends(RequireRemoteUser),
    role_manager: RoleManager = Depends(GetRoleManager)
):
    """
    List all roles as JSON

    Returns:
        RoleListResponse: Roles with their members, permissions and restrictions
    """
    roles = _DescribeRoles(role_manager)
    logger.info(f"User '{username}' listed all roles")
    return RoleListResponse(roles=roles)


@router.api_route("/security/new", methods=["GET", "POST"], tags=["Security"])
async def new_role(
    request: Request,
    username: str = Depends(RequireRemoteUser),
    role_manager: RoleManager = Depends(GetRoleManager)
):
    """
    Display and process the form for a new role

    Returns:
        Redirect to the role list on success, the form otherwise
    """
    params = await RequestParams.FromRequest(request)
    workflow = CreateRoleWorkflow(role_manager)

    try:
        if request.method == "POST" and workflow.form.IsSubmitted(params):
            result = workflow.Submit(params)
            if result.success:
                notifications.Success(username, result.payload["message"])
                logger.info(f"User '{username}' created role '{result.payload['name']}'")
                return RedirectResponse(url=app_config.ROLES_REDIRECT_URL, status_code=303)

    except Exception as e:
        logger.error(f"Error creating role: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to create role")

    return RenderPage(request, username, "role_form.html", {"title": "New Role", "form": workflow.form})


@router.api_route("/security/update", methods=["GET", "POST"], tags=["Security"])
async def update_role(
    request: Request,
    username: str = Depends(RequireRemoteUser),
    role_manager: RoleManager = Depends(GetRoleManager)
):
    """
    Display and process the form for editing the role given by the "role" parameter

    Returns:
        Redirect to the role list on success, the form otherwise
    """
    params = await RequestParams.FromRequest(request)
    name = _RequireRole(params)

    try:
        workflow = UpdateRoleWorkflow(role_manager, name)
    except InvalidNameError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    try:
        if request.method == "POST" and workflow.form.IsSubmitted(params):
            result = workflow.Submit(params)
            if result.success:
                notifications.Success(username, result.payload["message"])
                logger.info(f"User '{username}' updated role '{result.payload['name']}'")
                return RedirectResponse(url=app_config.ROLES_REDIRECT_URL, status_code=303)

    except Exception as e:
        logger.error(f"Error updating role '{name}': {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update role")

    return RenderPage(request, username, "role_form.html", {
        "title": f"Update Role {name}",
        "name": name,
        "form": workflow.form
    })


@router.api_route("/security/remove", methods=["GET", "POST"], tags=["Security"])
async def remove_role(
    request: Request,
    username: str = Depends(RequireRemoteUser),
    role_manager: RoleManager = Depends(GetRoleManager)
):
    """
    Ask for confirmation and remove the role given by the "role" parameter

    Returns:
        Redirect to the role list once the removal was confirmed, the confirmation form otherwise
    """
    params = await RequestParams.FromRequest(request)
    name = _RequireRole(params)

    try:
        workflow = RemoveRoleWorkflow(role_manager, name)
    except InvalidNameError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    try:
        if request.method == "POST" and workflow.form.IsSubmitted(params):
            result = workflow.Submit(params)
            for error in result.errors:
                notifications.Error(username, error)
            if result.success:
                notifications.Success(username, result.payload["message"])
                logger.info(f"User '{username}' removed role '{name}'")
                return RedirectResponse(url=app_config.ROLES_REDIRECT_URL, status_code=303)

    except Exception as e:
        logger.error(f"Error removing role '{name}': {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to remove role")

    return RenderPage(request, username, "confirm_removal.html", {
        "title": f"Remove Role {name}",
        "name": name,
        "form": workflow.form
    })
