"""
Watchpost Server - Preference Endpoints

General preferences of the authenticated user.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

import app_config
import notifications
from auth import RequireRemoteUser
from forms.form import RequestParams
from forms.preference_form import PreferenceForm
from managers.database_manager import DatabaseManager
from routes.common import GetDatabaseManager, GetGlobalConfig, RenderPage
from translator import GetAvailableLocaleCodes, GetSystemTimezone, ListTimezones

# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


@router.api_route("/preferences", methods=["GET", "POST"], tags=["Preferences"])
async def general_preferences(
    request: Request,
    username: str = Depends(RequireRemoteUser),
    db_manager: DatabaseManager = Depends(GetDatabaseManager),
    global_config: Dict[str, str] = Depends(GetGlobalConfig)
):
    """
    Display and process the general preferences form

    A POST without the submit button comes from an auto-submitted toggle
    and only re-renders the form.

    Returns:
        Redirect back to the form once saved, the form otherwise
    """
    params = await RequestParams.FromRequest(request)

    try:
        form = PreferenceForm(
            params,
            db_manager.GetUserPreferences(username),
            global_config,
            locale_codes=GetAvailableLocaleCodes(app_config.LOCALE_DIR),
            timezones=ListTimezones(),
            system_timezone=GetSystemTimezone()
        )

        if request.method == "POST" and form.IsSubmitted(params) and form.IsValid(params):
            if db_manager.SaveUserPreferences(username, form.GetPreferences()):
                notifications.Success(username, "Preferences updated successfully")
                logger.info(f"User '{username}' updated preferences")
                return RedirectResponse(url="/preferences", status_code=303)

    except Exception as e:
        logger.error(f"Error processing preferences of user '{username}': {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to process preferences")

    return RenderPage(request, username, "preferences.html", {"title": "Preferences", "form": form})
