"""
Watchpost Server - Role Workflows

Create, update and remove workflows for roles. Each workflow owns its form,
applies a submission to the RoleManager, saves, and returns a FormResult.
Callers decide about notifications and redirects:

- success: payload["message"] is the success notification
- failure with errors: redisplay the form (create/update) or show the
  errors as notifications (remove)
- failure without errors: saving failed, nothing is notified
"""

import logging

from exceptions import InvalidNameError
from forms.form import RequestParams
from forms.role_form import ConfirmRemovalForm, RoleForm
from managers.role_manager import RoleManager
from models.infrastructure import FormResult

logger = logging.getLogger(__name__)


class CreateRoleWorkflow:
    """Adds a new role"""

    def __init__(self, role_manager: RoleManager):
        self.role_manager = role_manager
        self.form = RoleForm(submit_label="Create Role")

    def Submit(self, params: RequestParams) -> FormResult:
        """
        Validate the submitted role and add it

        Args:
            params: Request parameters

        Returns:
            FormResult: Outcome, payload holds the role name on success
        """
        if not self.form.IsValid(params):
            return FormResult.Failed()

        name = self.form.GetRoleName()
        try:
            self.role_manager.Add(name, self.form.GetRoleValues())
        except InvalidNameError as e:
            self.form.AddError(e.message)
            return FormResult.Failed(e.message)

        if not self.role_manager.Save():
            return FormResult.Failed()

        logger.info(f"Created role '{name}'")
        return FormResult(success=True, payload={"name": name, "message": "Role created"})


class UpdateRoleWorkflow:
    """
    Edits an existing role, renaming it when the name field changed

    Raises InvalidNameError on construction if the role does not exist.
    """

    def __init__(self, role_manager: RoleManager, name: str):
        self.role_manager = role_manager
        self.name = name
        self.form = RoleForm(submit_label="Update Role")
        self.form.Load(name, role_manager.Load(name))

    def Submit(self, params: RequestParams) -> FormResult:
        """
        Validate the submitted role and update it

        Args:
            params: Request parameters

        Returns:
            FormResult: Outcome, payload holds the old and new role name on success
        """
        if not self.form.IsValid(params):
            return FormResult.Failed()

        new_name = self.form.GetRoleName()
        try:
            self.role_manager.Update(new_name, self.form.GetRoleValues(), self.name)
        except InvalidNameError as e:
            self.form.AddError(e.message)
            return FormResult.Failed(e.message)

        if not self.role_manager.Save():
            return FormResult.Failed()

        if new_name != self.name:
            logger.info(f"Renamed role '{self.name}' to '{new_name}'")
        else:
            logger.info(f"Updated role '{new_name}'")
        return FormResult(
            success=True,
            payload={"name": new_name, "old_name": self.name, "message": "Role updated"}
        )


class RemoveRoleWorkflow:
    """
    Removes a role after confirmation

    Raises InvalidNameError on construction if the role does not exist.
    """

    def __init__(self, role_manager: RoleManager, name: str):
        self.role_manager = role_manager
        self.name = name
        role_manager.Load(name)
        self.form = ConfirmRemovalForm(submit_label="Remove Role")

    def Submit(self, params: RequestParams) -> FormResult:
        try:
            self.role_manager.Remove(self.name)
        except InvalidNameError as e:
            return FormResult.Failed(e.message)

        if not self.role_manager.Save():
            return FormResult.Failed()

        logger.info(f"Removed role '{self.name}'")
        return FormResult(success=True, payload={"name": self.name, "message": "Role removed"})
