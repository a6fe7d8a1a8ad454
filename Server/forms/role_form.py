"""
Watchpost Server - Role Form

Form for creating and editing a role. Converts between form fields and
the INI values of the role's section in roles.ini.
"""

from typing import Dict, Optional

import app_config
from forms.form import Form, FormField
from forms.validators import InArrayValidator
from managers.role_manager import JoinList, SplitList


class RoleForm(Form):
    """
    Role name, members, granted permissions and restrictions
    """

    def __init__(self, submit_label: str = "Save Role",
                 permissions: Optional[Dict[str, str]] = None,
                 restrictions: Optional[Dict[str, str]] = None):
        super().__init__("form_config_role", submit_label)
        self.permissions = permissions if permissions is not None else app_config.KNOWN_PERMISSIONS
        self.restrictions = restrictions if restrictions is not None else app_config.KNOWN_RESTRICTIONS
        # Keys of a loaded role that have no field, written back unchanged
        self.unknown_values: Dict[str, str] = {}
        self.Create()

    def Create(self) -> None:
        self.AddField(FormField(
            name="name",
            label="Role Name",
            required=True,
            helptext="The name of the role"
        ))
        self.AddField(FormField(
            name="users",
            label="Users",
            type="textarea",
            helptext="Comma-separated list of users that are assigned to the role"
        ))
        self.AddField(FormField(
            name="groups",
            label="Groups",
            type="textarea",
            helptext="Comma-separated list of groups that are assigned to the role"
        ))
        self.AddField(FormField(
            name="permissions",
            label="Permissions Set",
            type="multiselect",
            value=[],
            options=dict(self.permissions),
            helptext="The permissions to grant. You may select more than one permission",
            validators=[InArrayValidator(self.permissions)]
        ))
        for restriction, description in self.restrictions.items():
            self.AddField(FormField(
                name=restriction,
                label=restriction,
                helptext=description
            ))

    def Load(self, name: str, values: Dict[str, str]) -> None:
        """
        Pre-fill the form with an existing role

        Args:
            name: Name of the role
            values: The role's INI values
        """
        self.GetField("name").value = name
        self.GetField("users").value = values.get("users", "")
        self.GetField("groups").value = values.get("groups", "")
        self.GetField("permissions").value = SplitList(values.get("permissions", ""))
        for restriction in self.restrictions:
            self.GetField(restriction).value = values.get(restriction, "")
        self.unknown_values = {key: value for key, value in values.items() if key not in self.fields}

    def GetRoleName(self) -> str:
        return (self.GetValue("name") or "").strip()

    def GetRoleValues(self) -> Dict[str, str]:
        """
        Get the INI values of the role, empty values are left out

        Keys of the loaded role that the form has no field for are kept.

        Returns:
            dict: e.g. {"users": "alice, bob", "permissions": "config/*"}
        """
        values = dict(self.unknown_values)
        values.update({
            "users": JoinList(SplitList(self.GetValue("users") or "")),
            "groups": JoinList(SplitList(self.GetValue("groups") or "")),
            "permissions": JoinList(self.GetValue("permissions") or []),
        })
        for restriction in self.restrictions:
            values[restriction] = (self.GetValue(restriction) or "").strip()

        return {key: value for key, value in values.items() if value}


class ConfirmRemovalForm(Form):
    """Form that only consists of a submit button"""

    def __init__(self, submit_label: str = "Confirm Removal"):
        super().__init__("form_confirm_removal", submit_label)
