"""
Watchpost Server - Role Manager

Manages role definitions stored in roles.ini. Every role is one INI
section, its keys are the permissions, restrictions and members granted
by the role.

Changes are staged on a copy of the role set. Save() writes the staged
copy and makes it the committed state; a failed Save() discards the
staged changes so memory never disagrees with the file.
"""

import copy
import logging
from typing import Dict, List

from config_store import IniConfigStore
from exceptions import InvalidNameError

# Create logger
logger = logging.getLogger(__name__)

# Characters that would break the [section] header of a role
INVALID_NAME_CHARACTERS = ("\r", "\n", "]")


class RoleManager:
    """
    Adds, updates and removes roles on top of an IniConfigStore
    """

    def __init__(self, config_store: IniConfigStore):
        """
        Initialize role manager from the roles configuration

        Args:
            config_store: Store backed by roles.ini
        """
        self.config_store = config_store
        self._committed: Dict[str, Dict[str, str]] = {
            name: config_store.GetSection(name) for name in config_store.Sections()
        }
        self._staged: Dict[str, Dict[str, str]] = copy.deepcopy(self._committed)

    def GetRoles(self) -> Dict[str, Dict[str, str]]:
        """
        Get all roles including staged changes

        Returns:
            dict: Role name mapped to a copy of its values
        """
        return copy.deepcopy(self._staged)

    def HasRole(self, name: str) -> bool:
        return name in self._staged

    def Load(self, name: str) -> Dict[str, str]:
        """
        Load a role for editing

        Args:
            name: Name of the role

        Returns:
            dict: The role's values

        Raises:
            InvalidNameError: If the role does not exist
        """
        if name not in self._committed:
            raise InvalidNameError(f"Can't load role '{name}'. Role does not exist")
        return dict(self._committed[name])

    def Add(self, name: str, values: Dict[str, str]) -> None:
        """
        Stage a new role

        Args:
            name: Name of the new role
            values: Permissions, restrictions and members of the role

        Raises:
            InvalidNameError: If the name is empty, unusable or already taken
        """
        name = self._CheckName(name)
        if name in self._staged:
            raise InvalidNameError(f"Can't add role '{name}'. Role already exists")

        self._staged[name] = dict(values)

    def Update(self, name: str, values: Dict[str, str], old_name: str) -> None:
        """
        Stage changes to an existing role, renaming it if name differs from old_name

        Args:
            name: New name of the role
            values: New values of the role
            old_name: Current name of the role

        Raises:
            InvalidNameError: If the new name is empty, unusable or taken, or the role does not exist
        """
        name = self._CheckName(name)
        if old_name not in self._staged:
            raise InvalidNameError(f"Can't update role '{old_name}'. Role does not exist")
        if name != old_name and name in self._staged:
            raise InvalidNameError(f"Can't rename role '{old_name}' to '{name}'. Role already exists")

        del self._staged[old_name]
        self._staged[name] = dict(values)

    def Remove(self, name: str) -> None:
        """
        Stage the removal of a role

        Args:
            name: Name of the role

        Raises:
            InvalidNameError: If the role does not exist
        """
        if name not in self._staged:
            raise InvalidNameError(f"Can't remove role '{name}'. Role does not exist")

        del self._staged[name]

    def Save(self) -> bool:
        """
        Persist the staged role set

        Returns:
            bool: True if the roles were written, False if the write failed and
                  the staged changes were discarded
        """
        try:
            self._WriteToStore(self._staged)
            saved = self.config_store.Save()
        except ValueError as e:
            logger.error(f"Can't store roles in {self.config_store.file_path}: {str(e)}")
            saved = False

        if saved:
            self._committed = copy.deepcopy(self._staged)
            return True

        logger.error("Failed to save roles, discarding staged changes")
        self._WriteToStore(self._committed)
        self._staged = copy.deepcopy(self._committed)
        return False

    def _CheckName(self, name: str) -> str:
        """
        Strip a role name and make sure it can be stored as a section of roles.ini

        Raises:
            InvalidNameError: If the name is empty, the parser's default section
                              or contains a line break or "]"
        """
        name = (name or "").strip()
        if not name:
            raise InvalidNameError("Role name must not be empty")
        if name == self.config_store.parser.default_section:
            raise InvalidNameError(f"Can't use '{name}' as role name. The name is reserved")
        if any(char in name for char in INVALID_NAME_CHARACTERS):
            raise InvalidNameError(f"Role name '{name}' must not contain line breaks or ']'")
        return name

    def _WriteToStore(self, roles: Dict[str, Dict[str, str]]) -> None:
        for section in self.config_store.Sections():
            self.config_store.RemoveSection(section)
        for name, values in roles.items():
            self.config_store.SetSection(name, values)


def SplitList(value: str) -> List[str]:
    """
    Split a comma separated INI value into its items

    Args:
        value: e.g. "alice, bob"

    Returns:
        list: Stripped, non-empty items
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def JoinList(items) -> str:
    return ", ".join(item.strip() for item in items if item and item.strip())
