"""
Watchpost Server - INI Configuration Store

Key/value store over an INI file. Sections are role names in roles.ini
and "global" in config.ini.
"""

import configparser
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from exceptions import PersistenceFailure

# Create logger
logger = logging.getLogger(__name__)


class IniConfigStore:
    """
    Reads and writes one INI file

    Keys keep their case (dateFormat stays dateFormat) and values are
    stored verbatim, without interpolation.
    """

    def __init__(self, file_path):
        """
        Initialize the store and load the file if it exists

        Args:
            file_path: Path to the INI file

        Raises:
            PersistenceFailure: If the file exists but can't be read or parsed
        """
        self.file_path = Path(file_path)
        self.parser = self._NewParser()

        if self.file_path.exists():
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    self.parser.read_file(f)
            except (OSError, UnicodeDecodeError, configparser.Error) as e:
                raise PersistenceFailure(f"Failed to read configuration file {self.file_path}: {str(e)}") from e
            logger.debug(f"Loaded configuration from {self.file_path}")

    @staticmethod
    def _NewParser() -> configparser.ConfigParser:
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str
        return parser

    def Sections(self) -> List[str]:
        """Return all section names in file order"""
        return self.parser.sections()

    def HasSection(self, section: str) -> bool:
        return self.parser.has_section(section)

    def GetSection(self, section: str) -> Dict[str, str]:
        """
        Get all keys of a section

        Args:
            section: Section name

        Returns:
            dict: Copy of the section's key/value pairs, empty if the section is missing
        """
        if not self.parser.has_section(section):
            return {}
        return dict(self.parser.items(section))

    def Get(self, section: str, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a single value

        Args:
            section: Section name
            key: Key inside the section
            default: Returned when the section or key is missing

        Returns:
            str: Stored value or default
        """
        return self.parser.get(section, key, fallback=default)

    def Set(self, section: str, key: str, value: str) -> None:
        if not self.parser.has_section(section):
            self.parser.add_section(section)
        self.parser.set(section, key, value)

    def SetSection(self, section: str, values: Dict[str, str]) -> None:
        """
        Replace a section with the given key/value pairs

        Args:
            section: Section name
            values: New content of the section
        """
        if self.parser.has_section(section):
            self.parser.remove_section(section)
        self.parser.add_section(section)
        for key, value in values.items():
            self.parser.set(section, key, str(value))

    def Remove(self, section: str, key: str) -> None:
        if self.parser.has_section(section):
            self.parser.remove_option(section, key)

    def RemoveSection(self, section: str) -> None:
        self.parser.remove_section(section)

    def Write(self) -> None:
        """
        Write the current content back to the INI file

        The file is written to a temporary file first and then moved over
        the original so readers never see a half written file.

        Raises:
            PersistenceFailure: If the file could not be written
        """
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=str(self.file_path.parent),
                prefix=f".{self.file_path.name}.",
                suffix=".tmp"
            )
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    self.parser.write(f)
                os.replace(temp_path, self.file_path)
            except (OSError, ValueError):
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise
        except (OSError, ValueError) as e:
            raise PersistenceFailure(f"Failed to write configuration file {self.file_path}: {str(e)}") from e

        logger.debug(f"Saved configuration to {self.file_path}")

    def Save(self) -> bool:
        """
        Write the current content back to the INI file

        Returns:
            bool: True if the file was written, False otherwise
        """
        try:
            self.Write()
        except PersistenceFailure as e:
            logger.error(e.message)
            return False
        return True
