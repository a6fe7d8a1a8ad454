"""
Watchpost Server - Form Validators

Validators raise a WatchpostError subclass when a value is rejected.
"""

from typing import Iterable

from date_formatter import DATE_TOKENS, TIME_TOKENS
from exceptions import InvalidFormatError, InvalidValueError


class FormatStringValidator:
    """
    Accepts format strings made only of the allowed tokens and separators
    """
    KIND = "format"
    TOKENS = ""
    SEPARATORS = ""

    def Validate(self, value: str) -> None:
        """
        Check a format string

        Args:
            value: Format string entered by the user

        Raises:
            InvalidFormatError: If the string contains other characters
        """
        allowed = set(self.TOKENS + self.SEPARATORS)
        invalid = sorted({char for char in value if char not in allowed})
        if invalid:
            raise InvalidFormatError(
                f"Invalid {self.KIND} format '{value}'. Unsupported characters: {' '.join(invalid)}"
            )


class DateFormatValidator(FormatStringValidator):
    KIND = "date"
    TOKENS = DATE_TOKENS
    SEPARATORS = ".,-/ "


class TimeFormatValidator(FormatStringValidator):
    KIND = "time"
    TOKENS = TIME_TOKENS
    SEPARATORS = ":.,-/ "


class InArrayValidator:
    """Accepts only values from a fixed set of choices"""

    def __init__(self, choices: Iterable[str]):
        self.choices = set(choices)

    def Validate(self, value) -> None:
        values = value if isinstance(value, list) else [value]
        for item in values:
            if item not in self.choices:
                raise InvalidValueError(f"'{item}' is not a valid choice")
