"""
Watchpost Server - Exceptions

Error taxonomy shared by the role manager, the forms and the routes.
"""


class WatchpostError(Exception):
    """Base exception for Watchpost Server errors"""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class InvalidNameError(WatchpostError):
    """Raised when a role name is empty, already taken or unknown"""
    pass


class InvalidFormatError(WatchpostError):
    """Raised when a date or time format string contains unsupported tokens"""
    pass


class MissingParameterError(WatchpostError):
    """Raised when a required request parameter is absent"""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Required parameter '{parameter}' missing")


class PersistenceFailure(WatchpostError):
    """Raised by stores when reading from or writing to durable storage fails"""
    pass


class InvalidValueError(WatchpostError):
    """Raised when a form value is missing or not one of the offered choices"""
    pass
