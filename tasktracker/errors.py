"""Domain errors raised by the services.

None of these know about HTTP; ``tasktracker.error_handlers`` maps them to
status codes.
"""


class TaskTrackerError(Exception):
    """Base class for every error the services raise on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskTrackerError):
    """Bad input: malformed field, duplicate email, rejected upload."""

    def __init__(self, message: str, fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


class InvalidUpdateFieldsError(ValidationError):
    """An update payload named a field outside the allow-list."""

    def __init__(self, invalid_fields):
        invalid = sorted(invalid_fields)
        super().__init__(f"Invalid updates: {', '.join(invalid)}", fields=invalid)


class InvalidCredentialsError(TaskTrackerError):
    def __init__(self):
        # identical for unknown email and wrong password
        super().__init__("Unable to login")


class UnauthenticatedError(TaskTrackerError):
    def __init__(self, message: str = "Please authenticate."):
        super().__init__(message)


class InvalidTokenError(TaskTrackerError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    def __init__(self):
        super().__init__("Token has expired")


class NotFoundError(TaskTrackerError):
    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")
        self.resource = resource


class InternalError(TaskTrackerError):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
