"""
Domain exceptions raised by the service layer.

Every exception carries a human `message`, a machine `code` (e.g.
"ROOM_ALREADY_BOOKED") and optional `details`. The API exception handler and
the `handle_errors` view decorator translate them into responses.
"""


class BaseApplicationException(Exception):
    default_message = "Something went wrong"

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseApplicationException):
    default_message = "Invalid input"


class NotFoundError(BaseApplicationException):
    default_message = "Not found"

    def __init__(self, resource_type=None, resource_id=None, message=None, code="NOT_FOUND", details=None):
        self.resource_type = resource_type
        self.resource_id = resource_id
        if message is None and resource_type:
            message = f"{resource_type} {resource_id} not found"
        super().__init__(message, code, details)


class PermissionDeniedError(BaseApplicationException):
    default_message = "You are not allowed to do that"


class BusinessLogicError(BaseApplicationException):
    default_message = "The operation is not allowed in the current state"


class ConflictError(BusinessLogicError):
    """The requested slot or record is already taken (overlapping booking, second payment)"""
    default_message = "Conflicting record exists"
