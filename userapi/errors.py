"""
Service error taxonomy. Each error carries the HTTP status it maps to.
"""


class ServiceError(Exception):
    """Base for errors that the HTTP layer turns into an ErrorResponse."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.__class__.__name__


class DecodeError(ServiceError):
    """Request body is not valid JSON or not a User."""

    status_code = 400
    code = "decode_error"


class ValidationError(ServiceError):
    """Missing or unparseable query parameter, or a required field is absent."""

    status_code = 400
    code = "validation_error"


class NotFoundError(ServiceError):
    status_code = 404
    code = "not_found"

    def __init__(self, message: str = "user not found") -> None:
        super().__init__(message)


class StorageError(ServiceError):
    """Driver or query failure. The message is logged, not sent to clients."""

    status_code = 500
    code = "storage_error"
    public_message = "storage error"
