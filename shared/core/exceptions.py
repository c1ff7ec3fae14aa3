from typing import Any, Optional

from shared.utils.app_status_code import AppStatusCode


class ServiceException(Exception):
    """Base error raised by services; mapped to a JSON response by the API layer."""

    http_status: int = 400
    app_status_code: str = AppStatusCode.OPERATION_FAILED
    default_message: str = "Operation failed"

    def __init__(self, message: Optional[str] = None, errors: Optional[Any] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationException(ServiceException):
    http_status = 400
    app_status_code = AppStatusCode.VALIDATION_FAILED
    default_message = "Validation failed"


class NotFoundException(ServiceException):
    http_status = 404
    app_status_code = AppStatusCode.RECORD_NOT_FOUND
    default_message = "Not found"


class InternalServerException(ServiceException):
    http_status = 500
    app_status_code = AppStatusCode.INTERNAL_ERROR
    default_message = "Server error"
