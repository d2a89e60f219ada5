"""Error taxonomy shared by services and routers.

Services raise these; ``main.py`` turns them into the
``{"success": false, "error": ...}`` envelope with the matching status.
"""
from typing import Optional

from fastapi import status


class TaskboardError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class UnauthenticatedError(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "No token, authorization denied"


class InvalidTokenError(TaskboardError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Token is not valid"


class InvalidCredentialsError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class IncorrectPasswordError(InvalidCredentialsError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Old password is incorrect"


class NotFoundError(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


class UnknownUserError(NotFoundError):
    # Login reports an unregistered email as a bad request.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User does not exist"


class InternalError(TaskboardError):
    pass


class InvalidTaskIdError(ValidationError):
    # Delete reports a missing task id with 402.
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_message = "Please provide a valid task id"
