"""Application error taxonomy.

Every error a client can see is an ``AppError``. Each subclass fixes the HTTP
status and the machine-readable ``type`` of the error envelope:

    {"error": {"type": "FORBIDDEN", "message": "..."}, "request_id": "..."}
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "INTERNAL_ERROR"
    default_message: str = "internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "BAD_REQUEST"
    default_message = "bad request"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "UNAUTHORIZED"
    default_message = "unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    error_type = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "FORBIDDEN"
    default_message = "forbidden"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "NOT_FOUND"
    default_message = "not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    error_type = "CONFLICT"
    default_message = "conflict"


class EmailAlreadyExistsError(ConflictError):
    error_type = "EMAIL_ALREADY_EXISTS"
    default_message = "Email address already registered"


class TeamNameTakenError(ConflictError):
    default_message = "team name already in use"


class InternalError(AppError):
    pass


STATUS_ERROR_TYPES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_409_CONFLICT: "CONFLICT",
    status.HTTP_429_TOO_MANY_REQUESTS: "TOO_MANY_REQUESTS",
    status.HTTP_503_SERVICE_UNAVAILABLE: "SERVICE_UNAVAILABLE",
}


def error_type_for_status(status_code: int) -> str:
    return STATUS_ERROR_TYPES.get(status_code, "INTERNAL_ERROR")


def error_body(error_type: str, message: str, request_id: str | None) -> dict[str, object]:
    return {
        "error": {"type": error_type, "message": message},
        "request_id": request_id,
    }
