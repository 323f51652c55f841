"""
Tagged API errors.

Services and dependencies raise these; `core.responses` maps each one to a
JSON envelope with the matching status code.
"""

from __future__ import annotations


class ApiError(RuntimeError):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None, *, error: str | None = None) -> None:
        self.message = message or self.default_message
        # Optional client-facing detail (e.g. which body fields failed parsing).
        self.error = error
        super().__init__(self.message)


class AuthMissing(ApiError):
    status_code = 401
    default_message = "Authorization token is missing or invalid"


class AuthInvalid(ApiError):
    status_code = 401
    default_message = "Invalid or expired token"


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found"


class Conflict(ApiError):
    status_code = 409
    default_message = "Conflict"


class InternalError(ApiError):
    status_code = 500
