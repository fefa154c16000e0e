"""
Domain errors raised by the slot services.

Each error carries the HTTP status it maps to; the API layer renders them
as ``{"detail": message}`` through a single exception handler.
"""


class SlotServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SlotServiceError):
    status_code = 404


class ValidationError(SlotServiceError):
    status_code = 400


class InvalidRangeError(ValidationError):
    pass


class PermissionDeniedError(SlotServiceError):
    status_code = 403


class ConflictError(SlotServiceError):
    status_code = 409
