"""
errors.py — Domain errors raised by the service layer.
Routes map them onto HTTP status codes.
"""


class UnlateError(Exception):
    """Base class for all service-level failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(UnlateError):
    """A required field is missing or out of range."""

    status_code = 400


class NotFoundError(UnlateError):
    """The record does not exist or does not belong to the caller."""

    status_code = 404
