from __future__ import annotations


class NotekeeperError(Exception):
    """Base class for domain errors raised by services.

    Plain ``ValueError`` stays the validation error, these cover the rest.
    """

    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationError(NotekeeperError):
    default_message = "Invalid email or password"


class NotFoundError(NotekeeperError):
    default_message = "Note not found"


class ConflictError(NotekeeperError):
    default_message = "Username or email already exists"


class FeatureUnavailableError(NotekeeperError):
    default_message = "Feature is not available"


class DatabaseNotReadyError(NotekeeperError):
    default_message = "Database is not available. Please try again later."
