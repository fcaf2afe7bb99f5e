from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class TooManyAttemptsError(UserError):
    """Raised when a client exceeds the allowed number of failed login attempts."""

    def __init__(self, message: str = "Muitas tentativas. Tente novamente mais tarde.") -> None:
        super().__init__(message)


class ConfigurationError(Exception):
    """Raised when required configuration (secret, shared password) is missing.

    The message is logged server-side only, users see a generic text.
    """
