"""
Error taxonomy shared by the auth, action and store layers.

Every failure the core reports is a ``TodoServiceError`` subclass.  The
HTTP boundary translates them in ``api/errors.py``; nothing below that
layer knows about status codes.
"""

from __future__ import annotations


class TodoServiceError(Exception):
    """Base class for every error kind the core reports to its caller."""

    default_message = "todo service error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ResourceNotFound(TodoServiceError):
    default_message = "todo not found"


class PersistenceFailure(TodoServiceError):
    """Any store-layer fault, constraint violations included."""

    default_message = "database operations failed"


class TokenIssuanceFailure(TodoServiceError):
    default_message = "JWT token creation failed"


class TokenValidationFailure(TodoServiceError):
    default_message = "JWT token decoding failed"


class TokenInvalid(TokenValidationFailure):
    default_message = "token signature or format is invalid"


class TokenExpired(TokenValidationFailure):
    default_message = "token has expired"


class InvalidCredentials(TodoServiceError):
    default_message = "bad credentials"


class Unauthenticated(TodoServiceError):
    """Credential header missing or unusable."""

    default_message = "not authenticated"


class CorruptPasswordHash(RuntimeError):
    """A stored password hash could not be parsed.

    This is a data/configuration fault, never an authentication outcome.
    It is not a ``TodoServiceError`` and reaches the client as a 500.
    """
