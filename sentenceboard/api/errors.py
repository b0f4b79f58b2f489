"""Errors raised by the board client."""

from typing import Optional


class BoardError(Exception):
    """Base class for message board errors."""
    pass


class ValidationError(BoardError):
    """A required field was empty; nothing was sent."""
    pass


class AuthRequired(BoardError):
    """The server answered 401."""
    pass


class Forbidden(BoardError):
    """The server answered 403."""
    pass


class ServerRejected(BoardError):
    """Any other non-2xx answer, carrying the server's error message."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class NetworkFailure(BoardError):
    """The request never produced a usable response."""
    pass
