"""Client for the message board HTTP API."""
from .client import BoardClient
from .errors import (
    BoardError,
    ValidationError,
    AuthRequired,
    Forbidden,
    ServerRejected,
    NetworkFailure,
)

__all__ = [
    "BoardClient",
    "BoardError",
    "ValidationError",
    "AuthRequired",
    "Forbidden",
    "ServerRejected",
    "NetworkFailure",
]
