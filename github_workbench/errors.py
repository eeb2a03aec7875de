"""Typed failures raised by the GitHub request layer.

Every failure that leaves the client is either one of these (carrying a
kind, the original HTTP status and the decoded error body) or, for
network-level problems on the final attempt, the original ``httpx``
transport exception.
"""

from datetime import datetime
from enum import Enum


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    VALIDATION = "validation"
    CLIENT = "client"
    TRANSPORT = "transport"


class GitHubApiError(Exception):
    """Base class for classified GitHub API failures."""

    kind: ErrorKind = ErrorKind.CLIENT

    def __init__(self, message: str, status: int | None = None, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details

    def __str__(self) -> str:
        return self.message


class AuthenticationError(GitHubApiError):
    """401: the credential is missing, expired or revoked."""

    kind = ErrorKind.AUTHENTICATION


class AuthorizationError(GitHubApiError):
    """403 without any rate-limit signal."""

    kind = ErrorKind.AUTHORIZATION


class RateLimitError(GitHubApiError):
    """403/429 carrying a reset signal, raised once attempts run out."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str,
        status: int | None = None,
        details: dict | None = None,
        reset_at: datetime | None = None,
    ):
        super().__init__(message, status=status, details=details)
        self.reset_at = reset_at


class ServerError(GitHubApiError):
    kind = ErrorKind.SERVER


class ClientError(GitHubApiError):
    """Any other 4xx; retrying cannot fix the request."""

    kind = ErrorKind.CLIENT


class NotFoundError(ClientError):
    pass


class InvalidParameterError(GitHubApiError, ValueError):
    """Caller input rejected before any request is sent."""

    kind = ErrorKind.VALIDATION


def error_for_status(status: int, message: str, details: dict | None = None) -> GitHubApiError:
    """Map a terminal, non rate-limited HTTP status to its exception type."""
    if status == 401:
        return AuthenticationError(message, status=status, details=details)
    if status == 403:
        return AuthorizationError(message, status=status, details=details)
    if status == 404:
        return NotFoundError(message, status=status, details=details)
    if status >= 500:
        return ServerError(message, status=status, details=details)
    return ClientError(message, status=status, details=details)
