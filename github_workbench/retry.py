"""Retry policy for GitHub requests, kept free of I/O and timers.

Each attempt produces an outcome (``Success``, ``RetryableFailure`` or
``TerminalFailure``). ``next_step`` turns that outcome plus the attempt
number into what the executor does next: ``Succeeded``, ``Waiting`` or
``Failed``. The executor is "attempting" in between.
"""

from dataclasses import dataclass
from typing import Union

import httpx

from .errors import (
    ErrorKind,
    RateLimitError,
    ServerError,
    error_for_status,
)
from .rate_limit import RateLimitSnapshot, format_reset_time

MAX_RETRIES = 3
BACKOFF_BASE_SECONDS = 0.5


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = MAX_RETRIES
    backoff_base: float = BACKOFF_BASE_SECONDS

    def backoff(self, attempt: int) -> float:
        """Exponential delay after a failed ``attempt`` (1-based): 1s, 2s, 4s..."""
        return self.backoff_base * 2**attempt


@dataclass(frozen=True)
class Success:
    response: httpx.Response


@dataclass(frozen=True)
class RetryableFailure:
    kind: ErrorKind
    delay: float
    # Raised as-is if this was the last permitted attempt
    error: BaseException


@dataclass(frozen=True)
class TerminalFailure:
    error: BaseException


AttemptOutcome = Union[Success, RetryableFailure, TerminalFailure]


@dataclass(frozen=True)
class Succeeded:
    response: httpx.Response


@dataclass(frozen=True)
class Waiting:
    delay: float
    kind: ErrorKind


@dataclass(frozen=True)
class Failed:
    error: BaseException


RetryStep = Union[Succeeded, Waiting, Failed]


def error_details(response: httpx.Response) -> tuple[str, dict | None]:
    """Pull GitHub's error message out of a response body, if it has one."""
    message = response.reason_phrase or "Request failed"
    if not response.content:
        return message, None
    try:
        body = response.json()
    except ValueError:
        return message, None
    if isinstance(body, dict):
        return str(body.get("message") or message), body
    return message, None


def classify_response(
    response: httpx.Response,
    attempt: int,
    policy: RetryPolicy,
    now: float,
) -> AttemptOutcome:
    """Decide what a completed HTTP exchange means for the retry loop."""
    status = response.status_code
    if 200 <= status < 300:
        return Success(response)

    message, details = error_details(response)

    if status == 401:
        return TerminalFailure(
            error_for_status(status, f"GitHub access token expired or invalid: {message}", details)
        )

    if status in (403, 429):
        snapshot = RateLimitSnapshot.from_headers(response.headers)
        wait = snapshot.wait_seconds(now)
        if wait is not None:
            reset_at = snapshot.reset_datetime(now)
            error = RateLimitError(
                f"GitHub API rate limit exceeded. Resets at {format_reset_time(reset_at)}.",
                status=status,
                details=details,
                reset_at=reset_at,
            )
            return RetryableFailure(ErrorKind.RATE_LIMIT, wait, error)
        if status == 429:
            # Throttled without saying for how long
            error = RateLimitError(
                "GitHub API rate limit exceeded. Resets at unknown.",
                status=status,
                details=details,
            )
            return RetryableFailure(ErrorKind.RATE_LIMIT, policy.backoff(attempt), error)
        return TerminalFailure(error_for_status(status, f"GitHub API forbidden: {message}", details))

    if status >= 500:
        error = ServerError(
            f"GitHub API server error {status}: {message} "
            f"(max retries exceeded after {policy.max_retries} attempts)",
            status=status,
            details=details,
        )
        return RetryableFailure(ErrorKind.SERVER, policy.backoff(attempt), error)

    return TerminalFailure(error_for_status(status, f"GitHub API error {status}: {message}", details))


def classify_transport_error(
    exc: httpx.TransportError,
    attempt: int,
    policy: RetryPolicy,
) -> RetryableFailure:
    """Network-level failures are retried; the original exception is kept."""
    return RetryableFailure(ErrorKind.TRANSPORT, policy.backoff(attempt), exc)


def next_step(outcome: AttemptOutcome, attempt: int, policy: RetryPolicy) -> RetryStep:
    if isinstance(outcome, Success):
        return Succeeded(outcome.response)
    if isinstance(outcome, TerminalFailure):
        return Failed(outcome.error)
    if attempt >= policy.max_retries:
        return Failed(outcome.error)
    return Waiting(outcome.delay, outcome.kind)
