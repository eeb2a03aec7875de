"""Rate-limit view of a single GitHub response.

Reference: https://docs.github.com/en/rest/using-the-rest-api/rate-limits-for-the-rest-api
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping


def _float_header(headers: Mapping[str, str], name: str) -> float | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    # "inf" and "nan" parse as floats but are never real header values
    return number if math.isfinite(number) else None


def _int_header(headers: Mapping[str, str], name: str) -> int | None:
    number = _float_header(headers, name)
    return None if number is None else int(number)


def _retry_after_seconds(headers: Mapping[str, str]) -> float | None:
    # HTTP-date form is not used by GitHub
    seconds = _float_header(headers, "retry-after")
    return None if seconds is None else max(0.0, seconds)


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate-limit headers of one response, parsed once.

    Never cached across calls: each response gets its own snapshot.
    """

    limit: int | None = None
    remaining: int | None = None
    reset_at: int | None = None  # unix epoch seconds
    used: int | None = None
    resource: str | None = None
    retry_after: float | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitSnapshot":
        """Build a snapshot from response headers.

        ``headers`` must do case-insensitive lookups (``httpx.Headers`` does).
        """
        return cls(
            limit=_int_header(headers, "x-ratelimit-limit"),
            remaining=_int_header(headers, "x-ratelimit-remaining"),
            reset_at=_int_header(headers, "x-ratelimit-reset"),
            used=_int_header(headers, "x-ratelimit-used"),
            resource=headers.get("x-ratelimit-resource"),
            retry_after=_retry_after_seconds(headers),
        )

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.limit, self.remaining, self.reset_at, self.used, self.retry_after)
        )

    @property
    def signals_rate_limit(self) -> bool:
        """True when the response says to wait before trying again.

        GitHub sends ``X-RateLimit-Reset`` on every response, so a reset time
        only counts when the remaining quota is exhausted or not reported.
        """
        if self.retry_after is not None:
            return True
        if self.reset_at is None:
            return False
        return self.remaining is None or self.remaining <= 0

    def wait_seconds(self, now: float) -> float | None:
        """Seconds to wait before the next attempt, or None without a reset signal."""
        if not self.signals_rate_limit:
            return None
        if self.retry_after is not None:
            return self.retry_after
        return max(0.0, self.reset_at - now)

    def reset_datetime(self, now: float) -> datetime | None:
        wait = self.wait_seconds(now)
        if wait is None:
            return None
        timestamp = self.reset_at if self.retry_after is None and self.reset_at is not None else now + wait
        try:
            return datetime.fromtimestamp(timestamp, tz=timezone.utc)
        except (OverflowError, ValueError, OSError):
            # Beyond what the platform can represent
            return None


def format_reset_time(reset_at: datetime | None) -> str:
    """Human-readable reset time for error messages."""
    if reset_at is None:
        return "unknown"
    return reset_at.strftime("%Y-%m-%d %H:%M:%S UTC")
