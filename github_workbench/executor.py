"""Async request executor: one logical GitHub call, bounded retries."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping

import httpx

from .auth import auth_headers
from .errors import ErrorKind, GitHubApiError
from .rate_limit import RateLimitSnapshot
from .retry import (
    Failed,
    RetryPolicy,
    Succeeded,
    Waiting,
    classify_response,
    classify_transport_error,
    next_step,
)
from .settings import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/vnd.github.v3+json"


@dataclass(frozen=True)
class RequestDescriptor:
    url: str
    method: str = "GET"
    params: Mapping[str, Any] | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class RequestEvent:
    """Sent to the activity hook once per logical call."""

    endpoint: str
    method: str
    status: int | None
    attempts: int
    duration: float
    rate_limit_remaining: int | None = None
    error_kind: ErrorKind | None = None


ActivityHook = Callable[[RequestEvent], None]
Sleep = Callable[[float], Awaitable[None]]


class RequestExecutor:
    """Sends a request, classifying failures and retrying within ``policy``.

    Holds no per-call state, so concurrent calls through one executor never
    wait on each other. ``sleep`` and ``clock`` are injectable for tests.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        policy: RetryPolicy | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.time,
        on_event: ActivityHook | None = None,
    ) -> None:
        self._client = client
        self.policy = policy or RetryPolicy()
        self.user_agent = user_agent
        self._sleep = sleep
        self._clock = clock
        self._on_event = on_event

    def build_headers(self, descriptor: RequestDescriptor, token: str | None) -> dict[str, str]:
        headers = {
            "Accept": ACCEPT_HEADER,
            "User-Agent": self.user_agent,
        }
        headers.update(descriptor.headers)
        headers.update(auth_headers(token))
        return headers

    async def execute(self, descriptor: RequestDescriptor, token: str | None = None) -> httpx.Response:
        """Return the first 2xx response, or raise the terminal failure.

        Raises:
            GitHubApiError: classified HTTP failure (auth, rate limit, server, client)
            httpx.TransportError: network failure on the final attempt, unchanged
        """
        started = time.monotonic()
        status: int | None = None
        remaining: int | None = None
        attempt = 0

        try:
            for attempt in range(1, self.policy.max_retries + 1):
                try:
                    response = await self._client.request(
                        descriptor.method,
                        descriptor.url,
                        params=descriptor.params,
                        headers=self.build_headers(descriptor, token),
                        json=descriptor.body,
                    )
                except httpx.TransportError as exc:
                    status = None
                    outcome = classify_transport_error(exc, attempt, self.policy)
                else:
                    status = response.status_code
                    remaining = RateLimitSnapshot.from_headers(response.headers).remaining
                    outcome = classify_response(response, attempt, self.policy, self._clock())

                step = next_step(outcome, attempt, self.policy)
                if isinstance(step, Succeeded):
                    self._emit(descriptor, status, attempt, started, remaining, None)
                    return step.response
                if isinstance(step, Failed):
                    raise step.error

                logger.warning(
                    "%s %s failed (%s, status %s). Waiting %.1fs before retry %d/%d",
                    descriptor.method,
                    descriptor.url,
                    step.kind.value,
                    status,
                    step.delay,
                    attempt,
                    self.policy.max_retries,
                )
                await self._sleep(step.delay)
        except GitHubApiError as exc:
            self._emit(descriptor, status, attempt, started, remaining, exc.kind)
            logger.error("%s %s failed: %s", descriptor.method, descriptor.url, exc)
            raise
        except httpx.TransportError as exc:
            self._emit(descriptor, None, attempt, started, remaining, ErrorKind.TRANSPORT)
            logger.error("%s %s failed after %d attempts: %r", descriptor.method, descriptor.url, attempt, exc)
            raise

        # Unreachable while max_retries >= 1
        raise GitHubApiError("Max retries exceeded")

    def _emit(
        self,
        descriptor: RequestDescriptor,
        status: int | None,
        attempts: int,
        started: float,
        remaining: int | None,
        error_kind: ErrorKind | None,
    ) -> None:
        event = RequestEvent(
            endpoint=httpx.URL(descriptor.url).path,
            method=descriptor.method,
            status=status,
            attempts=attempts,
            duration=time.monotonic() - started,
            rate_limit_remaining=remaining,
            error_kind=error_kind,
        )
        logger.debug(
            "%s %s -> %s in %.3fs (%d attempts, rate limit remaining %s)",
            event.method,
            event.endpoint,
            event.status,
            event.duration,
            event.attempts,
            event.rate_limit_remaining,
        )
        if self._on_event is None:
            return
        try:
            self._on_event(event)
        except Exception:
            logger.warning("Activity hook raised for %s %s", event.method, event.endpoint, exc_info=True)
