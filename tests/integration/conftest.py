"""Integration test fixtures: real executor and client, fake GitHub over httpx.MockTransport."""

import httpx
import pytest

from github_workbench.auth import StaticTokenProvider
from github_workbench.client import GitHubApiClient
from github_workbench.settings import Settings

NOW = 1_700_000_000.0


class FakeGitHub:
    """Serves queued responses (or raises queued exceptions) in order.

    Records every request, every requested sleep and every activity event.
    """

    def __init__(self):
        self.now = NOW
        self.responses = []
        self.requests: list[httpx.Request] = []
        self.delays: list[float] = []
        self.events = []

    def queue(self, *items):
        self.responses.extend(items)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def sleep(self, seconds: float):
        self.delays.append(seconds)

    def clock(self) -> float:
        return self.now

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def settings():
    return Settings(
        github_token=None,
        github_api_url="https://api.github.com",
        max_retries=3,
        backoff_base_seconds=0.5,
    )


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def client(github, settings):
    return GitHubApiClient(
        StaticTokenProvider("ghp_test_token"),
        settings=settings,
        http_client=github.http_client(),
        sleep=github.sleep,
        clock=github.clock,
        on_event=github.events.append,
    )
