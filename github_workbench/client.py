"""GitHub REST resource fetchers built on the retrying request executor."""

import asyncio
import logging
import time
from typing import Any, Callable, Mapping, TypeVar

import httpx

from .auth import SettingsTokenProvider, TokenProvider
from .errors import InvalidParameterError
from .executor import ActivityHook, RequestDescriptor, RequestExecutor, Sleep
from .links import page_from_url, parse_link_header
from .models import Issue, IssueComment, Page, PageMeta, PullRequest, Repository, User
from .retry import RetryPolicy
from .settings import Settings, get_settings
from .templates import generate_korean_comment
from .validation import (
    MAX_PER_PAGE,
    build_query,
    split_repo_id,
    validate_issue_number,
    validate_owner_repo,
    validate_page,
    validate_state,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _json_body(response: httpx.Response) -> Any:
    """Decoded JSON body, or None for 204, empty or undecodable bodies."""
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.warning("Ignoring malformed JSON body from %s", response.request.url)
        return None


def _json_list(response: httpx.Response) -> list[dict[str, Any]]:
    body = _json_body(response)
    if not isinstance(body, list):
        return []
    return [item for item in body if isinstance(item, dict)]


class GitHubApiClient:
    """Typed, paginated access to the GitHub endpoints the workbench uses.

    Credentials come from ``token_provider`` once per call. Retries, backoff
    and error classification live in the ``RequestExecutor``.

    Example:
        >>> async with GitHubApiClient(StaticTokenProvider("ghp_...")) as client:
        ...     page = await client.fetch_repository_issues("octocat", "hello-world")
        ...     if page.has_more:
        ...         page = await client.fetch_repository_issues("octocat", "hello-world", page.next_cursor)
    """

    def __init__(
        self,
        token_provider: TokenProvider | None = None,
        *,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        executor: RequestExecutor | None = None,
        on_event: ActivityHook | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        settings = settings or get_settings()
        self.base_url = settings.github_api_url.rstrip("/")
        self.token_provider = token_provider or SettingsTokenProvider()

        self._owns_http_client = http_client is None and executor is None
        if executor is None:
            if http_client is None:
                http_client = httpx.AsyncClient(timeout=settings.timeout_seconds, follow_redirects=True)
            executor = RequestExecutor(
                http_client,
                policy=RetryPolicy(
                    max_retries=settings.max_retries,
                    backoff_base=settings.backoff_base_seconds,
                ),
                user_agent=settings.user_agent,
                sleep=sleep,
                clock=clock,
                on_event=on_event,
            )
        self._http_client = http_client
        self.executor = executor

    async def __aenter__(self) -> "GitHubApiClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()

    async def _send(self, method: str, path: str, params: Mapping[str, Any] | None = None, body: Any = None):
        token = self.token_provider.get_token()
        descriptor = RequestDescriptor(url=f"{self.base_url}{path}", method=method, params=params, body=body)
        return await self.executor.execute(descriptor, token)

    async def _fetch_page(
        self,
        path: str,
        page: int,
        per_page: int,
        query: Mapping[str, Any],
        parse: Callable[[dict[str, Any]], T],
        keep: Callable[[T], bool] | None = None,
    ) -> Page[T]:
        response = await self._send("GET", path, params=query)

        items = [parse(item) for item in _json_list(response)]
        if keep is not None:
            items = [item for item in items if keep(item)]

        links = parse_link_header(response.headers.get("link"))
        has_more = "next" in links
        return Page(
            items=items,
            has_more=has_more,
            next_cursor=page + 1 if has_more else None,
            meta=PageMeta(
                page=page,
                per_page=per_page,
                links=links,
                last_page=page_from_url(links.get("last")),
            ),
        )

    # --- Repositories ---

    async def fetch_user_repositories(self, page: int = 1, per_page: int = 30, **filters: Any) -> Page[Repository]:
        """List repositories the authenticated user can access, most recently updated first."""
        validate_page(page, per_page)
        query = build_query(page, per_page, defaults={"type": "all"}, **filters)
        return await self._fetch_page("/user/repos", page, per_page, query, Repository.from_api)

    async def fetch_all_repositories(
        self,
        max_pages: int = 10,
        per_page: int = MAX_PER_PAGE,
        **filters: Any,
    ) -> list[Repository]:
        """Follow the repository cursor until it runs out or ``max_pages`` is reached."""
        if max_pages < 1:
            raise InvalidParameterError(f"max_pages must be >= 1, got {max_pages!r}")

        repositories: list[Repository] = []
        page: int | None = 1
        fetched = 0
        while page is not None and fetched < max_pages:
            result = await self.fetch_user_repositories(page, per_page, **filters)
            repositories.extend(result.items)
            page = result.next_cursor
            fetched += 1
        return repositories

    async def fetch_user_profile(self) -> User:
        response = await self._send("GET", "/user")
        data = _json_body(response)
        return User.from_api(data if isinstance(data, dict) else {})

    # --- Issues and pull requests ---

    async def fetch_repository_issues(
        self,
        owner: str,
        repo: str,
        page: int = 1,
        per_page: int = 30,
        state: str = "open",
        **filters: Any,
    ) -> Page[Issue]:
        """List a repository's issues, leaving out the pull requests GitHub mixes in."""
        owner, repo = validate_owner_repo(owner, repo)
        validate_page(page, per_page)
        validate_state(state)
        query = build_query(page, per_page, defaults={"state": state}, **filters)
        return await self._fetch_page(
            f"/repos/{owner}/{repo}/issues",
            page,
            per_page,
            query,
            Issue.from_api,
            keep=lambda issue: not issue.is_pull_request,
        )

    async def fetch_repository_pull_requests(
        self,
        owner: str,
        repo: str,
        page: int = 1,
        per_page: int = 30,
        state: str = "open",
        **filters: Any,
    ) -> Page[PullRequest]:
        owner, repo = validate_owner_repo(owner, repo)
        validate_page(page, per_page)
        validate_state(state)
        query = build_query(page, per_page, defaults={"state": state}, **filters)
        return await self._fetch_page(f"/repos/{owner}/{repo}/pulls", page, per_page, query, PullRequest.from_api)

    # --- Issue comments ---

    async def fetch_issue_comments(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        page: int = 1,
        per_page: int = 30,
    ) -> Page[IssueComment]:
        owner, repo = validate_owner_repo(owner, repo)
        validate_issue_number(issue_number)
        validate_page(page, per_page)
        # The comments endpoint only understands since/page/per_page
        query = {"page": page, "per_page": per_page}
        return await self._fetch_page(
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            page,
            per_page,
            query,
            IssueComment.from_api,
        )

    async def create_issue_comment(self, owner: str, repo: str, issue_number: int, body: str) -> IssueComment:
        owner, repo = validate_owner_repo(owner, repo)
        validate_issue_number(issue_number)
        if not body or not body.strip():
            raise InvalidParameterError("comment body must not be empty")

        response = await self._send(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            body={"body": body},
        )
        data = _json_body(response)
        comment = IssueComment.from_api(data if isinstance(data, dict) else {})
        logger.info("Created comment %s on %s/%s#%d", comment.id, owner, repo, issue_number)
        return comment

    async def create_korean_issue_comment(
        self,
        repo_id: str,
        issue_number: int,
        comment_type: str,
        variables: Mapping[str, str | None] | None = None,
    ) -> IssueComment:
        """Post one of the Korean workflow comments to ``repo_id`` ("owner/repo")."""
        owner, repo = split_repo_id(repo_id)
        body = generate_korean_comment(comment_type, variables)
        return await self.create_issue_comment(owner, repo, issue_number, body)
