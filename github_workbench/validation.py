"""Pre-flight checks and query building for the resource fetchers.

Nothing here touches the network: bad input fails before a request exists.
"""

from typing import Any, Mapping

from .errors import InvalidParameterError

MAX_PER_PAGE = 100
DEFAULT_PER_PAGE = 30

DEFAULT_QUERY: dict[str, Any] = {
    "page": 1,
    "per_page": DEFAULT_PER_PAGE,
    "sort": "updated",
    "direction": "desc",
}

ISSUE_STATES = ("open", "closed", "all")


def validate_page(page: int, per_page: int) -> None:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidParameterError(f"page must be an integer >= 1, got {page!r}")
    if isinstance(per_page, bool) or not isinstance(per_page, int) or not 1 <= per_page <= MAX_PER_PAGE:
        raise InvalidParameterError(f"per_page must be between 1 and {MAX_PER_PAGE}, got {per_page!r}")


def validate_owner_repo(owner: str, repo: str) -> tuple[str, str]:
    """Return trimmed owner and repo names, rejecting blanks and slashes."""
    owner = (owner or "").strip()
    repo = (repo or "").strip()
    if not owner or not repo:
        raise InvalidParameterError("owner and repo must not be empty")
    if "/" in owner or "/" in repo:
        raise InvalidParameterError(f"owner and repo must not contain '/': {owner!r}, {repo!r}")
    return owner, repo


def split_repo_id(repo_id: str) -> tuple[str, str]:
    """Split an ``owner/repo`` identifier, e.g. "facebook/react"."""
    if not isinstance(repo_id, str) or repo_id.count("/") != 1:
        raise InvalidParameterError(f'Repository ID must be in format "owner/repo", got {repo_id!r}')
    owner, repo = repo_id.split("/")
    return validate_owner_repo(owner, repo)


def validate_issue_number(issue_number: int) -> None:
    if isinstance(issue_number, bool) or not isinstance(issue_number, int) or issue_number < 1:
        raise InvalidParameterError(f"issue number must be a positive integer, got {issue_number!r}")


def validate_state(state: str) -> None:
    if state not in ISSUE_STATES:
        raise InvalidParameterError(f"state must be one of {', '.join(ISSUE_STATES)}, got {state!r}")


def build_query(
    page: int,
    per_page: int,
    defaults: Mapping[str, Any] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Merge the default listing query, endpoint defaults and caller filters.

    Filters passed as None are dropped rather than sent.
    """
    query = dict(DEFAULT_QUERY)
    if defaults:
        query.update(defaults)
    query.update(overrides)
    query["page"] = page
    query["per_page"] = per_page
    return {key: value for key, value in query.items() if value is not None}
