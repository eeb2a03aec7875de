"""Resilient GitHub REST client for the AI Git Workbench.

Wraps GitHub's REST API with bounded, rate-limit aware retries and returns
typed pages with a ``next_cursor`` so callers never deal with HTTP directly.
"""

from .auth import SettingsTokenProvider, StaticTokenProvider, TokenProvider
from .cli import main
from .client import GitHubApiClient
from .errors import (
    AuthenticationError,
    AuthorizationError,
    ClientError,
    ErrorKind,
    GitHubApiError,
    InvalidParameterError,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from .executor import RequestDescriptor, RequestEvent, RequestExecutor
from .links import parse_link_header
from .models import Issue, IssueComment, Page, PageMeta, PullRequest, Repository, User
from .rate_limit import RateLimitSnapshot
from .retry import RetryPolicy
from .templates import generate_korean_comment, replace_template_variables

__all__ = [
    "main",
    "GitHubApiClient",
    "RequestExecutor",
    "RequestDescriptor",
    "RequestEvent",
    "RetryPolicy",
    "RateLimitSnapshot",
    "TokenProvider",
    "StaticTokenProvider",
    "SettingsTokenProvider",
    "parse_link_header",
    "generate_korean_comment",
    "replace_template_variables",
    "Page",
    "PageMeta",
    "Repository",
    "Issue",
    "PullRequest",
    "IssueComment",
    "User",
    "ErrorKind",
    "GitHubApiError",
    "AuthenticationError",
    "AuthorizationError",
    "RateLimitError",
    "ServerError",
    "ClientError",
    "NotFoundError",
    "InvalidParameterError",
]

if __name__ == "__main__":
    main()
