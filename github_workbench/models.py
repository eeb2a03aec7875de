"""Caller-facing shapes for GitHub resources and paginated results."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class User:
    id: int
    login: str
    avatar_url: str | None = None
    html_url: str | None = None
    name: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "User | None":
        if not isinstance(data, dict):
            return None
        return cls(
            id=data.get("id", 0),
            login=data.get("login", ""),
            avatar_url=data.get("avatar_url"),
            html_url=data.get("html_url"),
            name=data.get("name"),
        )


@dataclass
class Label:
    id: int
    name: str
    color: str | None = None


@dataclass
class Repository:
    id: int
    name: str
    full_name: str
    html_url: str
    description: str | None = None
    clone_url: str | None = None
    ssh_url: str | None = None
    private: bool = False
    language: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    created_at: str | None = None
    updated_at: str | None = None
    pushed_at: str | None = None
    default_branch: str | None = None
    # Connection state is tracked by the workbench, not by GitHub
    is_connected: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Repository":
        return cls(
            id=data.get("id", 0),
            name=data.get("name", ""),
            full_name=data.get("full_name", ""),
            html_url=data.get("html_url", ""),
            description=data.get("description") or None,
            clone_url=data.get("clone_url"),
            ssh_url=data.get("ssh_url"),
            private=bool(data.get("private", False)),
            language=data.get("language") or None,
            stargazers_count=data.get("stargazers_count", 0),
            forks_count=data.get("forks_count", 0),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            pushed_at=data.get("pushed_at"),
            default_branch=data.get("default_branch"),
        )


def _labels(data: dict[str, Any]) -> list[Label]:
    labels = []
    for label in data.get("labels") or []:
        if isinstance(label, dict):
            labels.append(Label(id=label.get("id", 0), name=label.get("name", ""), color=label.get("color")))
    return labels


def _users(items: Any) -> list[User]:
    return [user for user in (User.from_api(item) for item in items or []) if user is not None]


@dataclass
class Issue:
    id: int
    number: int
    title: str
    state: str
    html_url: str
    body: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    closed_at: str | None = None
    comments: int = 0
    user: User | None = None
    labels: list[Label] = field(default_factory=list)
    assignees: list[User] = field(default_factory=list)

    @property
    def is_pull_request(self) -> bool:
        # The issues endpoint also returns pull requests
        return "/pull/" in self.html_url

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Issue":
        return cls(
            id=data.get("id", 0),
            number=data.get("number", 0),
            title=data.get("title", ""),
            state=data.get("state", ""),
            html_url=data.get("html_url") or "",
            body=data.get("body"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            closed_at=data.get("closed_at"),
            comments=data.get("comments", 0),
            user=User.from_api(data.get("user")),
            labels=_labels(data),
            assignees=_users(data.get("assignees")),
        )


@dataclass
class GitRef:
    ref: str
    sha: str


@dataclass
class PullRequest:
    id: int
    number: int
    title: str
    state: str
    html_url: str
    body: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    closed_at: str | None = None
    merged_at: str | None = None
    draft: bool = False
    mergeable: bool | None = None
    user: User | None = None
    head: GitRef | None = None
    base: GitRef | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PullRequest":
        def ref(key: str) -> GitRef | None:
            value = data.get(key)
            if not isinstance(value, dict):
                return None
            return GitRef(ref=value.get("ref", ""), sha=value.get("sha", ""))

        return cls(
            id=data.get("id", 0),
            number=data.get("number", 0),
            title=data.get("title", ""),
            state=data.get("state", ""),
            html_url=data.get("html_url", ""),
            body=data.get("body"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            closed_at=data.get("closed_at"),
            merged_at=data.get("merged_at"),
            draft=bool(data.get("draft", False)),
            mergeable=data.get("mergeable"),
            user=User.from_api(data.get("user")),
            head=ref("head"),
            base=ref("base"),
        )


@dataclass
class IssueComment:
    id: int
    body: str
    html_url: str
    user: User | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "IssueComment":
        return cls(
            id=data.get("id", 0),
            body=data.get("body") or "",
            html_url=data.get("html_url", ""),
            user=User.from_api(data.get("user")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class PageMeta:
    page: int
    per_page: int
    links: dict[str, str] = field(default_factory=dict)
    last_page: int | None = None


@dataclass
class Page(Generic[T]):
    """One page of a list endpoint plus the cursor for the next one."""

    items: list[T]
    has_more: bool
    meta: PageMeta
    next_cursor: int | None = None
