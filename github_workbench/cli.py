"""CLI for browsing GitHub repositories, issues and pull requests."""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict, is_dataclass


def _add_paging(parser: argparse.ArgumentParser):
    parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    parser.add_argument(
        "--per-page",
        type=int,
        default=30,
        help="Items per page, 1-100 (default: 30)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse GitHub repositories, issues and pull requests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--token",
        default=None,
        help="GitHub token (default: GITHUB_TOKEN from the environment or .env)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log requests and retries to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # repos subcommand
    repos_parser = subparsers.add_parser("repos", help="List your repositories")
    _add_paging(repos_parser)
    repos_parser.add_argument(
        "--all",
        action="store_true",
        help="Follow pagination and print every repository",
    )
    repos_parser.add_argument(
        "--max-pages",
        type=int,
        default=10,
        help="Page limit for --all (default: 10)",
    )

    # issues / pulls subcommands
    for name, help_text in (("issues", "List repository issues"), ("pulls", "List repository pull requests")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("repo_id", help='Repository as "owner/repo"')
        sub.add_argument(
            "--state",
            choices=["open", "closed", "all"],
            default="open",
            help="State filter (default: open)",
        )
        _add_paging(sub)

    # comments subcommand
    comments_parser = subparsers.add_parser("comments", help="List comments on an issue")
    comments_parser.add_argument("repo_id", help='Repository as "owner/repo"')
    comments_parser.add_argument("issue_number", type=int, help="Issue number")
    _add_paging(comments_parser)

    # comment subcommand
    comment_parser = subparsers.add_parser("comment", help="Post a comment on an issue")
    comment_parser.add_argument("repo_id", help='Repository as "owner/repo"')
    comment_parser.add_argument("issue_number", type=int, help="Issue number")
    body_group = comment_parser.add_mutually_exclusive_group(required=True)
    body_group.add_argument("--body", default=None, help="Literal comment body")
    body_group.add_argument(
        "--template",
        choices=["start", "progress", "complete", "blocked", "review"],
        default=None,
        help="Korean template to render",
    )
    comment_parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Template variable (repeatable, e.g., --var status=리뷰 대기)",
    )

    subparsers.add_parser("profile", help="Show the authenticated user")
    return parser


def _to_json(value):
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [_to_json(item) for item in value]
    return value


async def _run(args) -> object:
    from .auth import SettingsTokenProvider, StaticTokenProvider
    from .client import GitHubApiClient
    from .validation import split_repo_id

    provider = StaticTokenProvider(args.token) if args.token else SettingsTokenProvider()

    async with GitHubApiClient(provider) as client:
        if args.command == "repos":
            if args.all:
                return await client.fetch_all_repositories(max_pages=args.max_pages, per_page=args.per_page)
            return await client.fetch_user_repositories(args.page, args.per_page)
        if args.command == "issues":
            owner, repo = split_repo_id(args.repo_id)
            return await client.fetch_repository_issues(owner, repo, args.page, args.per_page, state=args.state)
        if args.command == "pulls":
            owner, repo = split_repo_id(args.repo_id)
            return await client.fetch_repository_pull_requests(
                owner, repo, args.page, args.per_page, state=args.state
            )
        if args.command == "comments":
            owner, repo = split_repo_id(args.repo_id)
            return await client.fetch_issue_comments(owner, repo, args.issue_number, args.page, args.per_page)
        if args.command == "comment":
            if args.template:
                variables = {}
                for var in args.var:
                    key, _, value = var.partition("=")
                    variables[key] = value
                return await client.create_korean_issue_comment(
                    args.repo_id, args.issue_number, args.template, variables
                )
            owner, repo = split_repo_id(args.repo_id)
            return await client.create_issue_comment(owner, repo, args.issue_number, args.body)
        if args.command == "profile":
            return await client.fetch_user_profile()
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    import httpx

    from .errors import GitHubApiError

    try:
        result = asyncio.run(_run(args))
    except GitHubApiError as e:
        sys.stderr.write(f"Error ({e.kind.value}): {e}\n")
        raise SystemExit(1) from e
    except httpx.TransportError as e:
        sys.stderr.write(f"Error (transport): {e!r}\n")
        raise SystemExit(1) from e

    json.dump(_to_json(result), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
