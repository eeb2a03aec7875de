"""Korean progress comments posted while a PM task works through an issue."""

import logging
from typing import Sequence

from .client import GitHubApiClient
from .models import IssueComment

logger = logging.getLogger(__name__)

DEFAULT_TEST_RESULTS = "모든 테스트 통과"
DEFAULT_SOLUTION_APPROACH = "추가 조사 및 해결 방안 모색 필요"
DEFAULT_TEST_COVERAGE = "단위 테스트 및 통합 테스트 완료"


def _bullets(items: Sequence[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


async def _post(
    client: GitHubApiClient,
    repo_id: str,
    issue_number: int,
    comment_type: str,
    variables: dict[str, str],
) -> IssueComment:
    try:
        comment = await client.create_korean_issue_comment(repo_id, issue_number, comment_type, variables)
    except Exception:
        logger.error("Failed to create %s comment for %s#%d", comment_type, repo_id, issue_number)
        raise
    logger.info("Created %s comment for %s#%d", comment_type, repo_id, issue_number)
    return comment


async def create_issue_start_comment(
    client: GitHubApiClient,
    issue_number: int,
    repo_id: str,
    task_title: str | None = None,
) -> IssueComment:
    variables = {}
    if task_title:
        variables["status"] = f"{task_title} 작업 분석 및 설계"
    return await _post(client, repo_id, issue_number, "start", variables)


async def create_issue_progress_comment(
    client: GitHubApiClient,
    issue_number: int,
    repo_id: str,
    status: str,
    completed_tasks: Sequence[str] = (),
    next_steps: Sequence[str] = (),
) -> IssueComment:
    variables = {
        "status": status,
        "completed_tasks": _bullets(completed_tasks),
        "next_steps": _bullets(next_steps),
    }
    return await _post(client, repo_id, issue_number, "progress", variables)


async def create_issue_complete_comment(
    client: GitHubApiClient,
    issue_number: int,
    repo_id: str,
    implementation_details: Sequence[str] = (),
    test_results: str = DEFAULT_TEST_RESULTS,
) -> IssueComment:
    variables = {
        "implementation_details": _bullets(implementation_details),
        "test_results": test_results,
    }
    return await _post(client, repo_id, issue_number, "complete", variables)


async def create_issue_blocked_comment(
    client: GitHubApiClient,
    issue_number: int,
    repo_id: str,
    blocking_reason: str,
    solution_approach: str = DEFAULT_SOLUTION_APPROACH,
) -> IssueComment:
    variables = {
        "blocking_reason": blocking_reason,
        "solution_approach": solution_approach,
    }
    return await _post(client, repo_id, issue_number, "blocked", variables)


async def create_issue_review_comment(
    client: GitHubApiClient,
    issue_number: int,
    repo_id: str,
    changes_summary: str,
    test_coverage: str = DEFAULT_TEST_COVERAGE,
    review_points: Sequence[str] = (),
) -> IssueComment:
    variables = {
        "changes_summary": changes_summary,
        "test_coverage": test_coverage,
        "review_points": _bullets(review_points),
    }
    return await _post(client, repo_id, issue_number, "review", variables)
