"""Korean comment templates posted to GitHub issues."""

import re
from dataclasses import dataclass
from typing import Mapping

_PLACEHOLDER_RE = re.compile(r"\{\{[^}]+\}\}")

COMMENT_TYPES = ("start", "progress", "complete", "blocked", "review")


@dataclass(frozen=True)
class CommentTemplate:
    emoji: str
    title: str
    content: str


DEFAULT_KOREAN_TEMPLATES: dict[str, CommentTemplate] = {
    "start": CommentTemplate(
        emoji="🚀",
        title="작업을 시작합니다",
        content="""이 이슈 해결을 위한 작업을 시작하겠습니다.

**작업 계획:**
- 요구사항 분석 및 설계
- 구현 및 테스트
- 코드 리뷰 및 문서화

진행 상황을 지속적으로 업데이트하겠습니다.""",
    ),
    "progress": CommentTemplate(
        emoji="⏳",
        title="작업이 진행 중입니다",
        content="""현재 작업을 진행하고 있습니다.

**현재 상황:** {{status}}

**완료된 작업:**
{{completed_tasks}}

**다음 단계:**
{{next_steps}}""",
    ),
    "complete": CommentTemplate(
        emoji="✅",
        title="작업이 완료되었습니다",
        content="""모든 작업이 성공적으로 완료되었습니다.

**구현 내용:**
{{implementation_details}}

**테스트 결과:**
{{test_results}}

코드 리뷰를 부탁드립니다. 🙏""",
    ),
    "blocked": CommentTemplate(
        emoji="🚧",
        title="작업이 차단되었습니다",
        content="""작업 진행 중 다음과 같은 문제가 발생했습니다:

**차단 사유:**
{{blocking_reason}}

**해결 방안:**
{{solution_approach}}

지원이나 추가 정보가 필요합니다.""",
    ),
    "review": CommentTemplate(
        emoji="👀",
        title="리뷰 요청",
        content="""작업이 완료되어 리뷰를 요청드립니다.

**변경 사항:**
{{changes_summary}}

**테스트 완료:**
{{test_coverage}}

**확인 사항:**
{{review_points}}""",
    ),
}


class UnknownCommentTypeError(ValueError):
    pass


def replace_template_variables(template: str, variables: Mapping[str, str | None]) -> str:
    """Fill ``{{name}}`` placeholders, then tidy the result.

    Placeholders without a value are removed, every line is stripped and
    blank lines are dropped.
    """
    result = template
    for key, value in variables.items():
        if value is not None:
            result = result.replace(f"{{{{{key}}}}}", value)

    result = _PLACEHOLDER_RE.sub("", result)
    lines = (line.strip() for line in result.split("\n"))
    return "\n".join(line for line in lines if line)


def generate_korean_comment(
    comment_type: str,
    variables: Mapping[str, str | None] | None = None,
    templates: Mapping[str, CommentTemplate] | None = None,
) -> str:
    """Render a full comment body: bold emoji title, blank line, content."""
    templates = templates if templates is not None else DEFAULT_KOREAN_TEMPLATES
    template = templates.get(comment_type)
    if template is None:
        raise UnknownCommentTypeError(f"Unknown comment type: {comment_type}")

    title = f"{template.emoji} **{template.title}**"
    content = replace_template_variables(template.content, variables) if variables is not None else template.content
    return f"{title}\n\n{content}"
