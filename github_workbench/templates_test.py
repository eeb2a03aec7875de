"""Unit tests for Korean comment templates."""

import pytest

from .templates import (
    COMMENT_TYPES,
    DEFAULT_KOREAN_TEMPLATES,
    CommentTemplate,
    UnknownCommentTypeError,
    generate_korean_comment,
    replace_template_variables,
)


def describe_replace_template_variables():
    def it_replaces_simple_placeholders():
        result = replace_template_variables("Hello {{name}}, welcome to {{app}}!", {"name": "Claude", "app": "AI Workbench"})

        assert result == "Hello Claude, welcome to AI Workbench!"

    def it_replaces_every_occurrence():
        assert replace_template_variables("{{x}} and {{x}}", {"x": "y"}) == "y and y"

    def it_removes_unused_placeholders():
        result = replace_template_variables("Hello {{name}}! How are you?{{unused_placeholder}}", {"name": "Claude"})

        assert result == "Hello Claude! How are you?"

    def it_handles_empty_variables():
        assert replace_template_variables("Hello {{name}}!", {}) == "Hello !"

    def it_skips_none_values():
        assert replace_template_variables("Status: {{status}}", {"status": None}) == "Status:"

    def it_trims_lines_and_drops_blank_ones():
        template = "**Status:** {{status}}\n\n  **Done:**\n{{done}}\n\n{{missing}}\n"

        result = replace_template_variables(template, {"status": "In Progress", "done": "- Implement feature"})

        assert result == "**Status:** In Progress\n**Done:**\n- Implement feature"


def describe_generate_korean_comment():
    def it_generates_start_comment():
        result = generate_korean_comment("start")

        assert result.startswith("🚀 **작업을 시작합니다**\n\n")
        assert "이 이슈 해결을 위한 작업을 시작하겠습니다" in result
        assert "**작업 계획:**" in result

    def it_generates_progress_comment_with_variables():
        result = generate_korean_comment(
            "progress",
            {"status": "기능 구현 중", "completed_tasks": "- API 설계 완료", "next_steps": "- 구현 완료"},
        )

        assert "⏳ **작업이 진행 중입니다**" in result
        assert "**현재 상황:** 기능 구현 중" in result
        assert "- API 설계 완료" in result
        assert "- 구현 완료" in result
        assert "{{" not in result

    def it_generates_complete_comment():
        result = generate_korean_comment(
            "complete",
            {"implementation_details": "- GitHub API 연동 완료", "test_results": "모든 테스트 통과"},
        )

        assert "✅ **작업이 완료되었습니다**" in result
        assert "GitHub API 연동 완료" in result
        assert "코드 리뷰를 부탁드립니다" in result

    def it_generates_blocked_comment():
        result = generate_korean_comment(
            "blocked",
            {"blocking_reason": "GitHub API 권한 부족", "solution_approach": "관리자에게 권한 요청 필요"},
        )

        assert "🚧 **작업이 차단되었습니다**" in result
        assert "GitHub API 권한 부족" in result
        assert "관리자에게 권한 요청 필요" in result

    def it_generates_review_comment():
        result = generate_korean_comment(
            "review",
            {"changes_summary": "Korean comment system implemented", "test_coverage": "98% test coverage achieved"},
        )

        assert "👀 **리뷰 요청**" in result
        assert "98% test coverage achieved" in result

    def it_leaves_content_untouched_without_variables():
        assert generate_korean_comment("progress").endswith("{{next_steps}}")

    def it_uses_custom_templates():
        templates = {"custom": CommentTemplate(emoji="🎯", title="커스텀 메시지", content="이것은 {{what}}입니다")}

        result = generate_korean_comment("custom", {"what": "테스트 메시지"}, templates)

        assert result == "🎯 **커스텀 메시지**\n\n이것은 테스트 메시지입니다"

    def it_rejects_unknown_type():
        with pytest.raises(UnknownCommentTypeError, match="Unknown comment type: invalid"):
            generate_korean_comment("invalid")

    def it_defines_every_comment_type():
        for comment_type in COMMENT_TYPES:
            template = DEFAULT_KOREAN_TEMPLATES[comment_type]
            assert template.emoji
            assert template.title
            assert template.content
