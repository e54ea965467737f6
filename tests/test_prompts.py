from __future__ import annotations

import pytest

from medium_summarizer.llm.prompts import ARTICLE_SUMMARY_PROMPT, JsonPromptTemplate


def test_summary_prompt_renders_title_and_content() -> None:
    prompt = ARTICLE_SUMMARY_PROMPT.render_user_prompt(title="A {braced} title", content="Body text")

    assert prompt.startswith("Title: A {braced} title")
    assert "Article:\nBody text" in prompt


def test_summary_prompt_requires_bullet_points() -> None:
    assert tuple(ARTICLE_SUMMARY_PROMPT.required_fields) == ("bullet_points",)


def test_validate_reports_missing_and_empty_fields() -> None:
    template = JsonPromptTemplate(
        name="validate-test",
        system_prompt="System",
        user_template="{content}",
        response_schema={"type": "object", "required": ["headline", "points"]},
    )

    with pytest.raises(ValueError, match="Missing required fields in response: points"):
        template.validate({"headline": "ok"})
    with pytest.raises(ValueError, match="Required fields were empty: headline, points"):
        template.validate({"headline": "  ", "points": [" "]})

    template.validate({"headline": "ok", "points": ["one"]})
