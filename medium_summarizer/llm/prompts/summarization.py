"""Prompt template used to summarise a single article."""
from __future__ import annotations

from textwrap import dedent

from .base import JsonPromptTemplate

ARTICLE_SUMMARY_PROMPT = JsonPromptTemplate(
    name="article_summary",
    system_prompt=dedent(
        """
        You summarize blog articles for busy engineers. Always answer in English,
        whatever the language of the article. Reply with a single JSON object and
        nothing else, using exactly these keys:
          "title": a short title for the summary,
          "bullet_points": an ordered list of 3-8 key points, one sentence each,
          "tags": a list of 1-5 short lowercase topic tags.
        """
    ).strip(),
    user_template=
    """
    Title: {title}

    Article:
    {content}

    Summarize the article above as bullet points in the JSON format described.
    """,
    response_schema={
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "bullet_points": {"type": "array", "items": {"type": "string"}},
            "tags": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["bullet_points"],
    },
)

__all__ = ["ARTICLE_SUMMARY_PROMPT"]
