"""Prompt templates for article summarisation."""
from .base import JsonPromptTemplate
from .summarization import ARTICLE_SUMMARY_PROMPT

__all__ = [
    "JsonPromptTemplate",
    "ARTICLE_SUMMARY_PROMPT",
]
