"""Prompt template primitives for JSON-shaped LLM answers."""
from __future__ import annotations

from dataclasses import dataclass
from textwrap import dedent
from typing import Any, Dict, Iterable


@dataclass(frozen=True)
class JsonPromptTemplate:
    """Simple representation for JSON-constrained prompts."""

    name: str
    system_prompt: str
    user_template: str
    response_schema: Dict[str, Any]

    def render_user_prompt(self, **variables: Any) -> str:
        """Render the user template with the provided ``variables``."""

        return dedent(self.user_template).strip().format(**{k: v or "" for k, v in variables.items()})

    @property
    def required_fields(self) -> Iterable[str]:
        return tuple(self.response_schema.get("required", ()))

    def validate(self, payload: Dict[str, Any]) -> None:
        missing = [field for field in self.required_fields if field not in payload]
        if missing:
            raise ValueError(f"Missing required fields in response: {', '.join(missing)}")

        empty = [
            field
            for field in self.required_fields
            if isinstance(payload.get(field), (str, list)) and not _has_content(payload[field])
        ]
        if empty:
            raise ValueError(f"Required fields were empty: {', '.join(empty)}")


def _has_content(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return any(isinstance(item, str) and item.strip() for item in value)


__all__ = ["JsonPromptTemplate"]
