"""Prompt checks applied before anything is sent."""

from __future__ import annotations

from enum import Enum
from typing import Optional

MAX_PROMPT_LENGTH = 2000


class PromptError(str, Enum):
    EMPTY_PROMPT = "empty_prompt"
    TOO_LONG = "too_long"

    @property
    def message(self) -> str:
        if self is PromptError.EMPTY_PROMPT:
            return "Please enter a prompt."
        return f"Prompts are limited to {MAX_PROMPT_LENGTH} characters."


def validate_prompt(text: str) -> Optional[PromptError]:
    """Return the first problem with `text`, or None if it can be submitted.

    Length counts code points, so a prompt of exactly MAX_PROMPT_LENGTH
    characters is accepted.
    """
    if not text.strip():
        return PromptError.EMPTY_PROMPT
    if len(text) > MAX_PROMPT_LENGTH:
        return PromptError.TOO_LONG
    return None
