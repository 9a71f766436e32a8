"""Tag vocabulary shown next to questions, with prompt-writing tips."""

from __future__ import annotations

from typing import Iterable, Optional

from cot_game.models import Tag

TAG_DEFINITIONS: dict[str, Tag] = {
    "calculation": Tag(
        id="calculation",
        label="Calculation",
        icon="🔢",
        description="Requires numeric calculation or arithmetic",
        prompt_tips="Ask the model to work through the calculation step by step so every number is exact.",
        color="#3B82F6",  # blue-500
    ),
    "character_counting": Tag(
        id="character_counting",
        label="Character counting",
        icon="📊",
        description="Count the length of a string or occurrences of a character",
        prompt_tips="Tell the model to count one character at a time and double-check the total.",
        color="#10B981",  # green-500
    ),
    "text_analysis": Tag(
        id="text_analysis",
        label="Text analysis",
        icon="📝",
        description="Analyze the structure or content of a passage",
        prompt_tips="Ask for a careful reading and name the aspects the analysis should cover.",
        color="#8B5CF6",  # violet-500
    ),
    "text_problem": Tag(
        id="text_problem",
        label="Word problem",
        icon="📖",
        description="Extract the facts from a passage and solve the problem",
        prompt_tips="Have the model restate the conditions before it starts solving.",
        color="#F59E0B",  # amber-500
    ),
    "pattern_recognition": Tag(
        id="pattern_recognition",
        label="Pattern recognition",
        icon="🔍",
        description="Find a rule or pattern",
        prompt_tips="Encourage observing several examples and testing a hypothesis against each.",
        color="#EC4899",  # pink-500
    ),
    "logic_puzzle": Tag(
        id="logic_puzzle",
        label="Logic puzzle",
        icon="🧩",
        description="Puzzles that need logical reasoning",
        prompt_tips="Ask for reasoning in small steps and an explicit check for contradictions.",
        color="#EF4444",  # red-500
    ),
    "general_knowledge": Tag(
        id="general_knowledge",
        label="General knowledge",
        icon="🌍",
        description="Questions about general knowledge or common sense",
        prompt_tips="Ask the model to draw on what it knows and to state its evidence.",
        color="#06B6D4",  # cyan-500
    ),
    "estimation": Tag(
        id="estimation",
        label="Estimation",
        icon="📐",
        description="Estimate an approximate value",
        prompt_tips="Make the model state its assumptions and estimate in stages.",
        color="#84CC16",  # lime-500
    ),
}


def get_tag(tag_id: str) -> Optional[Tag]:
    return TAG_DEFINITIONS.get(tag_id)


def all_tags() -> list[Tag]:
    return list(TAG_DEFINITIONS.values())


def known_tags(tag_ids: Optional[Iterable[str]]) -> list[Tag]:
    """Resolve tag ids, skipping ones outside the vocabulary."""
    return [tag for tag in (get_tag(t) for t in tag_ids or []) if tag is not None]


def prompt_tips(tag_ids: Optional[Iterable[str]]) -> list[str]:
    """Prompt tips for a question's tags, in tag order."""
    return [tag.prompt_tips for tag in known_tags(tag_ids)]
