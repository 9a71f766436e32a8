"""Display helpers for the solve result and question list."""

from __future__ import annotations

from enum import Enum

from cot_game.models import SolveResponse
from cot_game.validation import MAX_PROMPT_LENGTH

MAX_LEVEL = 5


class ScoreTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


TIER_MESSAGES = {
    ScoreTier.EXCELLENT: "Excellent!",
    ScoreTier.GOOD: "Almost there!",
    ScoreTier.FAIR: "Keep going",
    ScoreTier.POOR: "Try again",
}


def score_tier(score: int) -> ScoreTier:
    """Bucket a 0-100 score."""
    if score >= 90:
        return ScoreTier.EXCELLENT
    if score >= 70:
        return ScoreTier.GOOD
    if score >= 50:
        return ScoreTier.FAIR
    return ScoreTier.POOR


def score_message(score: int) -> str:
    return TIER_MESSAGES[score_tier(score)]


def render_stars(level: int) -> str:
    """Level as stars, e.g. 3 -> ★★★☆☆."""
    return "★" * level + "☆" * (MAX_LEVEL - level)


def prompt_counter(text: str) -> str:
    return f"{len(text)} / {MAX_PROMPT_LENGTH} characters"


def result_details(result: SolveResponse) -> list[tuple[str, str]]:
    """Label/value rows for the result detail panel."""
    rows = [
        ("Model", f"{result.model_vendor} ({result.model_name})"),
        ("Response time", f"{result.elapsed_ms}ms"),
    ]
    if result.answer_number is not None:
        rows.append(("Extracted number", f"{result.answer_number:g}"))
    rows.append(("Evaluation mode", result.evaluation.mode or "N/A"))
    rows.append(("Saved", "✓ saved" if result.saved else "✗ not saved"))
    return rows
