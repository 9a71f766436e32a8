"""Local history of scored attempts."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from cot_game.models import SolveResponse
from cot_game.presentation import score_tier


class AttemptHistory:
    """Store solve results in a JSON file."""

    def __init__(self, path: str | Path = "data/attempt_history.json"):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> dict[str, Any]:
        """Load history from disk."""
        if not self.path.exists():
            return {"attempts": []}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError:
            return {"attempts": []}
        if not isinstance(data, dict):
            return {"attempts": []}
        data.setdefault("attempts", [])
        return data

    def save(self, data: dict[str, Any]) -> None:
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False))

    def record(
        self, result: SolveResponse, recorded_at: Optional[datetime] = None
    ) -> dict[str, Any]:
        """Append one attempt and return it."""
        attempt = {
            "timestamp": (recorded_at or datetime.now()).isoformat(timespec="seconds"),
            "question_id": result.question_id,
            "model_name": result.model_name,
            "score": result.score,
            "tier": score_tier(result.score).value,
            "elapsed_ms": result.elapsed_ms,
            "saved": result.saved,
        }
        data = self.load()
        data["attempts"].append(attempt)
        self.save(data)
        return attempt


def summarize_attempts(attempts: list[dict[str, Any]]) -> dict[str, Any]:
    """Summarize attempt history for display."""
    rows: list[dict[str, Any]] = []
    scores: list[int] = []
    best_by_question: dict[int, int] = {}
    for idx, attempt in enumerate(attempts, 1):
        ts = str(attempt.get("timestamp", ""))[:19].replace("T", " ")
        score = attempt.get("score")
        qid = attempt.get("question_id")
        rows.append(
            {
                "#": idx,
                "Timestamp": ts,
                "Question": qid,
                "Model": attempt.get("model_name", ""),
                "Score": score,
                "Tier": attempt.get("tier", ""),
            }
        )
        if isinstance(score, int):
            scores.append(score)
            if isinstance(qid, int):
                best_by_question[qid] = max(score, best_by_question.get(qid, score))

    stats = None
    if scores:
        stats = {
            "best": max(scores),
            "worst": min(scores),
            "avg": sum(scores) / len(scores),
            "trend": scores[-1] - scores[0],
        }

    return {"rows": rows, "stats": stats, "best_by_question": best_by_question}
