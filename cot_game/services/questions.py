"""Question catalog client and catalog helpers."""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import TypeAdapter, ValidationError

from cot_game.errors import UNKNOWN_ERROR, RequestFailed
from cot_game.models import Question
from cot_game.services.transport import ApiClient

_QUESTION_LIST = TypeAdapter(list[Question])


class QuestionRepository:
    def __init__(self, api: ApiClient):
        self.api = api

    def list_questions(self) -> list[Question]:
        """Fetch the whole catalog, in server order."""
        data = self.api.request("/api/v1/questions")
        try:
            return _QUESTION_LIST.validate_python(data)
        except ValidationError as e:
            raise RequestFailed(UNKNOWN_ERROR) from e


def find_question(questions: Iterable[Question], question_id: int) -> Optional[Question]:
    return next((q for q in questions if q.id == question_id), None)


def filter_by_level(questions: Iterable[Question], level: Optional[int]) -> list[Question]:
    """Keep questions at `level` (None keeps everything)."""
    if level is None:
        return list(questions)
    return [q for q in questions if q.level == level]


def sort_by_level(questions: Iterable[Question]) -> list[Question]:
    """Easiest first. Ties keep server order."""
    return sorted(questions, key=lambda q: q.level)


def unique_levels(questions: Iterable[Question]) -> list[int]:
    return sorted({q.level for q in questions})
