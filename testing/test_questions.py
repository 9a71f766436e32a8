"""Tests for the question catalog client and helpers."""

from datetime import datetime

import httpx
import pytest

from cot_game.errors import RequestFailed
from cot_game.models import Question
from cot_game.services.questions import (
    QuestionRepository,
    filter_by_level,
    find_question,
    sort_by_level,
    unique_levels,
)
from cot_game.services.transport import ApiClient

CREATED = "2026-01-01T10:00:00Z"


def make_repo(handler) -> QuestionRepository:
    return QuestionRepository(ApiClient(base_url="http://api.test", transport=httpx.MockTransport(handler)))


def q(qid: int, level: int, tags=None) -> Question:
    return Question(id=qid, level=level, tags=tags or [], created_at=datetime(2026, 1, 1))


def test_list_questions_keeps_server_order_and_drops_hidden_fields():
    payload = [
        {"id": 3, "level": 4, "tags": ["calculation"], "created_at": CREATED},
        {"id": 1, "level": 2, "created_at": CREATED, "problem_statement": "secret"},
    ]
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append((request.method, request.url.path))
        return httpx.Response(200, json=payload)

    questions = make_repo(handler).list_questions()

    assert paths == [("GET", "/api/v1/questions")]
    assert [x.id for x in questions] == [3, 1]
    assert questions[0].tags == ["calculation"]
    assert questions[1].tags == []
    assert not hasattr(questions[1], "problem_statement")


def test_list_questions_always_refetches():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(200, json=[])

    repo = make_repo(handler)
    repo.list_questions()
    repo.list_questions()

    assert len(calls) == 2


def test_list_questions_propagates_transport_error():
    repo = make_repo(lambda request: httpx.Response(500, json={"message": "db down"}))

    with pytest.raises(RequestFailed) as exc_info:
        repo.list_questions()

    assert exc_info.value.message == "db down"


def test_list_questions_rejects_malformed_catalog():
    repo = make_repo(lambda request: httpx.Response(200, json=[{"id": "x"}]))

    with pytest.raises(RequestFailed) as exc_info:
        repo.list_questions()

    assert exc_info.value.message == "unknown error"


def test_catalog_helpers():
    catalog = [q(5, 3), q(2, 1), q(9, 3), q(4, 2)]

    assert find_question(catalog, 9) == catalog[2]
    assert find_question(catalog, 99) is None
    assert [x.id for x in filter_by_level(catalog, 3)] == [5, 9]
    assert filter_by_level(catalog, None) == catalog
    assert [x.id for x in sort_by_level(catalog)] == [2, 4, 5, 9]
    assert [x.id for x in catalog] == [5, 2, 9, 4]
    assert unique_levels(catalog) == [1, 2, 3]


def test_list_questions_accepts_null_tags():
    repo = make_repo(
        lambda request: httpx.Response(200, json=[{"id": 1, "level": 1, "tags": None, "created_at": CREATED}])
    )

    assert repo.list_questions()[0].tags == []
