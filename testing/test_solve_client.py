"""Tests for the solve submission client."""

import json

import httpx
import pytest

from cot_game.errors import CotGameError, InvalidPrompt, RequestFailed
from cot_game.models import SolveRequest
from cot_game.services.solve import SolveClient
from cot_game.services.transport import ApiClient


def solve_payload(**overrides):
    payload = {
        "question_id": 1,
        "prompt": "Count carefully.",
        "model_vendor": "gemini",
        "model_name": "gemini-2.0-flash-lite",
        "ai_output": "The answer is 42.",
        "answer_number": 42,
        "score": 95,
        "evaluation": {"mode": "exact", "matched": True},
        "elapsed_ms": 812,
        "saved": True,
    }
    payload.update(overrides)
    return payload


def make_client(handler) -> SolveClient:
    return SolveClient(ApiClient(base_url="http://api.test", transport=httpx.MockTransport(handler)))


def test_submit_posts_request_and_parses_response():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/v1/solve"
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=solve_payload())

    response = make_client(handler).submit(
        SolveRequest(question_id=1, prompt="Count carefully.", model="gemini-2.0-flash-lite")
    )

    assert bodies == [
        {"question_id": 1, "prompt": "Count carefully.", "model": "gemini-2.0-flash-lite"}
    ]
    assert response.score == 95
    assert response.answer_number == 42.0
    assert response.evaluation.mode == "exact"
    assert response.evaluation.model_extra == {"matched": True}


def test_submit_omits_model_when_unset():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=solve_payload())

    make_client(handler).submit(SolveRequest(question_id=1, prompt="Go"))

    assert bodies == [{"question_id": 1, "prompt": "Go"}]


def test_submit_keeps_absent_and_zero_answer_distinct():
    client = make_client(lambda request: httpx.Response(200, json=solve_payload(answer_number=None)))
    assert client.submit(SolveRequest(question_id=1, prompt="x")).answer_number is None

    client = make_client(lambda request: httpx.Response(200, json=solve_payload(answer_number=0)))
    assert client.submit(SolveRequest(question_id=1, prompt="x")).answer_number == 0


def test_submit_propagates_server_message():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(429, json={"message": "rate limited"})

    with pytest.raises(RequestFailed) as exc_info:
        make_client(handler).submit(SolveRequest(question_id=1, prompt="x"))

    assert exc_info.value.message == "rate limited"
    assert len(calls) == 1


def test_submit_rejects_malformed_response():
    client = make_client(lambda request: httpx.Response(200, json=solve_payload(score=140)))

    with pytest.raises(RequestFailed) as exc_info:
        client.submit(SolveRequest(question_id=1, prompt="x"))

    assert exc_info.value.message == "unknown error"


def test_submit_refuses_invalid_prompt_without_network_call():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(200, json=solve_payload())

    with pytest.raises(InvalidPrompt) as exc_info:
        make_client(handler).submit(SolveRequest(question_id=1, prompt="   "))

    assert exc_info.value.reason == "empty_prompt"
    assert isinstance(exc_info.value, CotGameError)

    assert calls == []


def test_submit_accepts_null_evaluation():
    client = make_client(lambda request: httpx.Response(200, json=solve_payload(evaluation=None)))

    assert client.submit(SolveRequest(question_id=1, prompt="x")).evaluation.mode is None
