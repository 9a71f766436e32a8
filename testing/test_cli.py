"""Tests for the terminal client."""

from __future__ import annotations

from datetime import datetime

from cot_game.errors import RequestFailed
from cot_game.main import (
    EXIT_FAILED,
    EXIT_INVALID_PROMPT,
    EXIT_OK,
    run_list,
    run_login,
    run_signup,
    run_solve,
)
from cot_game.models import LoginResponse, Question, SolveRequest, SolveResponse, User
from cot_game.services.attempt_history import AttemptHistory


class FakeQuestions:
    """Catalog stub."""

    def __init__(self, catalog=None, error: RequestFailed | None = None) -> None:
        self.catalog = catalog or []
        self.error = error

    def list_questions(self):
        if self.error:
            raise self.error
        return self.catalog


class FakeSolver:
    """Solve stub returning a fixed score."""

    def __init__(self, score: int = 95, error: RequestFailed | None = None) -> None:
        self.score = score
        self.error = error
        self.requests: list[SolveRequest] = []

    def submit(self, request: SolveRequest) -> SolveResponse:
        self.requests.append(request)
        if self.error:
            raise self.error
        return SolveResponse(
            question_id=request.question_id,
            prompt=request.prompt,
            model_vendor="gemini",
            model_name=request.model or "gemini-2.0-flash-lite",
            ai_output="The answer is 12.",
            answer_number=12,
            score=self.score,
            elapsed_ms=321,
            saved=True,
        )


CATALOG = [
    Question(id=4, level=3, tags=["logic_puzzle"], created_at=datetime(2026, 1, 1)),
    Question(id=1, level=1, tags=["calculation"], created_at=datetime(2026, 1, 1)),
]


def test_run_solve_records_attempt(tmp_path, capsys):
    history = AttemptHistory(tmp_path / "attempt_history.json")
    solver = FakeSolver(score=95)

    code = run_solve(FakeQuestions(CATALOG), solver, history, 4, "Reason it out.", "gemini-2.0-flash")

    assert code == EXIT_OK
    assert solver.requests == [
        SolveRequest(question_id=4, prompt="Reason it out.", model="gemini-2.0-flash")
    ]
    out = capsys.readouterr().out
    assert "Score: 95 - Excellent!" in out
    assert "Extracted number: 12" in out
    attempts = history.load()["attempts"]
    assert [(a["question_id"], a["score"], a["tier"]) for a in attempts] == [(4, 95, "excellent")]


def test_run_solve_unknown_question(tmp_path):
    solver = FakeSolver()

    code = run_solve(FakeQuestions(CATALOG), solver, None, 99, "Reason it out.")

    assert code == EXIT_FAILED
    assert solver.requests == []


def test_run_solve_invalid_prompt_never_submits():
    solver = FakeSolver()

    code = run_solve(FakeQuestions(CATALOG), solver, None, 1, "a" * 2500)

    assert code == EXIT_INVALID_PROMPT
    assert solver.requests == []


def test_run_solve_submit_failure_does_not_record(tmp_path):
    history = AttemptHistory(tmp_path / "attempt_history.json")
    solver = FakeSolver(error=RequestFailed("rate limited"))

    code = run_solve(FakeQuestions(CATALOG), solver, history, 1, "Count.")

    assert code == EXIT_FAILED
    assert history.load() == {"attempts": []}


def test_run_solve_load_failure():
    code = run_solve(FakeQuestions(error=RequestFailed("db down")), FakeSolver(), None, 1, "x")

    assert code == EXIT_FAILED


def test_run_list_sorts_by_level_and_filters(capsys):
    assert run_list(FakeQuestions(CATALOG)) == EXIT_OK
    out = capsys.readouterr().out
    assert out.index("#1") < out.index("#4")
    assert "Logic puzzle" in out

    run_list(FakeQuestions(CATALOG), level=3)
    out = capsys.readouterr().out
    assert "#4" in out and "#1 " not in out

    run_list(FakeQuestions(CATALOG), level=5)
    assert "No questions at level 5." in capsys.readouterr().out


def test_run_list_load_failure():
    assert run_list(FakeQuestions(error=RequestFailed("db down"))) == EXIT_FAILED


class FakeAuth:
    """Auth stub recording calls."""

    def __init__(self, error: RequestFailed | None = None) -> None:
        self.error = error
        self.calls: list[tuple] = []

    def _session(self, email: str) -> LoginResponse:
        if self.error:
            raise self.error
        return LoginResponse(token="tok-123", user=User(id=7, username="ada", email=email))

    def signup(self, username: str, email: str, password: str) -> LoginResponse:
        self.calls.append(("signup", username, email, password))
        return self._session(email)

    def login(self, email: str, password: str) -> LoginResponse:
        self.calls.append(("login", email, password))
        return self._session(email)


def test_run_signup_prints_user_and_token(capsys):
    auth = FakeAuth()

    code = run_signup(auth, "ada", "ada@example.com", "pw")

    assert code == EXIT_OK
    assert auth.calls == [("signup", "ada", "ada@example.com", "pw")]
    out = capsys.readouterr().out
    assert "Signed up as ada <ada@example.com>" in out
    assert "Token: tok-123" in out


def test_run_login_prints_token(capsys):
    auth = FakeAuth()

    assert run_login(auth, "ada@example.com", "pw") == EXIT_OK
    assert auth.calls == [("login", "ada@example.com", "pw")]
    assert "Logged in as ada" in capsys.readouterr().out


def test_run_login_failure(capsys):
    auth = FakeAuth(error=RequestFailed("invalid credentials"))

    assert run_login(auth, "ada@example.com", "wrong") == EXIT_FAILED
    assert "Token" not in capsys.readouterr().out
    assert run_signup(auth, "ada", "ada@example.com", "pw") == EXIT_FAILED
