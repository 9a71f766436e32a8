"""Solve workflow: load a question, edit a prompt, submit, show the score, retry.

The workflow is an explicit state machine. `transition` is a pure function
from (state, event) to the next state; `SolveWorkflow` owns one state per
page visit and performs the network calls around it.

Phases:

    LOADING -> EDITING | NOT_FOUND | LOAD_ERROR
    LOAD_ERROR -> LOADING            (reload)
    EDITING -> SUBMITTING            (only with a valid prompt)
    SUBMITTING -> RESULT | EDITING   (EDITING keeps the prompt + error text)
    RESULT -> EDITING                (retry: prompt and errors cleared)

Every network call is tagged with a ticket. A completion whose ticket is not
the one the state is waiting for is dropped, so a slow response can never
overwrite a newer state.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from cot_game.errors import RequestFailed
from cot_game.models import Question, SolveRequest, SolveResponse
from cot_game.services.questions import QuestionRepository, find_question
from cot_game.services.solve import SolveClient
from cot_game.validation import PromptError, validate_prompt

log = logging.getLogger(__name__)


class Phase(str, Enum):
    LOADING = "loading"
    NOT_FOUND = "not_found"
    LOAD_ERROR = "load_error"
    EDITING = "editing"
    SUBMITTING = "submitting"
    RESULT = "result"


class WorkflowState(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: int
    phase: Phase = Phase.LOADING
    question: Optional[Question] = None
    prompt: str = ""
    validation_error: Optional[PromptError] = None
    submit_error: Optional[str] = None
    load_error: Optional[str] = None
    result: Optional[SolveResponse] = None
    pending: Optional[int] = None  # Ticket of the call in flight
    next_ticket: int = 1
    closed: bool = False

    @property
    def inline_error(self) -> Optional[str]:
        """Text for the error line under the prompt box."""
        if self.validation_error is not None:
            return self.validation_error.message
        return self.submit_error

    @property
    def can_submit(self) -> bool:
        return (
            self.phase is Phase.EDITING
            and self.question is not None
            and self.pending is None
            and not self.closed
            and validate_prompt(self.prompt) is None
        )


# ---------------------------------------------------------------- events


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class LoadStarted(_Event):
    pass


class CatalogLoaded(_Event):
    ticket: int
    questions: List[Question]


class LoadFailed(_Event):
    ticket: int
    message: str


class PromptEdited(_Event):
    text: str


class SubmitStarted(_Event):
    pass


class SubmitSucceeded(_Event):
    ticket: int
    response: SolveResponse


class SubmitFailed(_Event):
    ticket: int
    message: str


class RetryRequested(_Event):
    pass


class Closed(_Event):
    pass


Event = Union[
    LoadStarted,
    CatalogLoaded,
    LoadFailed,
    PromptEdited,
    SubmitStarted,
    SubmitSucceeded,
    SubmitFailed,
    RetryRequested,
    Closed,
]


# ---------------------------------------------------------------- transitions


def _issue(state: WorkflowState, **update) -> WorkflowState:
    """Move to a waiting phase with a fresh ticket."""
    update["pending"] = state.next_ticket
    update["next_ticket"] = state.next_ticket + 1
    return state.model_copy(update=update)


def _is_current(state: WorkflowState, phase: Phase, ticket: int) -> bool:
    return state.phase is phase and state.pending is not None and state.pending == ticket


def transition(state: WorkflowState, event: Event) -> WorkflowState:
    """Return the state after `event`. Events that do not apply return `state` itself."""
    if state.closed:
        return state

    if isinstance(event, Closed):
        return state.model_copy(update={"closed": True, "pending": None})

    if isinstance(event, LoadStarted):
        if state.phase is Phase.LOAD_ERROR or (
            state.phase is Phase.LOADING and state.pending is None
        ):
            return _issue(state, phase=Phase.LOADING, load_error=None)
        return state

    if isinstance(event, CatalogLoaded):
        if not _is_current(state, Phase.LOADING, event.ticket):
            return state
        question = find_question(event.questions, state.question_id)
        if question is None:
            return state.model_copy(update={"phase": Phase.NOT_FOUND, "pending": None})
        return state.model_copy(
            update={
                "phase": Phase.EDITING,
                "question": question,
                "prompt": "",
                "validation_error": None,
                "submit_error": None,
                "pending": None,
            }
        )

    if isinstance(event, LoadFailed):
        if not _is_current(state, Phase.LOADING, event.ticket):
            return state
        return state.model_copy(
            update={"phase": Phase.LOAD_ERROR, "load_error": event.message, "pending": None}
        )

    if isinstance(event, PromptEdited):
        if state.phase is not Phase.EDITING:
            return state
        return state.model_copy(
            update={
                "prompt": event.text,
                "validation_error": validate_prompt(event.text),
                "submit_error": None,
            }
        )

    if isinstance(event, SubmitStarted):
        if state.phase is not Phase.EDITING or state.question is None or state.pending is not None:
            return state
        problem = validate_prompt(state.prompt)
        if problem is not None:
            return state.model_copy(update={"validation_error": problem})
        return _issue(state, phase=Phase.SUBMITTING, validation_error=None, submit_error=None)

    if isinstance(event, SubmitSucceeded):
        if not _is_current(state, Phase.SUBMITTING, event.ticket):
            return state
        return state.model_copy(
            update={"phase": Phase.RESULT, "result": event.response, "pending": None}
        )

    if isinstance(event, SubmitFailed):
        if not _is_current(state, Phase.SUBMITTING, event.ticket):
            return state
        return state.model_copy(
            update={"phase": Phase.EDITING, "submit_error": event.message, "pending": None}
        )

    if isinstance(event, RetryRequested):
        if state.phase is not Phase.RESULT:
            return state
        return state.model_copy(
            update={
                "phase": Phase.EDITING,
                "prompt": "",
                "validation_error": None,
                "submit_error": None,
                "result": None,
            }
        )

    raise TypeError(f"Unknown workflow event: {event!r}")


# ---------------------------------------------------------------- controller


class SolveWorkflow:
    """One solve page visit for `question_id`."""

    def __init__(
        self,
        question_id: int,
        questions: QuestionRepository,
        solver: SolveClient,
        model: Optional[str] = None,
    ):
        self.questions = questions
        self.solver = solver
        self.model = model
        self._state = WorkflowState(question_id=question_id)

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def can_submit(self) -> bool:
        return self._state.can_submit

    @property
    def inline_error(self) -> Optional[str]:
        return self._state.inline_error

    def dispatch(self, event: Event) -> WorkflowState:
        old = self._state
        new = transition(old, event)
        if new is old:
            log.debug(f"[Q{old.question_id}] {type(event).__name__} ignored in {old.phase.value}")
        elif new.phase is not old.phase:
            log.debug(
                f"[Q{old.question_id}] {type(event).__name__}: "
                f"{old.phase.value} -> {new.phase.value}"
            )
        self._state = new
        return new

    # Split API: hosts that resolve calls themselves pair begin_* with
    # a completion event carrying the returned ticket.

    def begin_load(self) -> Optional[int]:
        """Start a catalog fetch. Returns its ticket, or None if one cannot start."""
        old = self._state
        new = self.dispatch(LoadStarted())
        return new.pending if new is not old else None

    def finish_load(self, ticket: int, questions: List[Question]) -> WorkflowState:
        return self.dispatch(CatalogLoaded(ticket=ticket, questions=questions))

    def fail_load(self, ticket: int, error: RequestFailed) -> WorkflowState:
        log.warning(f"[Q{self._state.question_id}] Catalog fetch failed: {error.message}")
        return self.dispatch(LoadFailed(ticket=ticket, message=error.message))

    def begin_submit(self) -> Optional[tuple[int, SolveRequest]]:
        """Start a submission. Returns (ticket, request), or None when submitting is not allowed."""
        old = self._state
        new = self.dispatch(SubmitStarted())
        if new.phase is not Phase.SUBMITTING or new is old:
            return None
        request = SolveRequest(question_id=new.question.id, prompt=new.prompt, model=self.model)
        return new.pending, request

    def finish_submit(self, ticket: int, response: SolveResponse) -> WorkflowState:
        return self.dispatch(SubmitSucceeded(ticket=ticket, response=response))

    def fail_submit(self, ticket: int, error: RequestFailed) -> WorkflowState:
        log.warning(f"[Q{self._state.question_id}] Submission failed: {error.message}")
        return self.dispatch(SubmitFailed(ticket=ticket, message=error.message))

    # Blocking API

    def load(self) -> WorkflowState:
        """Fetch the catalog and select this visit's question."""
        ticket = self.begin_load()
        if ticket is None:
            return self._state
        try:
            catalog = self.questions.list_questions()
        except RequestFailed as e:
            return self.fail_load(ticket, e)
        state = self.finish_load(ticket, catalog)
        if state.phase is Phase.NOT_FOUND:
            log.warning(f"Question {state.question_id} is not in the catalog ({len(catalog)} questions)")
        return state

    def edit_prompt(self, text: str) -> WorkflowState:
        return self.dispatch(PromptEdited(text=text))

    def submit(self) -> WorkflowState:
        """Submit the current prompt. A no-op unless `can_submit`."""
        started = self.begin_submit()
        if started is None:
            return self._state
        ticket, request = started
        try:
            response = self.solver.submit(request)
        except RequestFailed as e:
            return self.fail_submit(ticket, e)
        return self.finish_submit(ticket, response)

    def retry(self) -> WorkflowState:
        return self.dispatch(RetryRequested())

    def close(self) -> WorkflowState:
        """Leave the page. Completions arriving later are ignored."""
        return self.dispatch(Closed())
