"""Solve submission client."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from cot_game.errors import UNKNOWN_ERROR, InvalidPrompt, RequestFailed
from cot_game.models import SolveRequest, SolveResponse
from cot_game.services.transport import ApiClient
from cot_game.validation import validate_prompt

log = logging.getLogger(__name__)


class SolveClient:
    def __init__(self, api: ApiClient):
        self.api = api

    def submit(self, request: SolveRequest) -> SolveResponse:
        """Send one prompt for scoring. Exactly one network call, no retry."""
        problem = validate_prompt(request.prompt)
        if problem is not None:
            raise InvalidPrompt(problem.value)

        data = self.api.request(
            "/api/v1/solve",
            method="POST",
            json=request.model_dump(exclude_none=True),
        )
        try:
            response = SolveResponse.model_validate(data)
        except ValidationError as e:
            log.error(f"Malformed solve response for question {request.question_id}: {e}")
            raise RequestFailed(UNKNOWN_ERROR) from e
        log.info(
            f"Question {response.question_id}: score={response.score} "
            f"({response.model_name}, {response.elapsed_ms}ms)"
        )
        return response
