#!/usr/bin/env python3
"""CoT Game - terminal client.

Usage:
    python -m cot_game.main --list                           # Show the catalog
    python -m cot_game.main --list --level 2                 # Only level 2 questions
    python -m cot_game.main --question-id 3 --prompt "..."   # Solve question 3
    python -m cot_game.main --question-id 3 --prompt-file p.txt --model gemini-2.0-flash
    python -m cot_game.main --signup --username ada --email ada@example.com
    python -m cot_game.main --login --email ada@example.com   # Prompts for the password
"""

import argparse
import getpass
import logging
from pathlib import Path
from typing import Optional

from cot_game.config import settings
from cot_game.errors import RequestFailed
from cot_game.presentation import render_stars, result_details, score_message, score_tier
from cot_game.services.attempt_history import AttemptHistory
from cot_game.services.auth import AuthClient
from cot_game.services.questions import QuestionRepository, filter_by_level, sort_by_level
from cot_game.services.solve import SolveClient
from cot_game.services.transport import ApiClient
from cot_game.tags import known_tags, prompt_tips
from cot_game.workflow import Phase, SolveWorkflow

logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s: %(message)s")
log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_PROMPT = 2


def run_list(questions: QuestionRepository, level: Optional[int] = None) -> int:
    """Print the catalog, easiest first."""
    try:
        catalog = questions.list_questions()
    except RequestFailed as e:
        log.error(f"Could not load questions: {e.message}")
        return EXIT_FAILED

    shown = sort_by_level(filter_by_level(catalog, level))
    if not catalog:
        print("No questions available.")
    elif not shown:
        print(f"No questions at level {level}.")
    else:
        print(f"{len(shown)} questions")
        for q in shown:
            labels = ", ".join(f"{t.icon} {t.label}" for t in known_tags(q.tags))
            print(f"  #{q.id:<4} {render_stars(q.level)}  {labels}")
    return EXIT_OK


def run_signup(auth: AuthClient, username: str, email: str, password: str) -> int:
    """Create an account and print its token."""
    try:
        session = auth.signup(username, email, password)
    except RequestFailed as e:
        log.error(f"Signup failed: {e.message}")
        return EXIT_FAILED
    print(f"Signed up as {session.user.username} <{session.user.email}>")
    print(f"Token: {session.token}")
    return EXIT_OK


def run_login(auth: AuthClient, email: str, password: str) -> int:
    try:
        session = auth.login(email, password)
    except RequestFailed as e:
        log.error(f"Login failed: {e.message}")
        return EXIT_FAILED
    print(f"Logged in as {session.user.username} <{session.user.email}>")
    print(f"Token: {session.token}")
    return EXIT_OK


def run_solve(
    questions: QuestionRepository,
    solver: SolveClient,
    history: Optional[AttemptHistory],
    question_id: int,
    prompt: str,
    model: Optional[str] = None,
) -> int:
    """Run one solve workflow to completion. Returns a process exit code."""
    workflow = SolveWorkflow(question_id, questions, solver, model=model)
    state = workflow.load()
    if state.phase is Phase.NOT_FOUND:
        log.error(f"Question {question_id} was not found.")
        return EXIT_FAILED
    if state.phase is Phase.LOAD_ERROR:
        log.error(f"Could not load questions: {state.load_error}")
        return EXIT_FAILED

    question = state.question
    log.info(f"Question #{question.id} {render_stars(question.level)}")
    for tip in prompt_tips(question.tags):
        log.info(f"Tip: {tip}")

    workflow.edit_prompt(prompt)
    if not workflow.can_submit:
        log.error(workflow.inline_error)
        return EXIT_INVALID_PROMPT

    state = workflow.submit()
    if state.phase is not Phase.RESULT:
        log.error(f"Submission failed: {state.inline_error}")
        return EXIT_FAILED

    result = state.result
    print(f"\nScore: {result.score} - {score_message(result.score)}")
    print(f"\nAI output:\n{result.ai_output}\n")
    for label, value in result_details(result):
        print(f"  {label}: {value}")

    if history is not None:
        history.record(result)
        log.info(f"Recorded attempt ({score_tier(result.score).value}) in {history.path}")
    return EXIT_OK


def main() -> int:
    parser = argparse.ArgumentParser(description="CoT Game client")
    parser.add_argument("--list", action="store_true", help="List questions and exit")
    parser.add_argument("--signup", action="store_true", help="Create an account and exit")
    parser.add_argument("--login", action="store_true", help="Log in and exit")
    parser.add_argument("--username", type=str, default=None, help="Username for --signup")
    parser.add_argument("--email", type=str, default=None, help="Email for --signup/--login")
    parser.add_argument(
        "--password", type=str, default=None, help="Password (prompted for when omitted)"
    )
    parser.add_argument("--level", type=int, default=None, help="Filter --list by level (1-5)")
    parser.add_argument("--question-id", type=int, default=None)
    parser.add_argument("--prompt", type=str, default=None, help="Prompt text to submit")
    parser.add_argument("--prompt-file", type=Path, default=None, help="Read the prompt from a file")
    parser.add_argument(
        "--model",
        type=str,
        default=settings.DEFAULT_MODEL,
        help=f"Model to solve with (default: {settings.DEFAULT_MODEL})",
    )
    parser.add_argument(
        "--no-history", action="store_true", help="Do not record the attempt locally"
    )
    args = parser.parse_args()

    if args.signup and args.login:
        parser.error("--signup and --login are mutually exclusive")
    if args.signup and (args.username is None or args.email is None):
        parser.error("--signup needs --username and --email")
    if args.login and args.email is None:
        parser.error("--login needs --email")
    auth_command = args.signup or args.login
    if not auth_command and not args.list and args.question_id is None:
        parser.error("one of --list, --question-id, --signup or --login is required")
    if args.question_id is not None and args.prompt is None and args.prompt_file is None:
        parser.error("--question-id needs --prompt or --prompt-file")

    log.info(f"Config: api={settings.API_BASE_URL}, model={args.model}")

    with ApiClient() as api:
        if auth_command:
            password = args.password if args.password is not None else getpass.getpass()
            auth = AuthClient(api)
            if args.signup:
                return run_signup(auth, args.username, args.email, password)
            return run_login(auth, args.email, password)

        questions = QuestionRepository(api)
        if args.list:
            return run_list(questions, args.level)

        prompt = args.prompt if args.prompt is not None else args.prompt_file.read_text()
        history = None if args.no_history else AttemptHistory(settings.HISTORY_PATH)
        return run_solve(
            questions, SolveClient(api), history, args.question_id, prompt, args.model
        )


if __name__ == "__main__":
    raise SystemExit(main())
