"""Streamlit UI for the CoT Game."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import altair as alt
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from cot_game.config import settings
from cot_game.errors import RequestFailed
from cot_game.presentation import (
    ScoreTier,
    prompt_counter,
    render_stars,
    result_details,
    score_message,
    score_tier,
)
from cot_game.services.attempt_history import AttemptHistory, summarize_attempts
from cot_game.services.questions import (
    QuestionRepository,
    filter_by_level,
    sort_by_level,
    unique_levels,
)
from cot_game.services.solve import SolveClient
from cot_game.services.transport import ApiClient
from cot_game.tags import known_tags, prompt_tips
from cot_game.validation import MAX_PROMPT_LENGTH
from cot_game.workflow import Phase, SolveWorkflow

HISTORY = AttemptHistory(ROOT_DIR / settings.HISTORY_PATH)
TIER_COLORS = {
    ScoreTier.EXCELLENT: "green",
    ScoreTier.GOOD: "blue",
    ScoreTier.FAIR: "orange",
    ScoreTier.POOR: "red",
}


@st.cache_resource
def get_api() -> ApiClient:
    return ApiClient()


def init_state() -> None:
    """Initialize Streamlit session state keys."""
    st.session_state.setdefault("workflows", {})
    st.session_state.setdefault("selected_question", None)


def prompt_key(question_id: int) -> str:
    return f"prompt_{question_id}"


def open_workflow(question_id: int) -> SolveWorkflow:
    """Start a fresh visit for `question_id`, closing the previous one."""
    for workflow in st.session_state["workflows"].values():
        workflow.close()
    api = get_api()
    workflow = SolveWorkflow(
        question_id,
        QuestionRepository(api),
        SolveClient(api),
        model=settings.DEFAULT_MODEL,
    )
    st.session_state["workflows"] = {question_id: workflow}
    st.session_state[prompt_key(question_id)] = ""
    workflow.load()
    return workflow


def on_prompt_change(workflow: SolveWorkflow) -> None:
    workflow.edit_prompt(st.session_state[prompt_key(workflow.state.question_id)])


def on_submit(workflow: SolveWorkflow) -> None:
    with st.spinner("Evaluating your answer..."):
        state = workflow.submit()
    if state.phase is Phase.RESULT:
        HISTORY.record(state.result)


def on_retry(workflow: SolveWorkflow) -> None:
    workflow.retry()
    st.session_state[prompt_key(workflow.state.question_id)] = ""


def on_reload(workflow: SolveWorkflow) -> None:
    workflow.load()


def render_result(workflow: SolveWorkflow) -> None:
    result = workflow.state.result
    tier = score_tier(result.score)
    st.subheader("Your score")
    st.markdown(
        f"## :{TIER_COLORS[tier]}[{result.score} pts]  \n**{score_message(result.score)}**"
    )
    st.markdown("**AI output**")
    st.write(result.ai_output)
    st.markdown("**Details**")
    for label, value in result_details(result):
        st.caption(f"{label}: {value}")
    st.button("Try again", on_click=on_retry, args=(workflow,))


def render_editor(workflow: SolveWorkflow) -> None:
    state = workflow.state
    question = state.question
    st.write(
        "Write a prompt that instructs the AI on this question. "
        "The better your prompt, the more accurate the AI's answer."
    )
    tips = prompt_tips(question.tags)
    if tips:
        with st.expander("💡 Prompt tips"):
            for tip in tips:
                st.markdown(f"- {tip}")

    submitting = state.phase is Phase.SUBMITTING
    st.text_area(
        "Your prompt for the AI",
        key=prompt_key(question.id),
        height=240,
        placeholder="e.g. Solve this problem step by step",
        on_change=on_prompt_change,
        args=(workflow,),
        disabled=submitting,
    )
    if workflow.inline_error:
        st.error(workflow.inline_error)
    st.caption(prompt_counter(state.prompt))
    st.button(
        "Submitting..." if submitting else "Submit answer",
        on_click=on_submit,
        args=(workflow,),
        disabled=not workflow.can_submit,
        type="primary",
    )


def render_solve_page(question_id: int) -> None:
    workflow = st.session_state["workflows"].get(question_id) or open_workflow(question_id)
    state = workflow.state

    if state.phase is Phase.LOADING:
        st.info("Loading...")
        return
    if state.phase is Phase.NOT_FOUND:
        st.error("The requested question could not be found.")
        return
    if state.phase is Phase.LOAD_ERROR:
        st.error(state.load_error)
        st.button("Retry", on_click=on_reload, args=(workflow,))
        return

    question = state.question
    st.title(f"Question #{question.id}")
    st.caption(f"Difficulty: {render_stars(question.level)}")
    labels = [f"{tag.icon} {tag.label}" for tag in known_tags(question.tags)]
    if labels:
        st.markdown(" · ".join(labels))

    if state.phase is Phase.RESULT:
        render_result(workflow)
    else:
        render_editor(workflow)


def render_history() -> None:
    st.subheader("Attempt history")
    summary = summarize_attempts(HISTORY.load().get("attempts", []))
    if not summary["rows"]:
        st.info("No attempts yet. Submit a prompt to populate this table.")
        return
    stats = summary["stats"]
    if stats:
        metric_cols = st.columns(3)
        metric_cols[0].metric("Best score", stats["best"])
        metric_cols[1].metric("Average score", f"{stats['avg']:.1f}")
        metric_cols[2].metric("Trend", f"{stats['trend']:+d}")
    score_series: list[dict[str, Any]] = [
        {"attempt": row["#"], "score": row["Score"]}
        for row in summary["rows"]
        if isinstance(row["Score"], int)
    ]
    chart = (
        alt.Chart(alt.Data(values=score_series))
        .mark_line(point=True)
        .encode(
            x=alt.X("attempt:Q", title="Attempt", axis=alt.Axis(tickMinStep=1)),
            y=alt.Y("score:Q", title="Score", scale=alt.Scale(domain=[0, 100])),
        )
        .properties(height=180)
    )
    st.altair_chart(chart, use_container_width=True)
    st.dataframe(summary["rows"], use_container_width=True)


st.set_page_config(page_title="CoT Game", layout="wide")
init_state()

with st.sidebar:
    st.subheader("Questions")
    questions = []
    try:
        questions = QuestionRepository(get_api()).list_questions()
    except RequestFailed as exc:
        st.error(f"Error: {exc.message}")
        st.button("Reload")

    if questions:
        levels = unique_levels(questions)
        level_choice = st.selectbox(
            "Difficulty filter",
            ["All"] + levels,
            format_func=lambda lv: lv if lv == "All" else f"Level {lv} ({render_stars(lv)})",
        )
        shown = sort_by_level(filter_by_level(questions, None if level_choice == "All" else level_choice))
        if not shown:
            st.info("No questions at the selected difficulty.")
        else:
            st.caption(f"{len(shown)} questions")
            for q in shown:
                if st.button(f"#{q.id}  {render_stars(q.level)}", key=f"open_{q.id}"):
                    st.session_state["selected_question"] = q.id
    elif not st.session_state.get("selected_question"):
        st.info("No questions available.")

    st.divider()
    st.caption(f"API: {settings.API_BASE_URL}")
    st.caption(f"Model: {settings.DEFAULT_MODEL} · max {MAX_PROMPT_LENGTH} characters")


left, right = st.columns([2, 1], gap="large")

with left:
    selected = st.session_state.get("selected_question")
    if selected is None:
        st.title("CoT Game")
        st.write(
            "Pick a question from the sidebar. You will not see its statement: "
            "write a prompt that leads the AI to the hidden answer."
        )
    else:
        render_solve_page(selected)

with right:
    render_history()
