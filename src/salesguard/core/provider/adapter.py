from __future__ import annotations

from collections.abc import Mapping

from .schemas import ChatTurn, SetupProfile, WorkflowRun

DEFAULT_CHAT_USER = "user-default"
DEFAULT_REVIEW_USER = "user-review-1"
IMAGE_INPUT_KEY = "image"


def system_trigger_query(stage: str, problem_type: str) -> str:
    return f"[System Trigger] Stage: {stage}, Problem: {problem_type}"


def build_chat_turn(
    setup: SetupProfile,
    stage: str,
    problem_type: str,
    query: str | None,
    trigger_value: str,
    conversation_id: str | None = None,
    user_id: str | None = None,
    extra_inputs: Mapping[str, str] | None = None,
) -> ChatTurn:
    inputs = dict(extra_inputs or {})
    inputs.update(
        {
            "industry": setup.industry,
            "product_name": setup.product_name,
            "role": setup.role,
            "stage": stage,
            "problem_type": problem_type,
            "trigger_value": trigger_value,
        }
    )
    query_text = query if query and query.strip() else system_trigger_query(stage, problem_type)
    return ChatTurn(
        query=query_text,
        inputs=inputs,
        user=user_id or DEFAULT_CHAT_USER,
        conversation_id=conversation_id or None,
    )


def build_workflow_run(
    setup: SetupProfile,
    image_payload: str,
    user_id: str | None = None,
    extra_inputs: Mapping[str, str] | None = None,
) -> WorkflowRun:
    """Shape a review run; the image travels as an opaque text input."""
    inputs = dict(extra_inputs or {})
    inputs.update(
        {
            "industry": setup.industry,
            "product": setup.product_name,
            "role": setup.role,
            IMAGE_INPUT_KEY: image_payload,
        }
    )
    return WorkflowRun(inputs=inputs, user=user_id or DEFAULT_REVIEW_USER)
