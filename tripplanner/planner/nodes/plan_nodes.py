"""
Nodes for the plan pipeline graph.

completion: sends the prompts to the completion API (with retries)
reconcile:  extracts JSON from the completion text and normalizes it
"""

import logging
from typing import Any, Callable, Dict

from tripplanner.planner.normalizer import PlanShapeError, normalize_plan
from tripplanner.planner.response_parser import JSONExtractionError, extract_json
from tripplanner.planner.schemas import PlanState


logger = logging.getLogger(__name__)

# (system_prompt, user_prompt, request_id) -> non-empty completion text
RequestCompletion = Callable[[str, str, str], str]


def make_completion_node(
    request_completion: RequestCompletion,
) -> Callable[[PlanState], Dict[str, Any]]:
    """
    Bind a completion function into a graph node.

    Args:
        request_completion: Function performing the retried completion call

    Returns:
        Node function returning the raw_content state update
    """

    def completion_node(state: PlanState) -> Dict[str, Any]:
        request_id = state.get("request_id", "unknown")
        _log = f"[request={request_id}] [graph=plan] [node=completion] "

        logger.info(f"{_log}Entering node | prompt_length={len(state['user_prompt'])}")
        content = request_completion(
            state["system_prompt"], state["user_prompt"], request_id
        )
        logger.debug(f"{_log}Content preview: {content[:1000]}")

        return {"raw_content": content}

    return completion_node


def reconcile_node(state: PlanState) -> Dict[str, Any]:
    """
    Turn raw completion text into a normalized plan.

    Args:
        state: Pipeline state with raw_content populated

    Returns:
        State update with the plan serialized by alias

    Raises:
        JSONExtractionError: If no JSON can be extracted
        PlanShapeError: If the extracted value is not an object
    """
    request_id = state.get("request_id", "unknown")
    _log = f"[request={request_id}] [graph=plan] [node=reconcile] "

    raw_content = state.get("raw_content") or ""

    try:
        value = extract_json(raw_content)
        plan = normalize_plan(
            value,
            currency=state.get("currency"),
            language=state.get("language"),
        )
    except JSONExtractionError as e:
        logger.error(f"{_log}JSON extraction failed: {e} | content={raw_content[:500]!r}")
        raise
    except PlanShapeError as e:
        logger.error(f"{_log}Malformed plan: {e}")
        raise

    logger.info(
        f"{_log}Plan normalized | stops={len(plan.stops)}, tips={len(plan.tips)}, "
        f"total={plan.estimated_total_cost} {plan.currency}"
    )

    return {"plan": plan.model_dump(by_alias=True)}
