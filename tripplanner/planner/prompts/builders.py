"""
Prompt builders for the planner.

These functions construct the prompts sent to the LLM from a plan
request or an existing plan. They are pure: same input, same string.
"""

import json
from typing import Any, Dict, List, Mapping, Optional, Union

from tripplanner.planner.prompts.templates import (
    CHAT_PROMPT_TEMPLATE,
    CROWD_PREFERENCE_LABELS,
    LANGUAGE_LABELS,
    MOBILITY_LABELS,
    PLAN_PROMPT_TEMPLATE,
    QUALITY_MODE_LABELS,
    SYSTEM_PROMPT,
)
from tripplanner.planner.schemas import PlanRequest


def describe(value: str, labels: Mapping[str, str]) -> str:
    """Map a request code to its readable label, or return it unchanged."""
    return labels.get(value.strip().lower(), value)


def format_number(value: float) -> str:
    """Render 4.0 as '4' and 2.5 as '2.5'."""
    return str(int(value)) if float(value).is_integer() else str(value)


def format_interests(interests: Union[List[str], str]) -> str:
    """
    Format interest tags as a comma-separated string.

    Args:
        interests: List of tags or an already comma-separated string

    Returns:
        Comma-separated interests, or "Genel" if none were given
    """
    if isinstance(interests, str):
        text = interests.strip()
    else:
        text = ", ".join(tag.strip() for tag in interests if tag and tag.strip())
    return text or "Genel"


def build_user_prompt(request: Optional[PlanRequest] = None) -> str:
    """
    Build the user prompt for a new plan.

    Args:
        request: Plan request. Missing fields take their schema defaults;
            None means an all-default request.

    Returns:
        Complete user prompt string
    """
    if request is None:
        request = PlanRequest()

    special_request = request.special_request.strip()
    special_request_line = f"Özel istek: {special_request}\n" if special_request else ""

    return PLAN_PROMPT_TEMPLATE.format(
        city=request.city,
        date=request.date,
        hours=format_number(request.hours),
        start_time=request.start_time,
        budget=format_number(request.budget),
        currency=request.currency,
        interests=format_interests(request.interests),
        crowd=describe(request.crowd_preference, CROWD_PREFERENCE_LABELS),
        mobility=describe(request.mobility, MOBILITY_LABELS),
        special_request_line=special_request_line,
        language=describe(request.language, LANGUAGE_LABELS),
        quality=describe(request.quality_mode, QUALITY_MODE_LABELS),
    )


def build_system_prompt() -> str:
    """Return the fixed system instruction describing the plan schema."""
    return SYSTEM_PROMPT


def build_chat_prompt(plan: Dict[str, Any], message: str) -> str:
    """
    Build the user prompt for revising an existing plan.

    Args:
        plan: The plan to revise, as received from the client
        message: The user's free-text instruction

    Returns:
        Complete user prompt string
    """
    return CHAT_PROMPT_TEMPLATE.format(
        plan_json=json.dumps(plan, indent=2, ensure_ascii=False),
        message=message.strip(),
    )


def build_messages(system_prompt: str, user_prompt: str) -> List[Dict[str, str]]:
    """Assemble chat messages for the completion API."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
