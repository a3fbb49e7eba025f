"""Prompt templates and builders for the planner."""

from tripplanner.planner.prompts.templates import SYSTEM_PROMPT
from tripplanner.planner.prompts.builders import (
    build_chat_prompt,
    build_messages,
    build_system_prompt,
    build_user_prompt,
)

__all__ = [
    "SYSTEM_PROMPT",
    "build_chat_prompt",
    "build_messages",
    "build_system_prompt",
    "build_user_prompt",
]
