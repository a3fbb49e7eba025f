"""LLM client utilities."""

from tripplanner.shared.llm.client import (
    CompletionClient,
    CompletionError,
    EmptyCompletionError,
    call_with_retry,
    is_transient_error,
)

__all__ = [
    "CompletionClient",
    "CompletionError",
    "EmptyCompletionError",
    "call_with_retry",
    "is_transient_error",
]
