"""
Test doubles for the completion API.
"""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional


class StatusError(Exception):
    """Stand-in for an SDK error carrying an HTTP status code."""

    def __init__(self, status_code: int, message: str = "upstream error"):
        super().__init__(f"{status_code} {message}")
        self.status_code = status_code


class ScriptedCompletion:
    """
    Completion double.

    Each call consumes the next outcome: exceptions are raised, anything
    else is returned. The last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes: Any):
        self.outcomes = list(outcomes)
        self.calls: List[List[Dict[str, str]]] = []

    @property
    def attempts(self) -> int:
        return len(self.calls)

    def complete(self, messages: List[Dict[str, str]]) -> Optional[str]:
        self.calls.append(messages)
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def complete_with_usage(self, messages):
        content = self.complete(messages)
        return content, {"input_tokens": 10, "output_tokens": 2, "total_tokens": 12}

    def raw_completion(self, messages):
        content = self.complete(messages)
        return {"id": "chatcmpl-test", "choices": [{"message": {"content": content}}]}


def make_chat_response(content, finish_reason="stop", usage=(120, 40), choices=True):
    """Build an object shaped like an SDK ChatCompletion."""
    message = SimpleNamespace(content=content)
    response = SimpleNamespace(
        choices=[SimpleNamespace(message=message, finish_reason=finish_reason)] if choices else [],
        usage=None,
    )
    if usage is not None:
        prompt_tokens, completion_tokens = usage
        response.usage = SimpleNamespace(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        )
    response.model_dump = lambda: {"id": "chatcmpl-fake", "content": content}
    return response


class FakeOpenAI:
    """Stand-in for the OpenAI SDK client; records chat.completions.create kwargs."""

    def __init__(self, *responses: Any):
        self.requests: List[Dict[str, Any]] = []
        self._responses = list(responses)
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs: Any) -> Any:
        self.requests.append(kwargs)
        outcome = self._responses[min(len(self.requests), len(self._responses)) - 1]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome
