"""
OpenAI client with retry logic.

Provides the OpenAI-backed completion client and a retry wrapper that
retries only rate-limit and service-unavailable failures using tenacity.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from openai import OpenAI
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_incrementing,
)

from tripplanner.config import PlannerConfig


logger = logging.getLogger(__name__)

# Status codes worth another attempt (rate limited, service unavailable)
TRANSIENT_STATUS_CODES = frozenset({429, 503})

T = TypeVar("T")

Messages = List[Dict[str, str]]


class CompletionError(Exception):
    """Raised when the completion API call fails terminally."""

    pass


class EmptyCompletionError(CompletionError):
    """Raised when the completion API returns no text content."""

    pass


def get_status_code(exc: BaseException) -> Optional[int]:
    """Return the HTTP status carried by an SDK error, if any."""
    status = getattr(exc, "status_code", None)
    if status is None:
        status = getattr(exc, "status", None)
    return status if isinstance(status, int) else None


def is_transient_error(exc: BaseException) -> bool:
    """True for errors that carry a 429 or 503 status code."""
    return get_status_code(exc) in TRANSIENT_STATUS_CODES


def call_with_retry(
    fn: Callable[..., T],
    *args: Any,
    max_retries: int = 2,
    backoff_seconds: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
    **kwargs: Any,
) -> T:
    """
    Call fn, retrying transient failures with linearly increasing backoff.

    Attempt n (1-based) that fails transiently is followed by a wait of
    n * backoff_seconds, so the defaults wait 2s then 4s.

    Args:
        fn: Callable performing a single attempt
        max_retries: Additional attempts after the first
        backoff_seconds: Base wait between attempts
        sleep: Sleep function used between attempts

    Returns:
        Whatever fn returns on the first successful attempt.

    Raises:
        Exception: The last error from fn when it is not transient or
            when retries are exhausted.
    """
    retryer = Retrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_incrementing(start=backoff_seconds, increment=backoff_seconds),
        retry=retry_if_exception(is_transient_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        sleep=sleep,
        reraise=True,
    )
    return retryer(fn, *args, **kwargs)


def create_openai_client(config: PlannerConfig) -> OpenAI:
    """
    Create the OpenAI SDK client for this process.

    SDK-level retries are disabled so call_with_retry is the only retry loop.
    """
    return OpenAI(
        api_key=config.api_key,
        timeout=config.timeout_seconds,
        max_retries=0,
    )


class CompletionClient:
    """
    Thin wrapper over the OpenAI chat completions API.

    Each method performs exactly one API request; retry policy lives in
    call_with_retry so it can be applied (and tested) independently.
    """

    def __init__(self, config: PlannerConfig, client: Optional[OpenAI] = None):
        self.model = config.model
        self._client = client or create_openai_client(config)

    def complete(self, messages: Messages) -> Optional[str]:
        """
        Request a JSON-object completion and return its text content.

        Args:
            messages: List of message dicts with 'role' and 'content' keys

        Returns:
            The assistant's content, or None when the API returned none.
        """
        start_time = time.perf_counter()
        response = self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            response_format={"type": "json_object"},
        )
        duration_ms = (time.perf_counter() - start_time) * 1000

        if not response.choices:
            logger.error(f"[model={self.model}] Completion returned no choices")
            return None

        choice = response.choices[0]
        content = choice.message.content if choice.message else None
        usage = response.usage
        logger.info(
            f"[model={self.model}] Completion received | duration={duration_ms:.0f}ms, "
            f"finish_reason={choice.finish_reason}, "
            f"content_length={len(content) if content else 0}, "
            f"tokens_in={usage.prompt_tokens if usage else 'N/A'}, "
            f"tokens_out={usage.completion_tokens if usage else 'N/A'}"
        )
        return content

    def complete_with_usage(self, messages: Messages) -> Tuple[Optional[str], Dict[str, int]]:
        """
        Request a plain-text completion and return content with token usage.

        Args:
            messages: List of message dicts with 'role' and 'content' keys

        Returns:
            Tuple of (response content, usage dict with input/output/total tokens)
        """
        response = self._client.chat.completions.create(
            model=self.model,
            messages=messages,
        )

        content = response.choices[0].message.content if response.choices else None
        usage = {}
        if response.usage:
            usage = {
                "input_tokens": response.usage.prompt_tokens,
                "output_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        return content, usage

    def raw_completion(self, messages: Messages) -> Dict[str, Any]:
        """Request a JSON-object completion and return the full SDK response as a dict."""
        response = self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            response_format={"type": "json_object"},
        )
        return response.model_dump()
