"""
Plan creation service.

Composes the retried completion call, JSON extraction and normalization
into prompt-in, Plan-out operations. The completion function is injected
so tests can replace the external API with a stub.
"""

import logging
import time
import uuid
from typing import Any, Callable, Dict, List, Optional

from tripplanner.config import PlannerConfig
from tripplanner.planner.graph.build import create_plan_graph
from tripplanner.planner.prompts.builders import (
    build_chat_prompt,
    build_messages,
    build_system_prompt,
    build_user_prompt,
)
from tripplanner.planner.schemas import PlanRequest, PlanState
from tripplanner.shared.contracts.plan_output import Plan
from tripplanner.shared.llm.client import (
    CompletionError,
    EmptyCompletionError,
    call_with_retry,
    get_status_code,
)
from tripplanner.shared.logging.config import log_event


logger = logging.getLogger(__name__)

# One completion attempt: messages -> content (None when the API returned none)
CompleteFn = Callable[[List[Dict[str, str]]], Optional[str]]


class PlanService:
    """
    Creates and revises plans through the completion -> reconcile pipeline.

    Holds no per-request state; one instance serves all requests.
    """

    def __init__(
        self,
        complete: CompleteFn,
        config: PlannerConfig,
        sleep: Callable[[float], None] = time.sleep,
        system_prompt: Optional[str] = None,
    ):
        self._complete = complete
        self._config = config
        self._sleep = sleep
        self._system_prompt = system_prompt or build_system_prompt()
        self._graph = create_plan_graph(self.request_completion)

    def request_completion(
        self,
        system_prompt: str,
        user_prompt: str,
        request_id: str = "unknown",
    ) -> str:
        """
        Call the completion API with retries on 429/503.

        Args:
            system_prompt: System instruction
            user_prompt: User prompt
            request_id: Identifier used in log lines

        Returns:
            Non-empty completion text

        Raises:
            CompletionError: If the call fails terminally or retries run out
            EmptyCompletionError: If the API returned no content
        """
        _log = f"[request={request_id}] [model={self._config.model}] "
        messages = build_messages(system_prompt, user_prompt)

        logger.info(f"{_log}Sending completion request")
        try:
            content = call_with_retry(
                self._complete,
                messages,
                max_retries=self._config.max_retries,
                backoff_seconds=self._config.retry_backoff_seconds,
                sleep=self._sleep,
            )
        except Exception as e:
            logger.error(
                f"{_log}Completion failed | type={type(e).__name__}, "
                f"status={get_status_code(e)}, error={e}"
            )
            raise CompletionError(f"Completion API error: {e}") from e

        if not content or not content.strip():
            logger.error(f"{_log}Completion content is empty")
            raise EmptyCompletionError("Completion content is empty")

        return content

    def create_plan(
        self,
        user_prompt: str,
        currency: Optional[str] = None,
        language: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> Plan:
        """
        Create a normalized plan from a user prompt.

        Args:
            user_prompt: Prompt describing the plan to create
            currency: Currency applied when the model omits one
            language: Language applied when the model omits one
            request_id: Identifier used in log lines (generated if omitted)

        Returns:
            Normalized Plan

        Raises:
            CompletionError: Upstream call failed or returned no content
            JSONExtractionError: No JSON found in the completion text
            PlanShapeError: Extracted JSON is not an object
        """
        request_id = request_id or str(uuid.uuid4())
        _log = f"[request={request_id}] [graph=plan] "

        initial_state: PlanState = {
            "request_id": request_id,
            "system_prompt": self._system_prompt,
            "user_prompt": user_prompt,
            "currency": currency,
            "language": language,
            "raw_content": None,
            "plan": None,
        }

        start_time = time.perf_counter()
        logger.info(f"{_log}Invoking plan graph | entry=completion")
        final_state = self._graph.invoke(initial_state)
        duration_ms = (time.perf_counter() - start_time) * 1000

        plan = Plan.model_validate(final_state["plan"])
        log_event(
            logger,
            "plan_created",
            {
                "request_id": request_id,
                "plan_id": plan.id,
                "stops": len(plan.stops),
                "duration_ms": round(duration_ms),
            },
        )
        return plan

    def create_plan_for_request(
        self,
        request: Optional[PlanRequest] = None,
        request_id: Optional[str] = None,
    ) -> Plan:
        """Build the user prompt for a plan request and create the plan."""
        if request is None:
            request = PlanRequest()
        return self.create_plan(
            build_user_prompt(request),
            currency=request.currency,
            language=request.language,
            request_id=request_id,
        )

    def update_plan(
        self,
        plan: Dict[str, Any],
        message: str,
        request_id: Optional[str] = None,
    ) -> Plan:
        """
        Revise an existing plan according to a free-text instruction.

        The existing plan's currency and language are kept as defaults for
        the revised plan.
        """
        currency = plan.get("currency") if isinstance(plan.get("currency"), str) else None
        language = plan.get("language") if isinstance(plan.get("language"), str) else None
        return self.create_plan(
            build_chat_prompt(plan, message),
            currency=currency,
            language=language,
            request_id=request_id,
        )
