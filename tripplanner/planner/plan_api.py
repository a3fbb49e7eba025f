"""
FastAPI endpoints for the planner.

Provides the API to create a plan from structured trip preferences and to
revise an existing plan with a free-text instruction.
"""

import json
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from tripplanner.planner.response_parser import ParseError
from tripplanner.planner.schemas import ChatRequest, ErrorResponse, PlanRequest
from tripplanner.planner.service import PlanService
from tripplanner.shared.contracts.plan_output import Plan
from tripplanner.shared.llm.client import CompletionError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plan", tags=["plan"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_plan_service(request: Request) -> PlanService:
    """Return the plan service created at startup."""
    return request.app.state.plan_service


def error_response(status_code: int, error: str, detail: Optional[str]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post("", response_model=Plan, responses=ERROR_RESPONSES)
def create_plan(
    body: Optional[PlanRequest] = None,
    service: PlanService = Depends(get_plan_service),
):
    """
    Create a trip plan.

    All request fields are optional; missing ones take their defaults.
    """
    request_id = str(uuid.uuid4())
    _log = f"[request={request_id}] [route=plan] "
    plan_request = body or PlanRequest()

    logger.info(
        f"{_log}POST /api/plan | city={plan_request.city}, hours={plan_request.hours}, "
        f"budget={plan_request.budget} {plan_request.currency}, "
        f"language={plan_request.language}"
    )
    logger.debug(f"{_log}Body: {plan_request.model_dump_json(by_alias=True)}")

    try:
        plan = service.create_plan_for_request(plan_request, request_id=request_id)
    except (CompletionError, ParseError) as e:
        logger.error(f"{_log}Plan creation failed: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Plan could not be created", str(e)
        )

    logger.info(f"{_log}Responding | plan_id={plan.id}, stops={len(plan.stops)}")
    return plan


@router.post("/chat", response_model=Plan, responses=ERROR_RESPONSES)
def chat_plan(
    body: Optional[ChatRequest] = None,
    service: PlanService = Depends(get_plan_service),
):
    """
    Revise an existing plan.

    The current plan and the user's instruction are sent back to the model,
    which returns an updated plan in the same shape.
    """
    request_id = str(uuid.uuid4())
    _log = f"[request={request_id}] [route=plan_chat] "

    if body is None or body.plan is None or not body.message or not body.message.strip():
        logger.warning(f"{_log}Rejected: plan and message are required")
        return error_response(
            status.HTTP_400_BAD_REQUEST, "Invalid request", "plan and message are required"
        )

    logger.info(
        f"{_log}POST /api/plan/chat | message_length={len(body.message)}, "
        f"plan_size={len(json.dumps(body.plan, ensure_ascii=False))}"
    )

    try:
        plan = service.update_plan(body.plan, body.message, request_id=request_id)
    except (CompletionError, ParseError) as e:
        logger.error(f"{_log}Plan update failed: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Plan could not be updated", str(e)
        )

    logger.info(f"{_log}Responding | plan_id={plan.id}, stops={len(plan.stops)}")
    return plan
