"""
FastAPI endpoints for diagnostics.

Provides liveness, a static service descriptor, and round-trip checks
against the completion API.
"""

import logging
import os
import resource
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from tripplanner.shared.llm.client import get_status_code


logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])

ENDPOINTS = [
    "/api/plan",
    "/api/plan/chat",
    "/api/test",
    "/api/raw-test",
    "/api/health",
]

TEST_PROMPT = 'Sadece "Merhaba!" yaz.'
RAW_TEST_SYSTEM_PROMPT = 'Sadece JSON döndür: {"test": true, "message": "hello"}'


@router.get("/")
def root(request: Request):
    """Root endpoint with API information."""
    return {
        "status": "running",
        "model": request.app.state.config.model,
        "endpoints": ENDPOINTS,
    }


@router.get("/api/health")
def health(request: Request):
    """Liveness snapshot: uptime and process memory."""
    usage = resource.getrusage(resource.RUSAGE_SELF)
    return {
        "status": "ok",
        "model": request.app.state.config.model,
        "uptimeSeconds": round(time.monotonic() - request.app.state.started_at, 3),
        "memory": {
            "pid": os.getpid(),
            "maxRssKb": usage.ru_maxrss,
        },
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


@router.get("/api/test")
def test_completion(request: Request):
    """Send a trivial prompt to the completion API and echo the reply."""
    client = request.app.state.completion_client
    model = request.app.state.config.model

    try:
        content, usage = client.complete_with_usage(
            [{"role": "user", "content": TEST_PROMPT}]
        )
    except Exception as e:
        logger.exception(f"[route=test] Test completion failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(e)},
        )

    logger.info(f"[route=test] Test completion succeeded | usage={usage}")
    return {
        "success": True,
        "model": model,
        "response": content,
        "usage": usage,
    }


@router.get("/api/raw-test")
def raw_test_completion(request: Request):
    """Request a JSON-mode completion and return the raw SDK response."""
    client = request.app.state.completion_client

    try:
        raw_response = client.raw_completion(
            [
                {"role": "system", "content": RAW_TEST_SYSTEM_PROMPT},
                {"role": "user", "content": "Test JSON döndür"},
            ]
        )
    except Exception as e:
        logger.exception(f"[route=raw_test] Raw test failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": str(e),
                "error_type": type(e).__name__,
                "error_details": {
                    "status": get_status_code(e),
                    "code": getattr(e, "code", None),
                    "body": getattr(e, "body", None),
                },
            },
        )

    return {"success": True, "raw_response": raw_response}
