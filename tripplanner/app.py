"""
FastAPI application factory.

Assembles the app from an explicit configuration and completion client so
tests can build it without environment variables or network access.
"""

import logging
import time
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tripplanner.config import PlannerConfig
from tripplanner.planner.plan_api import router as plan_router
from tripplanner.planner.service import PlanService
from tripplanner.shared.llm.client import CompletionClient
from tripplanner.system.system_api import router as system_router


logger = logging.getLogger(__name__)


def create_app(
    config: PlannerConfig,
    completion_client: Optional[CompletionClient] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        config: Process configuration
        completion_client: Client for the completion API. Defaults to an
            OpenAI-backed CompletionClient built from config.
        sleep: Sleep function used between retries

    Returns:
        Configured FastAPI application
    """
    if completion_client is None:
        completion_client = CompletionClient(config)

    app = FastAPI(
        title="Trip Planner",
        description="Turns trip preferences into a structured day plan using an LLM",
        version="0.1.0",
    )

    app.state.config = config
    app.state.completion_client = completion_client
    app.state.plan_service = PlanService(completion_client.complete, config, sleep=sleep)
    app.state.started_at = time.monotonic()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(plan_router)
    app.include_router(system_router)

    register_exception_handlers(app)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map 404s, invalid bodies and unhandled errors to JSON error bodies."""

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code != status.HTTP_404_NOT_FOUND:
            return await http_exception_handler(request, exc)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Not Found",
                "message": f"Route {request.method} {request.url.path} not found",
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"[route={request.url.path}] Invalid request body: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "detail": _describe_validation_error(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"[route={request.url.path}] Unhandled error: {exc}")
        detail = str(exc) if request.app.state.config.is_development else None
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error", "detail": detail},
        )


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location or 'body'}: {error.get('msg')}")
    return "; ".join(parts)
