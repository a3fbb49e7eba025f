"""
Schemas for the planner.

Defines the LangGraph state schema for the plan pipeline and the
API request/response models.
"""

from typing import Any, Dict, List, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# LangGraph State Schema
# =============================================================================


class PlanState(TypedDict):
    """
    State schema for the plan pipeline graph.

    Carries the prompt in, the raw completion text between nodes, and the
    normalized plan (serialized by alias) out.
    """

    request_id: str
    system_prompt: str
    user_prompt: str

    # Defaults applied when the model omits them
    currency: Optional[str]
    language: Optional[str]

    # Filled by the completion node
    raw_content: Optional[str]

    # Filled by the reconcile node
    plan: Optional[Dict[str, Any]]


# =============================================================================
# API Request/Response Models
# =============================================================================


class PlanRequest(BaseModel):
    """
    Request to create a trip plan.

    Every field is optional and an explicit null counts as absent.
    Enum-like fields (crowd_preference, mobility, language, quality_mode)
    accept free text; unknown values are passed to the model verbatim.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    city: str = Field(default="İstanbul", description="City to plan in")
    date: str = Field(default="Bugün", description="Day of the trip, free text")
    hours: float = Field(default=4, description="Available time in hours")
    start_time: str = Field(default="09:00", description="Start time (HH:MM)")
    budget: float = Field(default=500, description="Budget amount")
    currency: str = Field(default="TRY", description="Budget currency")
    interests: Union[List[str], str] = Field(
        default_factory=list, description="Interest tags, list or comma-separated"
    )
    crowd_preference: str = Field(default="any", description="avoid | prefer | any")
    mobility: str = Field(default="walk", description="walk | public | taxi")
    special_request: str = Field(default="", description="Free-text special request")
    language: str = Field(default="tr", description="Response language: tr | en")
    quality_mode: str = Field(
        default="balanced", description="fast | balanced | detailed"
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # An explicit null means "use the default"
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ChatRequest(BaseModel):
    """
    Request to revise an existing plan with a free-text instruction.

    Both fields are required; they are declared optional so the route can
    reject missing values with a 400 before any completion call.
    """

    plan: Optional[Dict[str, Any]] = Field(default=None, description="Existing plan")
    message: Optional[str] = Field(default=None, description="User instruction")


class ErrorResponse(BaseModel):
    """Uniform error body."""

    error: str = Field(description="Short error title")
    detail: Optional[str] = Field(default=None, description="Error detail")
