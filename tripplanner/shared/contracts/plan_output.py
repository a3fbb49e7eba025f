"""
Plan output contract.

Defines the trip plan returned to callers. Attributes are snake_case in
Python and camelCase on the wire.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


CrowdLevel = Literal["az", "orta", "yoğun"]
PlanLanguage = Literal["tr", "en"]


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Stop(_WireModel):
    """A single itinerary stop."""

    time_range: str = Field(description="Time range (e.g., '09:00 - 10:30')")
    place_name: str = Field(description="Place name")
    address: str = Field(description="Street address")
    description: str = Field(description="What to do there")
    reason: str = Field(description="Why the place was selected")
    estimated_cost: float = Field(ge=0, description="Estimated cost in plan currency")
    crowd: CrowdLevel = Field(description="Expected crowd level")
    transport: str = Field(description="How to get there from the previous stop")
    lat: Optional[float] = Field(default=None, ge=-90, le=90, description="Latitude, null if unknown")
    lng: Optional[float] = Field(default=None, ge=-180, le=180, description="Longitude, null if unknown")
    rating: float = Field(ge=0, le=5, description="Average rating")
    rating_count: int = Field(ge=0, description="Number of ratings")
    price_level: int = Field(ge=1, le=4, description="Price level 1-4")
    category: str = Field(description="Category label (e.g., 'Kahvaltı', 'Müze')")
    duration: int = Field(gt=0, description="Duration in minutes")


class Plan(_WireModel):
    """
    Contract for a normalized trip plan.

    Produced only by normalize_plan, which guarantees every field is
    present and type-correct.
    """

    id: str = Field(description="Unique plan identifier")
    created_at: str = Field(description="Creation time, ISO-8601 UTC")
    summary: str = Field(description="Human-readable plan summary")
    estimated_total_cost: float = Field(ge=0, description="Estimated total cost")
    currency: str = Field(description="Currency code (e.g., 'TRY')")
    language: PlanLanguage = Field(description="Response language")
    stops: List[Stop] = Field(default_factory=list, description="Ordered itinerary stops")
    tips: List[str] = Field(default_factory=list, description="Ordered tips")
