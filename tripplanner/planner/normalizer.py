"""
Plan normalizer.

The single boundary where an untrusted parsed value becomes a Plan.
Every field keeps a provided value of the right type and otherwise takes
a fixed default, so normalization never fails on missing or malformed
fields, only on a non-object top-level value.

Normalizing an already-normalized plan returns an identical plan.
"""

import math
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from tripplanner.planner.response_parser import ParseError
from tripplanner.shared.contracts.plan_output import Plan, Stop


class PlanShapeError(ParseError):
    """Raised when the extracted value is not a JSON object."""

    pass


DEFAULT_CURRENCY = "TRY"
DEFAULT_LANGUAGE = "tr"
SUPPORTED_LANGUAGES = ("tr", "en")

CROWD_LEVELS = ("az", "orta", "yoğun")
DEFAULT_CROWD = "orta"

DEFAULT_STOP_COST = 0.0
DEFAULT_RATING = 0.0
DEFAULT_RATING_COUNT = 0
DEFAULT_PRICE_LEVEL = 1
DEFAULT_DURATION_MINUTES = 60

STOP_LABELS = {"tr": "Durak {index}", "en": "Stop {index}"}


# =============================================================================
# Field coercion helpers
# =============================================================================


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid number here
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def as_text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def as_non_empty_text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value.strip() else default


def as_non_negative(value: Any, default: float) -> float:
    return float(value) if _is_number(value) and value >= 0 else default


def as_int_in_range(value: Any, low: int, high: int, default: int) -> int:
    """Accept integral numbers within [low, high], else default."""
    if _is_number(value) and float(value).is_integer() and low <= value <= high:
        return int(value)
    return default


def as_count(value: Any, default: int = 0) -> int:
    if _is_number(value) and float(value).is_integer() and value >= 0:
        return int(value)
    return default


def as_coordinate(value: Any, limit: float) -> Optional[float]:
    """
    Validate a latitude (limit=90) or longitude (limit=180).

    Returns None for non-numbers, NaN/inf, out-of-range values and exactly
    zero, which models emit as a placeholder for unknown coordinates.
    """
    if not _is_number(value):
        return None
    if value == 0 or not -limit <= value <= limit:
        return None
    return float(value)


def as_duration(value: Any) -> int:
    """Positive minutes, rounded to whole minutes."""
    if _is_number(value) and value > 0:
        minutes = int(round(value))
        if minutes > 0:
            return minutes
    return DEFAULT_DURATION_MINUTES


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# =============================================================================
# Normalizers
# =============================================================================


def normalize_stop(value: Any, index: int, language: str = DEFAULT_LANGUAGE) -> Stop:
    """
    Normalize one stop.

    Args:
        value: Parsed stop value; non-objects are treated as {}
        index: 1-based position, used for the default place name
        language: Plan language, selects the default place name label

    Returns:
        Fully populated Stop
    """
    data: Dict[str, Any] = value if isinstance(value, dict) else {}
    label = STOP_LABELS.get(language, STOP_LABELS[DEFAULT_LANGUAGE])

    crowd = data.get("crowd")
    return Stop(
        time_range=as_text(data.get("timeRange")),
        place_name=as_non_empty_text(data.get("placeName"), label.format(index=index)),
        address=as_text(data.get("address")),
        description=as_text(data.get("description")),
        reason=as_text(data.get("reason")),
        estimated_cost=as_non_negative(data.get("estimatedCost"), DEFAULT_STOP_COST),
        crowd=crowd if crowd in CROWD_LEVELS else DEFAULT_CROWD,
        transport=as_text(data.get("transport")),
        lat=as_coordinate(data.get("lat"), 90),
        lng=as_coordinate(data.get("lng"), 180),
        rating=(
            float(data["rating"])
            if _is_number(data.get("rating")) and 0 <= data["rating"] <= 5
            else DEFAULT_RATING
        ),
        rating_count=as_count(data.get("ratingCount"), DEFAULT_RATING_COUNT),
        price_level=as_int_in_range(data.get("priceLevel"), 1, 4, DEFAULT_PRICE_LEVEL),
        category=as_text(data.get("category")),
        duration=as_duration(data.get("duration")),
    )


def normalize_stops(value: Any, language: str = DEFAULT_LANGUAGE) -> List[Stop]:
    if not isinstance(value, list):
        return []
    return [normalize_stop(item, index, language) for index, item in enumerate(value, start=1)]


def normalize_tips(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [tip for tip in value if isinstance(tip, str)]


def normalize_plan(
    value: Any,
    currency: Optional[str] = None,
    language: Optional[str] = None,
) -> Plan:
    """
    Normalize an arbitrary parsed value into a Plan.

    Args:
        value: Parsed JSON value from the completion
        currency: Currency used when the value has none (default "TRY")
        language: Language used when the value has none or an unsupported
            one (default "tr")

    Returns:
        Fully populated Plan

    Raises:
        PlanShapeError: If value is not a JSON object
    """
    if not isinstance(value, dict):
        raise PlanShapeError(
            f"Expected a JSON object at top level, got {type(value).__name__}"
        )

    fallback_language = language if language in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE
    plan_language = value.get("language")
    if plan_language not in SUPPORTED_LANGUAGES:
        plan_language = fallback_language

    stops = normalize_stops(value.get("stops"), plan_language)
    total_cost = as_non_negative(
        value.get("estimatedTotalCost"),
        sum(stop.estimated_cost for stop in stops),
    )

    return Plan(
        id=as_non_empty_text(value.get("id"), str(uuid.uuid4())),
        created_at=as_non_empty_text(value.get("createdAt"), _now_iso()),
        summary=as_text(value.get("summary")),
        estimated_total_cost=total_cost,
        currency=as_non_empty_text(
            value.get("currency"),
            as_non_empty_text(currency, DEFAULT_CURRENCY),
        ),
        language=plan_language,
        stops=stops,
        tips=normalize_tips(value.get("tips")),
    )
