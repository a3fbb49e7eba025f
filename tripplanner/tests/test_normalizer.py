"""
Unit tests for plan normalization.

Tests default completeness, coordinate sanitization, numeric fallbacks,
shape rejection and idempotence.
"""

import math

import pytest

from tripplanner.planner.normalizer import (
    DEFAULT_DURATION_MINUTES,
    PlanShapeError,
    as_coordinate,
    normalize_plan,
    normalize_stop,
)
from tripplanner.planner.response_parser import ParseError
from tripplanner.shared.contracts.plan_output import Plan, Stop


STOP_FIELDS = {
    "timeRange": str,
    "placeName": str,
    "address": str,
    "description": str,
    "reason": str,
    "estimatedCost": float,
    "crowd": str,
    "transport": str,
    "rating": float,
    "ratingCount": int,
    "priceLevel": int,
    "category": str,
    "duration": int,
}


class TestShape:
    """Top-level values that are not objects are rejected."""

    @pytest.mark.parametrize("value", [None, [], [{"summary": "x"}], "plan", 42, 1.5, True])
    def test_non_object_raises(self, value):
        with pytest.raises(PlanShapeError):
            normalize_plan(value)

    def test_shape_error_is_parse_error(self):
        assert issubclass(PlanShapeError, ParseError)


class TestPlanDefaults:
    """Every plan field is present and typed even for {}."""

    def test_empty_object(self):
        plan = normalize_plan({})

        assert isinstance(plan, Plan)
        assert plan.id
        assert plan.created_at.endswith("Z")
        assert plan.summary == ""
        assert plan.estimated_total_cost == 0
        assert plan.currency == "TRY"
        assert plan.language == "tr"
        assert plan.stops == []
        assert plan.tips == []

    def test_wire_keys_are_camel_case(self):
        data = normalize_plan({}).model_dump(by_alias=True)
        assert set(data) == {
            "id", "createdAt", "summary", "estimatedTotalCost",
            "currency", "language", "stops", "tips",
        }

    def test_ids_are_unique(self):
        assert normalize_plan({}).id != normalize_plan({}).id

    def test_caller_defaults_apply_when_missing(self):
        plan = normalize_plan({}, currency="EUR", language="en")
        assert plan.currency == "EUR"
        assert plan.language == "en"

    def test_provided_values_win_over_caller_defaults(self):
        plan = normalize_plan({"currency": "USD", "language": "tr"}, currency="EUR", language="en")
        assert plan.currency == "USD"
        assert plan.language == "tr"

    def test_unsupported_language_falls_back(self):
        assert normalize_plan({"language": "de"}).language == "tr"
        assert normalize_plan({"language": "de"}, language="en").language == "en"
        assert normalize_plan({}, language="fr").language == "tr"

    def test_wrong_types_replaced(self):
        plan = normalize_plan(
            {
                "id": 123,
                "createdAt": None,
                "summary": ["not", "text"],
                "estimatedTotalCost": "500",
                "currency": "",
                "stops": {"not": "a list"},
                "tips": "one tip",
            }
        )
        assert isinstance(plan.id, str) and plan.id != "123"
        assert plan.created_at
        assert plan.summary == ""
        assert plan.estimated_total_cost == 0
        assert plan.currency == "TRY"
        assert plan.stops == []
        assert plan.tips == []

    def test_non_string_tips_dropped(self):
        plan = normalize_plan({"tips": ["a", 1, None, "b", {"c": 1}]})
        assert plan.tips == ["a", "b"]

    def test_total_cost_defaults_to_sum_of_stops(self):
        plan = normalize_plan({"stops": [{"estimatedCost": 100}, {"estimatedCost": 50.5}, {}]})
        assert plan.estimated_total_cost == 150.5

    def test_negative_total_cost_replaced(self):
        plan = normalize_plan({"estimatedTotalCost": -10, "stops": [{"estimatedCost": 20}]})
        assert plan.estimated_total_cost == 20

    def test_provided_fields_kept(self, sample_plan):
        plan = normalize_plan(sample_plan)
        assert plan.summary == sample_plan["summary"]
        assert plan.estimated_total_cost == 350
        assert [s.place_name for s in plan.stops] == ["Ayasofya", "Kapalıçarşı"]
        assert plan.stops[0].crowd == "yoğun"
        assert plan.stops[0].lat == 41.0086
        assert plan.stops[1].price_level == 2
        assert plan.tips == sample_plan["tips"]


class TestStopDefaults:
    """Every stop field is present and typed even for {} or non-objects."""

    def test_single_empty_stop(self):
        plan = normalize_plan({"stops": [{}]})

        assert len(plan.stops) == 1
        stop = plan.stops[0]
        assert stop.place_name == "Durak 1"
        assert stop.duration == 60
        assert stop.price_level == 1
        assert stop.crowd == "orta"
        assert stop.lat is None
        assert stop.lng is None
        assert stop.estimated_cost == 0
        assert stop.rating == 0
        assert stop.rating_count == 0

    def test_all_fields_present_and_typed(self):
        data = normalize_plan({"stops": [{}]}).model_dump(by_alias=True)
        stop = data["stops"][0]
        for field, expected_type in STOP_FIELDS.items():
            assert isinstance(stop[field], expected_type), field
        assert stop["lat"] is None and stop["lng"] is None

    def test_non_object_elements_normalized_from_empty(self):
        plan = normalize_plan({"stops": ["Galata Kulesi", None, 7, {"placeName": "Karaköy"}]})
        assert [s.place_name for s in plan.stops] == ["Durak 1", "Durak 2", "Durak 3", "Karaköy"]

    def test_positional_label_follows_language(self):
        plan = normalize_plan({"language": "en", "stops": [{}, {"placeName": "  "}]})
        assert [s.place_name for s in plan.stops] == ["Stop 1", "Stop 2"]

    def test_order_preserved(self):
        names = [f"P{i}" for i in range(5)]
        plan = normalize_plan({"stops": [{"placeName": n} for n in names]})
        assert [s.place_name for s in plan.stops] == names

    @pytest.mark.parametrize("crowd", ["low", "", None, 1, "AZ"])
    def test_unknown_crowd_defaults(self, crowd):
        assert normalize_stop({"crowd": crowd}, 1).crowd == "orta"

    @pytest.mark.parametrize("level", [0, 5, 2.5, "2", True, None])
    def test_invalid_price_level_defaults(self, level):
        assert normalize_stop({"priceLevel": level}, 1).price_level == 1

    def test_integral_float_price_level_kept(self):
        assert normalize_stop({"priceLevel": 3.0}, 1).price_level == 3

    @pytest.mark.parametrize("duration", [0, -30, "90", None, math.nan, math.inf, True])
    def test_invalid_duration_defaults(self, duration):
        assert normalize_stop({"duration": duration}, 1).duration == DEFAULT_DURATION_MINUTES

    def test_fractional_duration_rounded(self):
        assert normalize_stop({"duration": 44.6}, 1).duration == 45

    @pytest.mark.parametrize("cost", [-1, "50", None, math.nan, False])
    def test_invalid_cost_defaults(self, cost):
        assert normalize_stop({"estimatedCost": cost}, 1).estimated_cost == 0

    @pytest.mark.parametrize("rating", [-1, 5.5, "4.5", math.inf])
    def test_invalid_rating_defaults(self, rating):
        assert normalize_stop({"rating": rating}, 1).rating == 0

    @pytest.mark.parametrize("count", [-5, 1.5, "100"])
    def test_invalid_rating_count_defaults(self, count):
        assert normalize_stop({"ratingCount": count}, 1).rating_count == 0

    def test_huge_integer_rejected(self):
        assert normalize_stop({"estimatedCost": 10 ** 400}, 1).estimated_cost == 0


class TestCoordinates:
    """Coordinate sanitization."""

    @pytest.mark.parametrize(
        "value",
        [0, 0.0, -0.0, math.nan, math.inf, -math.inf, 90.0001, -91, "41.0", None, True, [41]],
    )
    def test_invalid_latitude_is_null(self, value):
        assert as_coordinate(value, 90) is None
        assert normalize_stop({"lat": value}, 1).lat is None

    @pytest.mark.parametrize("value", [0, math.nan, 180.5, -181, "28.9", False])
    def test_invalid_longitude_is_null(self, value):
        assert normalize_stop({"lng": value}, 1).lng is None

    @pytest.mark.parametrize("value", [41.0086, -33.8688, 0.0001, 90, -90, 1])
    def test_valid_latitude_preserved(self, value):
        assert normalize_stop({"lat": value}, 1).lat == value

    @pytest.mark.parametrize("value", [28.9802, -122.4194, 180, -180, -0.1276])
    def test_valid_longitude_preserved(self, value):
        assert normalize_stop({"lng": value}, 1).lng == value


class TestIdempotence:
    """Normalizing a normalized plan changes nothing."""

    def test_sample_plan(self, sample_plan):
        first = normalize_plan(sample_plan)
        second = normalize_plan(first.model_dump(by_alias=True))

        assert second == first
        assert second.model_dump_json(by_alias=True) == first.model_dump_json(by_alias=True)

    def test_defaulted_plan(self):
        first = normalize_plan({"stops": [{}, "x", {"lat": 0, "lng": 200}], "tips": [1]})
        second = normalize_plan(first.model_dump(by_alias=True))

        assert second.model_dump_json(by_alias=True) == first.model_dump_json(by_alias=True)

    def test_english_plan_with_caller_defaults(self):
        first = normalize_plan({"stops": [{}]}, currency="EUR", language="en")
        second = normalize_plan(first.model_dump(by_alias=True))

        assert second == first

    def test_json_round_trip(self, sample_plan):
        first = normalize_plan(sample_plan)
        second = normalize_plan(Plan.model_validate_json(first.model_dump_json(by_alias=True)).model_dump(by_alias=True))

        assert second == first


class TestContracts:
    """Plan/Stop accept snake_case and camelCase."""

    def test_stop_populate_by_name(self):
        stop = normalize_stop({}, 1)
        assert Stop.model_validate(stop.model_dump()) == stop
        assert Stop.model_validate(stop.model_dump(by_alias=True)) == stop
