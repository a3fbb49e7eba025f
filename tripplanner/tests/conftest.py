"""
Shared fixtures for planner tests.

The completion API is replaced by ScriptedCompletion (see doubles.py).
"""

import copy
import json

import pytest
from httpx import ASGITransport, AsyncClient

from tripplanner.app import create_app
from tripplanner.config import PlannerConfig
from tripplanner.planner.service import PlanService
from tripplanner.tests.doubles import ScriptedCompletion


SAMPLE_PLAN = {
    "summary": "Tarihi yarımadada yarım gün",
    "estimatedTotalCost": 350,
    "currency": "TRY",
    "stops": [
        {
            "timeRange": "09:00 - 10:30",
            "placeName": "Ayasofya",
            "address": "Sultan Ahmet, Fatih",
            "description": "Bizans ve Osmanlı mirası",
            "reason": "Şehrin simgesi",
            "estimatedCost": 0,
            "crowd": "yoğun",
            "transport": "Yürüyerek",
            "lat": 41.0086,
            "lng": 28.9802,
            "rating": 4.8,
            "ratingCount": 120000,
            "priceLevel": 1,
            "category": "Tarih",
            "duration": 90,
        },
        {
            "timeRange": "10:45 - 12:00",
            "placeName": "Kapalıçarşı",
            "address": "Beyazıt, Fatih",
            "description": "Tarihi çarşı",
            "reason": "Alışveriş ve atmosfer",
            "estimatedCost": 350,
            "crowd": "orta",
            "transport": "Tramvay",
            "lat": 41.0107,
            "lng": 28.968,
            "rating": 4.5,
            "ratingCount": 80000,
            "priceLevel": 2,
            "category": "Alışveriş",
            "duration": 75,
        },
    ],
    "tips": ["Erken gidin", "Rahat ayakkabı giyin"],
}


@pytest.fixture
def config():
    return PlannerConfig(api_key="test-key", model="test-model")


@pytest.fixture
def sleeps():
    """Records requested backoff delays instead of sleeping."""
    return []


@pytest.fixture
def sample_plan():
    return copy.deepcopy(SAMPLE_PLAN)


@pytest.fixture
def sample_plan_json():
    return json.dumps(SAMPLE_PLAN, ensure_ascii=False)


@pytest.fixture
def make_service(config, sleeps):
    def _make(completion: ScriptedCompletion) -> PlanService:
        return PlanService(completion.complete, config, sleep=sleeps.append)

    return _make


@pytest.fixture
def completion(sample_plan_json):
    return ScriptedCompletion(sample_plan_json)


@pytest.fixture
def app(config, completion, sleeps):
    return create_app(config, completion_client=completion, sleep=sleeps.append)


@pytest.fixture
async def api_client(app):
    """Async client for the app; unhandled errors surface as 500 responses."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
