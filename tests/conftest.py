import asyncio
from unittest.mock import AsyncMock

import pytest
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.testclient import TestClient

from place_harvester.exceptions import PlacesApiError
from place_harvester.harvester import PlaceHarvester
from place_harvester.servers.place_harvester_server import PLACES_PATH, make_places_endpoint

CAFE_A = {
    "name": "Cafe A",
    "formatted_address": "1 Rue de Rivoli, Paris",
    "formatted_phone_number": "01 23 45 67 89",
    "website": "https://cafe-a.example",
    "rating": 4.5,
    "user_ratings_total": 120,
    "opening_hours": {"open_now": True, "weekday_text": ["Monday: 8:00 AM - 6:00 PM"]},
    "price_level": 0,
    "icon": "https://maps.gstatic.com/cafe.png",
}

CAFE_B = {
    "name": "Cafe B",
    "formatted_address": "2 Rue Oberkampf, Paris",
    "icon": "https://maps.gstatic.com/cafe.png",
}


class FakePlacesClient:
    """In-memory stand-in for GooglePlacesClient."""

    def __init__(self, results, details, delays=None, failing=()):
        self.results = results
        self.details = details
        self.delays = delays or {}
        self.failing = set(failing)
        self.queries = []
        self.detail_calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def search_text(self, query):
        self.queries.append(query)
        return self.results

    async def get_place_details(self, place_id):
        self.detail_calls.append(place_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(place_id, 0))
        finally:
            self.in_flight -= 1
        if place_id in self.failing:
            raise PlacesApiError("details", "INVALID_REQUEST")
        return dict(self.details[place_id])


@pytest.fixture
def places_client():
    return FakePlacesClient(
        results=[{"place_id": "p1", "name": "Cafe A"}, {"place_id": "p2", "name": "Cafe B"}],
        details={"p1": CAFE_A, "p2": CAFE_B},
    )


@pytest.fixture
def sheets():
    appender = AsyncMock()
    appender.append_rows = AsyncMock(return_value={"updates": {"updatedRows": 2}})
    return appender


@pytest.fixture
def store():
    record_store = AsyncMock()
    record_store.insert_records = AsyncMock(return_value=["id1", "id2"])
    return record_store


@pytest.fixture
def harvester(places_client, sheets, store):
    return PlaceHarvester(places=places_client, sheets=sheets, store=store)


@pytest.fixture
def client(harvester):
    app = Starlette(
        routes=[Route(PLACES_PATH, make_places_endpoint(harvester), methods=["GET"])]
    )
    return TestClient(app)
