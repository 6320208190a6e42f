"""
Google Places API (legacy web service) HTTP client.

Wraps the two endpoints the harvester needs:
- GET /place/textsearch/json
- GET /place/details/json
"""

import httpx
from loguru import logger

from place_harvester.exceptions import PlacesApiError

BASE_URL = "https://maps.googleapis.com/maps/api/place"

DETAIL_FIELDS = ",".join([
    "name",
    "formatted_address",
    "formatted_phone_number",
    "website",
    "rating",
    "opening_hours",
    "user_ratings_total",
    "icon",
])

_SUCCESS_STATUSES = {"OK", "ZERO_RESULTS"}


class GooglePlacesClient:
    """Async client for the Google Places text search and details endpoints."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("GOOGLE_API_KEY is not set.")
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=timeout,
            transport=transport,
        )

    async def _get(self, endpoint: str, params: dict) -> dict:
        response = await self._client.get(
            f"/{endpoint}/json",
            params={**params, "key": self._api_key},
        )
        response.raise_for_status()
        payload = response.json()
        status = payload.get("status", "OK")
        if status not in _SUCCESS_STATUSES:
            raise PlacesApiError(endpoint, status, payload.get("error_message"))
        return payload

    async def search_text(self, query: str) -> list[dict]:
        """Text Search: first page of places matching a free-text query."""
        logger.debug(f"Text search: query={query!r}")
        payload = await self._get("textsearch", {"query": query})
        return payload.get("results", [])

    async def get_place_details(self, place_id: str) -> dict:
        """Place Details: the fixed detail field set for one place."""
        logger.debug(f"Place details: place_id={place_id!r}")
        payload = await self._get(
            "details",
            {"place_id": place_id, "fields": DETAIL_FIELDS},
        )
        result = payload.get("result")
        if result is None:
            raise PlacesApiError("details", payload.get("status", "ZERO_RESULTS"), "no result")
        return result

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
