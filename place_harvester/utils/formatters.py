"""Formatting helpers that project place records onto spreadsheet rows."""

from typing import Any

from place_harvester.schemas.places import PlaceRecord

NOT_AVAILABLE = "N/A"


def _or_not_available(value: Any) -> Any:
    # Falsy means missing here, so 0 ratings read as "N/A"
    return value if value else NOT_AVAILABLE


def _price_level_cell(place: PlaceRecord) -> Any:
    # Only a missing key is "N/A"; 0 is a real price level and null stays empty
    if "price_level" not in place.model_fields_set:
        return NOT_AVAILABLE
    return place.price_level


def format_row(place: PlaceRecord) -> list[Any]:
    """Project one place onto the spreadsheet column order."""
    return [
        place.name,
        place.formatted_address,
        _or_not_available(place.formatted_phone_number),
        _or_not_available(place.website),
        _or_not_available(place.rating),
        _or_not_available(place.user_ratings_total),
        _price_level_cell(place),
        "Open" if place.is_open else "Closed",
    ]


def format_rows(places: list[PlaceRecord]) -> list[list[Any]]:
    """Project places onto rows, keeping their order."""
    return [format_row(place) for place in places]
