"""
Tests for spreadsheet row projection
"""

from place_harvester.schemas.places import PlaceRecord
from place_harvester.utils.formatters import NOT_AVAILABLE, format_row, format_rows

from conftest import CAFE_A, CAFE_B


def test_full_record_row():
    row = format_row(PlaceRecord.model_validate(CAFE_A))
    assert row == [
        "Cafe A",
        "1 Rue de Rivoli, Paris",
        "01 23 45 67 89",
        "https://cafe-a.example",
        4.5,
        120,
        0,
        "Open",
    ]


def test_missing_optional_fields_are_not_available():
    row = format_row(PlaceRecord.model_validate(CAFE_B))
    assert row == [
        "Cafe B",
        "2 Rue Oberkampf, Paris",
        NOT_AVAILABLE,
        NOT_AVAILABLE,
        NOT_AVAILABLE,
        NOT_AVAILABLE,
        NOT_AVAILABLE,
        "Closed",
    ]


def test_zero_price_level_is_kept():
    row = format_row(PlaceRecord(name="Free", formatted_address="x", price_level=0))
    assert row[6] == 0
    assert row[6] != NOT_AVAILABLE


def test_missing_price_level_is_not_available():
    row = format_row(PlaceRecord.model_validate({"name": "X"}))
    assert row[6] == NOT_AVAILABLE


def test_null_price_level_is_an_empty_cell():
    row = format_row(PlaceRecord.model_validate({"name": "X", "price_level": None}))
    assert row[6] is None


def test_zero_rating_and_rating_count_are_not_available():
    row = format_row(PlaceRecord.model_validate({
        "name": "New",
        "formatted_address": "x",
        "rating": 0,
        "user_ratings_total": 0,
    }))
    assert row[4] == NOT_AVAILABLE
    assert row[5] == NOT_AVAILABLE


def test_open_now_false_is_closed():
    row = format_row(PlaceRecord.model_validate({"name": "X", "opening_hours": {"open_now": False}}))
    assert row[7] == "Closed"


def test_opening_hours_without_open_now_is_closed():
    row = format_row(PlaceRecord.model_validate({"name": "X", "opening_hours": {"weekday_text": []}}))
    assert row[7] == "Closed"


def test_empty_phone_is_not_available():
    row = format_row(PlaceRecord(name="X", formatted_phone_number="", website=""))
    assert row[2] == NOT_AVAILABLE
    assert row[3] == NOT_AVAILABLE


def test_rows_keep_input_order():
    places = [PlaceRecord(name=name) for name in ("first", "second", "third")]
    assert [row[0] for row in format_rows(places)] == ["first", "second", "third"]
