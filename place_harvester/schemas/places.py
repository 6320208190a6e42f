"""Pydantic models for place records harvested from Google Places."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OpeningHours(BaseModel):
    model_config = ConfigDict(extra="allow")

    open_now: bool | None = Field(None, description="Whether the place is open right now.")


class PlaceRecord(BaseModel):
    """One enriched place, as returned by the details endpoint.

    Keys outside the schema are dropped. Fields the API did not send stay
    unset, so ``to_document()`` keeps "absent" distinct from a real value
    such as ``price_level == 0``.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None, description="Display name of the place.")
    formatted_address: str | None = Field(None, description="Full formatted address.")
    formatted_phone_number: str | None = Field(None, description="Local phone number.")
    website: str | None = Field(None, description="Website URL.")
    rating: int | float | None = Field(None, description="Average user rating (1-5).")
    user_ratings_total: int | None = Field(None, description="Total number of user ratings.")
    opening_hours: OpeningHours | None = Field(None, description="Opening hours status.")
    price_level: int | None = Field(None, description="Price level (0-4), 0 is a valid value.")
    icon: str | None = Field(None, description="Category icon URL.")

    @property
    def is_open(self) -> bool:
        return self.opening_hours is not None and self.opening_hours.open_now is True

    def to_document(self) -> dict[str, Any]:
        """Return a fresh dict holding only the fields the API provided."""
        return self.model_dump(mode="json", exclude_unset=True)
