"""Exception hierarchy for the place harvesting pipeline."""


class PlaceHarvesterError(Exception):
    """Base exception for all place-harvester errors."""

    stage = "unknown"
    public_message = "Internal server error"


class InvalidQueryError(PlaceHarvesterError):
    """Raised when a required query parameter is missing or empty."""

    stage = "validating"
    public_message = "Type and location are required"


class PlacesApiError(PlaceHarvesterError):
    """Raised when the Places API answers with a non-OK status."""

    def __init__(self, endpoint: str, status: str, error_message: str | None = None) -> None:
        self.endpoint = endpoint
        self.status = status
        self.error_message = error_message
        detail = f": {error_message}" if error_message else ""
        super().__init__(f"Places {endpoint} returned {status}{detail}")


class SearchError(PlaceHarvesterError):
    """Raised when the text search call fails."""

    stage = "searching"
    public_message = "Error fetching data from Google Places API"


class EnrichmentError(PlaceHarvesterError):
    """Raised when any place details call fails."""

    stage = "enriching"
    public_message = "Error fetching data from Google Places API"


class SpreadsheetError(PlaceHarvesterError):
    """Raised when appending rows to the spreadsheet fails."""

    stage = "appending"
    public_message = "Error appending data to Google Sheets"


class StorageError(PlaceHarvesterError):
    """Raised when inserting records into MongoDB fails."""

    stage = "storing"
    public_message = "Error saving data to MongoDB"
