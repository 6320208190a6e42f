"""Application context: the long-lived clients shared by every request."""

from dataclasses import dataclass

from loguru import logger

from place_harvester.clients.google_places_client import GooglePlacesClient
from place_harvester.clients.google_sheets_client import GoogleSheetsAppender
from place_harvester.clients.mongo_record_store import PlaceRecordStore
from place_harvester.config import Settings
from place_harvester.harvester import PlaceHarvester


@dataclass
class AppContext:
    places: GooglePlacesClient
    sheets: GoogleSheetsAppender
    store: PlaceRecordStore

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        """Build every client from configuration. Raises ValueError on missing keys."""
        return cls(
            places=GooglePlacesClient(
                api_key=settings.GOOGLE_API_KEY,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            ),
            sheets=GoogleSheetsAppender(
                spreadsheet_id=settings.SPREADSHEET_ID,
                credentials_file=settings.GOOGLE_CREDENTIALS_FILE,
                sheet_range=settings.SHEET_RANGE,
                cache_client=settings.SHEETS_CACHE_CLIENT,
            ),
            store=PlaceRecordStore.from_uri(
                settings.MONGODB_URI,
                database=settings.MONGODB_DATABASE,
                collection=settings.MONGODB_COLLECTION,
            ),
        )

    def harvester(self) -> PlaceHarvester:
        return PlaceHarvester(places=self.places, sheets=self.sheets, store=self.store)

    async def close(self) -> None:
        logger.info("Closing application clients")
        await self.places.close()
        await self.store.close()
