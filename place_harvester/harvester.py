"""
Place harvesting pipeline.

One harvest runs the stages in a fixed order:

    validating -> searching -> enriching -> appending -> storing -> responding

The first failing stage raises its PlaceHarvesterError subclass and every
later stage is skipped. Nothing is retried.
"""

import asyncio
from enum import Enum
from typing import Mapping

from loguru import logger

from place_harvester.clients.google_places_client import GooglePlacesClient
from place_harvester.clients.google_sheets_client import GoogleSheetsAppender
from place_harvester.clients.mongo_record_store import PlaceRecordStore
from place_harvester.exceptions import (
    EnrichmentError,
    InvalidQueryError,
    SearchError,
    SpreadsheetError,
    StorageError,
)
from place_harvester.infrastructure.observability import get_observability_manager
from place_harvester.infrastructure.trace_decorator import traced
from place_harvester.schemas.places import PlaceRecord
from place_harvester.utils.formatters import format_rows


class HarvestStage(str, Enum):
    VALIDATING = "validating"
    SEARCHING = "searching"
    ENRICHING = "enriching"
    APPENDING = "appending"
    STORING = "storing"
    RESPONDING = "responding"
    ERROR = "error"


def build_query(place_type: str, location: str) -> str:
    return f"{place_type} in {location}"


def validate_query(params: Mapping[str, str]) -> tuple[str, str]:
    """Return (type, location) or raise InvalidQueryError if either is empty."""
    place_type = params.get("type") or ""
    location = params.get("location") or ""
    if not place_type or not location:
        raise InvalidQueryError("type and location query parameters are required")
    return place_type, location


class PlaceHarvester:
    """Sequences search, enrichment, spreadsheet append and storage."""

    def __init__(
        self,
        places: GooglePlacesClient,
        sheets: GoogleSheetsAppender,
        store: PlaceRecordStore,
    ) -> None:
        self._places = places
        self._sheets = sheets
        self._store = store

    @traced(span_name="harvest.stage.search")
    async def search(self, place_type: str, location: str) -> list[dict]:
        try:
            return await self._places.search_text(build_query(place_type, location))
        except Exception as e:
            raise SearchError(f"text search failed: {e}") from e

    async def _fetch_record(self, place_id: str) -> PlaceRecord:
        details = await self._places.get_place_details(place_id)
        return PlaceRecord.model_validate(details)

    @traced(span_name="harvest.stage.enrich")
    async def enrich(self, results: list[dict]) -> list[PlaceRecord]:
        """Fetch details for every result concurrently, keeping input order.

        All-or-nothing: the first failure cancels the remaining lookups.
        """
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self._fetch_record(result["place_id"]))
                    for result in results
                ]
        except ExceptionGroup as failures:
            cause = failures.exceptions[0]
            raise EnrichmentError(f"place details failed: {cause}") from cause
        return [task.result() for task in tasks]

    @traced(span_name="harvest.stage.append")
    async def append(self, records: list[PlaceRecord]) -> None:
        if not records:
            logger.info("No records to append, skipping spreadsheet write")
            return
        try:
            await self._sheets.append_rows(format_rows(records))
        except Exception as e:
            raise SpreadsheetError(f"spreadsheet append failed: {e}") from e

    @traced(span_name="harvest.stage.store")
    async def store(self, records: list[PlaceRecord]) -> None:
        if not records:
            logger.info("No records to store, skipping MongoDB insert")
            return
        try:
            await self._store.insert_records(records)
        except Exception as e:
            raise StorageError(f"record insert failed: {e}") from e

    async def run(self, place_type: str, location: str) -> list[PlaceRecord]:
        """Run one harvest and return the records in search-result order."""
        observability = get_observability_manager()
        stage = HarvestStage.SEARCHING

        with observability.create_span(
            name="harvest.request",
            attributes={"harvest.type": place_type, "harvest.location": location},
        ):
            try:
                logger.info(f"Harvest [{stage.value}]: {build_query(place_type, location)!r}")
                results = await self.search(place_type, location)

                stage = HarvestStage.ENRICHING
                logger.info(f"Harvest [{stage.value}]: {len(results)} search results")
                records = await self.enrich(results)

                stage = HarvestStage.APPENDING
                logger.info(f"Harvest [{stage.value}]: {len(records)} records")
                await self.append(records)

                stage = HarvestStage.STORING
                logger.info(f"Harvest [{stage.value}]: {len(records)} records")
                await self.store(records)
            except Exception:
                logger.warning(f"Harvest [{HarvestStage.ERROR.value}]: aborted while {stage.value}")
                raise

        logger.info(f"Harvest [{HarvestStage.RESPONDING.value}]: {len(records)} records")
        return records
