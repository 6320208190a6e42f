"""
Place Harvester Server.

FastMCP instance exposing the harvest pipeline two ways:
- GET /api/places?type=...&location=...  (custom HTTP route)
- harvest_places                          (MCP tool)

The application context is passed in explicitly; nothing is captured from
module globals.
"""

from typing import Awaitable, Callable

from fastmcp import FastMCP
from loguru import logger
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

from place_harvester.context import AppContext
from place_harvester.exceptions import InvalidQueryError, PlaceHarvesterError
from place_harvester.harvester import HarvestStage, PlaceHarvester, validate_query
from place_harvester.schemas.places import PlaceRecord

PLACES_PATH = "/api/places"


# ---------------------------------------------------------------------------
# HTTP route
# ---------------------------------------------------------------------------


def make_places_endpoint(
    harvester: PlaceHarvester,
) -> Callable[[Request], Awaitable[Response]]:
    """Build the GET /api/places handler bound to one harvester."""

    async def places_endpoint(request: Request) -> Response:
        try:
            place_type, location = validate_query(request.query_params)
        except InvalidQueryError as e:
            logger.info(f"Harvest [{HarvestStage.VALIDATING.value}]: rejected: {e}")
            return PlainTextResponse(e.public_message, status_code=400)

        try:
            records = await harvester.run(place_type, location)
        except PlaceHarvesterError as e:
            logger.exception(f"Harvest failed while {e.stage}: {e}")
            return PlainTextResponse(e.public_message, status_code=500)
        except Exception:
            logger.exception("Unexpected error during harvest")
            return PlainTextResponse(PlaceHarvesterError.public_message, status_code=500)

        return JSONResponse([record.to_document() for record in records])

    return places_endpoint


# ---------------------------------------------------------------------------
# Server factory
# ---------------------------------------------------------------------------


def build_server(context: AppContext) -> FastMCP:
    """Create the FastMCP server with the HTTP route and the MCP tool."""
    server = FastMCP("place_harvester")
    harvester = context.harvester()

    server.custom_route(PLACES_PATH, methods=["GET"])(make_places_endpoint(harvester))

    @server.tool(
        title="Harvest Places",
        description=(
            "Search Google Places for a category of place in a location, fetch "
            "details for every result, append one summary row per place to the "
            "reporting spreadsheet and store the records in MongoDB. Returns the "
            "records in search-result order."
        ),
        tags={"places", "harvest", "google"},
        annotations={
            "title": "Harvest Places",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": False,
            "openWorldHint": True,
        },
    )
    async def harvest_places(place_type: str, location: str) -> list[PlaceRecord]:
        """Harvest places of one category in one location.

        Args:
            place_type: Category of place (e.g. "cafe", "dentist").
            location: Where to search (e.g. "Paris").
        """
        if not place_type or not location:
            raise InvalidQueryError(InvalidQueryError.public_message)
        return await harvester.run(place_type, location)

    return server
