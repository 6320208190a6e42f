"""Container entrypoint: serves the place harvester over HTTP with uvicorn.

Run with: python -m place_harvester.main
"""

import sys

import uvicorn
from loguru import logger

from place_harvester.config import settings
from place_harvester.context import AppContext
from place_harvester.servers.registry import PlaceHarvesterRegistry

logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)

registry = PlaceHarvesterRegistry(AppContext.from_settings(settings), settings)
app = registry.asgi_app()


if __name__ == "__main__":
    logger.info(f"Server is running on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
