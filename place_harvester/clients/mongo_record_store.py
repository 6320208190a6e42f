"""
MongoDB record store.

Holds one long-lived AsyncMongoClient and bulk-inserts place records into a
single collection. The store is append-only.
"""

from typing import Any

from loguru import logger
from pymongo import AsyncMongoClient

from place_harvester.schemas.places import PlaceRecord


class PlaceRecordStore:
    """Async bulk writer for the place records collection."""

    def __init__(self, collection: Any, client: AsyncMongoClient | None = None) -> None:
        self._collection = collection
        self._client = client

    @classmethod
    def from_uri(
        cls,
        uri: str,
        database: str = "",
        collection: str = "businesses",
    ) -> "PlaceRecordStore":
        client: AsyncMongoClient = AsyncMongoClient(uri)
        if database:
            db = client.get_database(database)
        else:
            db = client.get_default_database(default="test")
        return cls(db.get_collection(collection), client=client)

    async def insert_records(self, records: list[PlaceRecord]) -> list:
        """Insert all records as new documents in one bulk operation."""
        documents = [record.to_document() for record in records]
        logger.debug(f"Inserting {len(documents)} documents into {self._collection.name}")
        result = await self._collection.insert_many(documents)
        return list(result.inserted_ids)

    async def ping(self) -> None:
        if self._client is None:
            return
        await self._client.admin.command("ping")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
