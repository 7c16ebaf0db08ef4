"""MongoDB client for the product catalog collection."""

import logging
from typing import Any, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from catalog_api.config import CatalogDbSettings, ConfigurationError

logger = logging.getLogger(__name__)


class MongoDBClient:
    """Async MongoDB client with connection management.

    Holds one handle to the catalog collection for the lifetime of the
    process. Supports async context manager pattern for proper resource cleanup.
    """

    def __init__(self, settings: CatalogDbSettings):
        """Initialize the MongoDB client.

        Args:
            settings: Connection string, database name and collection name.

        Raises:
            ConfigurationError: If the connection string is empty.
        """
        if not settings.connection_string:
            raise ConfigurationError("Connection string is not configured.")

        self._settings = settings

        self._client: Optional[AsyncMongoClient] = None
        self._database: Optional[AsyncDatabase] = None
        self._collection: Optional[AsyncCollection] = None

    @property
    def collection(self) -> AsyncCollection:
        """Get the catalog collection.

        Raises:
            RuntimeError: If client is not connected.
        """
        if self._collection is None:
            raise RuntimeError("MongoDB client not connected. Call connect() first.")
        return self._collection

    async def connect(self) -> None:
        """Create the driver client and resolve the catalog collection.

        The driver connects lazily, so an unreachable server only surfaces on
        the first operation. A malformed URI fails here.
        """
        self._client = AsyncMongoClient(self._settings.connection_string)
        self._database = self._client.get_database(self._settings.database_name)
        self._collection = self._database.get_collection(
            self._settings.catalog_collection_name
        )
        logger.info(
            f"MongoDB client ready: {self._settings.database_name}."
            f"{self._settings.catalog_collection_name}"
        )

    async def close(self) -> None:
        """Close the MongoDB connection."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None
            self._collection = None
            logger.info("MongoDB client closed")

    async def __aenter__(self) -> "MongoDBClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        """Async context manager exit with cleanup."""
        await self.close()
        return False
