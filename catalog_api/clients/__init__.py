"""Client modules for external services."""

from catalog_api.clients.mongodb_client import MongoDBClient

__all__ = ["MongoDBClient"]
