"""Catalog service: CRUD access to the products collection.

Every method forwards to a single driver call. Driver errors propagate to the
caller untouched; there is no retry or recovery here.
"""

import logging
from decimal import Decimal
from typing import Any, List, Optional

from bson import Decimal128, ObjectId
from pymongo.asynchronous.collection import AsyncCollection

from ..models import Product

logger = logging.getLogger(__name__)


def _to_object_id(product_id: str) -> Optional[ObjectId]:
    """Parse a hex id, returning None when it is not a valid ObjectId."""
    if not ObjectId.is_valid(product_id):
        return None
    return ObjectId(product_id)


def _to_document(product: Product) -> dict[str, Any]:
    """Map a Product to its stored document, without `_id`."""
    return {
        "name": product.name,
        "price": Decimal128(product.price),
        "category": product.category,
        "description": product.description,
    }


def _from_document(document: dict[str, Any]) -> Product:
    """Map a stored document back to a Product."""
    price = document["price"]
    if isinstance(price, Decimal128):
        price = price.to_decimal()
    elif not isinstance(price, Decimal):
        price = Decimal(str(price))

    return Product(
        id=str(document["_id"]),
        name=document["name"],
        price=price,
        category=document["category"],
        description=document["description"],
    )


class CatalogsService:
    """Service for reading and writing catalog products."""

    def __init__(self, collection: AsyncCollection):
        """Initialize the catalog service.

        Args:
            collection: The products collection, shared for the process lifetime.
        """
        self._collection = collection

    async def get_products(self) -> List[Product]:
        """Return every product in the collection, in store order."""
        documents = await self._collection.find({}).to_list(length=None)
        logger.debug(f"Fetched {len(documents)} products")
        return [_from_document(document) for document in documents]

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        """Return the product with the given id, or None if there is none."""
        object_id = _to_object_id(product_id)
        if object_id is None:
            return None

        document = await self._collection.find_one({"_id": object_id})
        if document is None:
            logger.debug(f"Product not found: {product_id}")
            return None
        return _from_document(document)

    async def create_product(self, product: Product) -> Product:
        """Insert a product and return it with the store-assigned id.

        Any id on the input is ignored.
        """
        result = await self._collection.insert_one(_to_document(product))
        created = product.model_copy(update={"id": str(result.inserted_id)})
        logger.info(f"Created product: {created.id}")
        return created

    async def update_product(self, product_id: str, product: Product) -> None:
        """Replace the whole product document. No-op if the id matches nothing."""
        object_id = _to_object_id(product_id)
        if object_id is None:
            return

        result = await self._collection.replace_one({"_id": object_id}, _to_document(product))
        logger.info(f"Replaced product {product_id} (matched={result.matched_count})")

    async def remove_product(self, product_id: str) -> None:
        """Delete the product. No-op if the id matches nothing."""
        object_id = _to_object_id(product_id)
        if object_id is None:
            return

        result = await self._collection.delete_one({"_id": object_id})
        logger.info(f"Removed product {product_id} (deleted={result.deleted_count})")
