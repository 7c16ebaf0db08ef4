"""Product model shared by the HTTP layer and the catalog service."""

from decimal import Decimal, DecimalException
from typing import Optional

from bson import Decimal128
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from typing_extensions import Annotated


def _check_storable(value: Decimal) -> Decimal:
    """Reject prices that do not fit a BSON Decimal128 (34 digits, bounded exponent)."""
    try:
        Decimal128(value)
    except DecimalException:
        raise ValueError("price must fit in 34 significant digits and the Decimal128 exponent range")
    return value


# Prices stay Decimal in Python but go out as plain JSON numbers
Price = Annotated[
    Decimal,
    Field(allow_inf_nan=False),
    AfterValidator(_check_storable),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class Product(BaseModel):
    """Product record in the catalog collection.

    `id` is the 24-character hex form of the MongoDB ObjectId. It is assigned
    by the store on insert; any value a client sends is ignored.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Widget",
                "price": 9.99,
                "category": "Tools",
                "description": "A widget",
            }
        }
    )

    id: Optional[str] = Field(None, description="Store-assigned ObjectId as hex string")
    name: str = Field(..., description="Display name")
    price: Price = Field(..., description="Unit price")
    category: str = Field(..., description="Product category")
    description: str = Field(..., description="Product description")
