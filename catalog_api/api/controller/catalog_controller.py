"""REST controller for catalog products."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from starlette.convertors import Convertor, register_url_convertor
from typing_extensions import Annotated

from catalog_api.models import Product
from catalog_api.services import CatalogsService

logger = logging.getLogger(__name__)

OBJECT_ID_LENGTH = 24


class ObjectIdConvertor(Convertor):
    """Path convertor that only matches segments of exactly 24 characters.

    Ids of any other length fall through routing and get a plain 404.
    """

    regex = f"[^/]{{{OBJECT_ID_LENGTH}}}"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


# Must be registered before any route uses the "objectid" type
register_url_convertor("objectid", ObjectIdConvertor())

router = APIRouter(prefix="/products", tags=["products"])


def get_catalogs_service(request: Request) -> CatalogsService:
    """Return the process-wide catalog service created at startup."""
    return request.app.state.catalogs_service


CatalogsServiceDep = Annotated[CatalogsService, Depends(get_catalogs_service)]


async def _get_existing_product(service: CatalogsService, product_id: str) -> Product:
    product = await service.get_product_by_id(product_id)
    if product is None:
        logger.info(f"Product not found: {product_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.get("", response_model=List[Product])
async def get_products(service: CatalogsServiceDep) -> List[Product]:
    """List every product in the catalog."""
    return await service.get_products()


@router.get("/{product_id:objectid}", response_model=Product, name="get_product_by_id")
async def get_product_by_id(product_id: str, service: CatalogsServiceDep) -> Product:
    """Get a single product by its id."""
    return await _get_existing_product(service, product_id)


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: Product,
    request: Request,
    response: Response,
    service: CatalogsServiceDep,
) -> Product:
    """Create a product. The response carries a Location header for the new id."""
    created = await service.create_product(product)
    response.headers["Location"] = str(
        request.url_for("get_product_by_id", product_id=created.id)
    )
    return created


@router.put(
    "/{product_id:objectid}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_product(
    product_id: str,
    updated_product: Product,
    service: CatalogsServiceDep,
) -> Response:
    """Replace a product wholesale, keeping its existing id.

    The existence check and the replace are separate round trips, so a
    concurrent delete can turn this into a no-op that still returns 204.
    """
    product = await _get_existing_product(service, product_id)

    replacement = updated_product.model_copy(update={"id": product.id})
    await service.update_product(product_id, replacement)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{product_id:objectid}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_product(product_id: str, service: CatalogsServiceDep) -> Response:
    """Delete a product."""
    await _get_existing_product(service, product_id)

    await service.remove_product(product_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
