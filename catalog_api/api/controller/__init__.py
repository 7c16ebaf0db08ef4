"""HTTP controllers."""

from catalog_api.api.controller.catalog_controller import (
    get_catalogs_service,
    router as catalog_router,
)

__all__ = ["catalog_router", "get_catalogs_service"]
