"""Service modules."""

from catalog_api.services.catalogs_service import CatalogsService

__all__ = ["CatalogsService"]
