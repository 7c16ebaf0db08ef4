"""Data models module."""

from catalog_api.models.product import Product

__all__ = ["Product"]
