"""Catalog package: product models, read-only index and loader."""
from .index import CatalogIndex
from .loader import CatalogLoader
from .models import Category, Product

__all__ = [
    "CatalogIndex",
    "CatalogLoader",
    "Category",
    "Product",
]
