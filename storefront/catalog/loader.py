"""
Catalog Loader

Fetches the static JSON documents (products, categories, config) from a
base URL or a local directory. Any failure resolves to None so callers
render an unavailable state instead of crashing.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from storefront.config import StoreConfig
from storefront.errors import ERROR_CATALOG_LOAD, ERROR_CATALOG_RECORD
from storefront.logging import get_logger, sanitize_string_for_logging

from .index import CatalogIndex
from .models import Category, Product

logger = get_logger(__name__)

PRODUCTS_DOCUMENT = "products.json"
CATEGORIES_DOCUMENT = "categories.json"
CONFIG_DOCUMENT = "config.json"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _is_remote(base: str) -> bool:
    return base.startswith(("http://", "https://"))


def parse_records(data: Any, model: type[ModelT], label: str) -> Optional[list[ModelT]]:
    """
    Validate a JSON array into models, skipping invalid records.

    Returns:
        List of models, or None if data is not a list
    """
    if data is None:
        return None
    if not isinstance(data, list):
        logger.error(ERROR_CATALOG_LOAD, label, "expected a JSON array")
        return None

    records = []
    for raw in data:
        try:
            records.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning(ERROR_CATALOG_RECORD, label, e.error_count())
    return records


class CatalogLoader:
    """Loads catalog documents over HTTP (httpx) or from disk."""

    def __init__(
        self,
        base: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.base = base.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def _fetch(self, name: str) -> Any:
        url = f"{self.base}/{name}"
        headers = {"Cache-Control": "no-store"}
        if self._client is not None:
            response = await self._client.get(url, headers=headers)
            response.raise_for_status()
            return response.json()
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(url, headers=headers)
            response.raise_for_status()
            return response.json()

    def _read(self, name: str) -> Any:
        with open(Path(self.base) / name, encoding="utf-8") as f:
            return json.load(f)

    async def load_json(self, name: str) -> Any:
        """
        Load one JSON document.

        Args:
            name: Document name relative to the base (e.g. "products.json")

        Returns:
            Decoded JSON, or None on network error, non-2xx status,
            missing file or invalid JSON
        """
        try:
            if _is_remote(self.base):
                return await self._fetch(name)
            return self._read(name)
        except (httpx.HTTPError, OSError, ValueError) as e:
            logger.error(ERROR_CATALOG_LOAD, sanitize_string_for_logging(name), type(e).__name__)
            return None

    async def load_catalog(self) -> CatalogIndex:
        """
        Load products and categories concurrently.

        Both fetches are awaited before the index is built, whichever
        finishes first.
        """
        products_data, categories_data = await asyncio.gather(
            self.load_json(PRODUCTS_DOCUMENT),
            self.load_json(CATEGORIES_DOCUMENT),
        )
        products = parse_records(products_data, Product, "product")
        categories = parse_records(categories_data, Category, "category")
        logger.info(
            "Catalog loaded: %s products, %s categories",
            len(products) if products is not None else "no",
            len(categories) if categories is not None else "no",
        )
        return CatalogIndex(products, categories)

    async def load_config(self) -> Optional[StoreConfig]:
        """Load config.json; None when missing or invalid."""
        data = await self.load_json(CONFIG_DOCUMENT)
        if data is None:
            return None
        try:
            return StoreConfig.model_validate(data)
        except ValidationError as e:
            logger.error(ERROR_CATALOG_LOAD, CONFIG_DOCUMENT, f"{e.error_count()} validation errors")
            return None
