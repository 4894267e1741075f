"""Read-only in-memory catalog index."""
from typing import Iterable, Optional

from .models import Category, Product


class CatalogIndex:
    """
    Mapping from product id to product record, built once per session.

    A catalog built from None (failed load) is not "loaded": lookups
    return nothing and views render their unavailable state. A missing id
    is an expected condition, never an error.
    """

    def __init__(
        self,
        products: Optional[Iterable[Product]] = None,
        categories: Optional[Iterable[Category]] = None,
    ):
        self.loaded = products is not None
        self._products: list[Product] = []
        self._by_id: dict[int, Product] = {}
        for product in products or []:
            # First occurrence wins
            if product.id in self._by_id:
                continue
            self._by_id[product.id] = product
            self._products.append(product)

        self.categories_loaded = categories is not None
        self._categories: list[Category] = list(categories or [])

    @classmethod
    def empty(cls) -> "CatalogIndex":
        """Loaded catalog with no products."""
        return cls(products=[], categories=[])

    def get(self, product_id: int) -> Optional[Product]:
        return self._by_id.get(product_id)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id

    def __len__(self) -> int:
        return len(self._products)

    @property
    def products(self) -> list[Product]:
        """Products in source order."""
        return list(self._products)

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    def category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self._categories if c.id == category_id), None)
