"""
Derivation layer.

Pure functions joining cart entries and favorite ids against the catalog
index. Entry order (or favorites order) is the display order; entries whose
product is missing from the catalog are skipped, never reported.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from storefront.cart.models import CartEntry
from storefront.catalog import CatalogIndex, Product
from storefront.services.money import multiply, round_money, to_float


@dataclass(frozen=True)
class LineItem:
    """Cart entry resolved against the catalog."""
    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return round_money(multiply(self.product.price, self.quantity))

    def to_dict(self) -> dict:
        return {
            "id": self.product.id,
            "name": self.product.name,
            "image": self.product.image,
            "unit_price": to_float(self.product.price),
            "quantity": self.quantity,
            "line_total": to_float(self.line_total),
        }


@dataclass(frozen=True)
class OrderSummary:
    """Read-only summary consumed by the order handoff."""
    items: tuple[LineItem, ...]
    grand_total: Decimal

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_count(self) -> int:
        return sum(item.quantity for item in self.items)


def resolve_line_items(entries: Iterable[CartEntry], catalog: CatalogIndex) -> list[LineItem]:
    """Resolve entries to line items, skipping stale references."""
    items = []
    for entry in entries:
        product = catalog.get(entry.product_id)
        if product is None:
            continue
        items.append(LineItem(product=product, quantity=entry.quantity))
    return items


def resolve_favorites(ids: Iterable[int], catalog: CatalogIndex) -> list[Product]:
    """Resolve favorite ids to products in favorites order."""
    products = []
    for product_id in ids:
        product = catalog.get(product_id)
        if product is not None:
            products.append(product)
    return products


def total_count(entries: Iterable[CartEntry], catalog: CatalogIndex) -> int:
    return sum(item.quantity for item in resolve_line_items(entries, catalog))


def line_total(entries: Iterable[CartEntry], catalog: CatalogIndex, product_id: int) -> Decimal:
    """Price x quantity for one product; zero when absent or stale."""
    for item in resolve_line_items(entries, catalog):
        if item.product.id == product_id:
            return item.line_total
    return Decimal("0")


def grand_total(entries: Iterable[CartEntry], catalog: CatalogIndex) -> Decimal:
    total = Decimal("0")
    for item in resolve_line_items(entries, catalog):
        total += item.line_total
    return total


def order_summary(entries: Iterable[CartEntry], catalog: CatalogIndex) -> OrderSummary:
    items = tuple(resolve_line_items(entries, catalog))
    total = Decimal("0")
    for item in items:
        total += item.line_total
    return OrderSummary(items=items, grand_total=total)


def featured_products(catalog: CatalogIndex, limit: int) -> list[Product]:
    return [p for p in catalog.products if p.featured][: max(0, limit)]


def occasion_products(catalog: CatalogIndex) -> list[Product]:
    return [p for p in catalog.products if p.occasion]


def products_in_category(catalog: CatalogIndex, category_id: Optional[str]) -> list[Product]:
    """Products of one category; every product when category_id is empty."""
    if not category_id:
        return catalog.products
    return [p for p in catalog.products if p.category == category_id]


def stale_ids(ids: Sequence[int], catalog: CatalogIndex) -> list[int]:
    """Ids not present in a loaded catalog (empty while it is not loaded)."""
    if not catalog.loaded:
        return []
    return [product_id for product_id in ids if product_id not in catalog]
