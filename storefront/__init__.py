"""
Storefront Engine

Client-side state for a static-catalog shop:
- storage: never-raising JSON key-value store (memory, file, Upstash Redis)
- catalog: product/category models, read-only index, async loader
- cart / favorites: persisted models with idempotent commands
- derivation: pure totals and line-item joins against the catalog
- views: full-rebuild view synchronizer
- checkout: WhatsApp order handoff
- session: the Storefront object wiring it all together

Note: Imports are lazy so importing a leaf module (e.g. storefront.storage)
does not pull in the whole engine.
"""

__all__ = [
    "Storefront",
    "KeyValueStore",
    "CatalogIndex",
    "Cart",
    "Favorites",
]


def __getattr__(name):
    """Lazy attribute access for the public entry points."""
    if name == "Storefront":
        from storefront.session import Storefront
        return Storefront
    elif name == "KeyValueStore":
        from storefront.storage import KeyValueStore
        return KeyValueStore
    elif name == "CatalogIndex":
        from storefront.catalog import CatalogIndex
        return CatalogIndex
    elif name == "Cart":
        from storefront.cart import Cart
        return Cart
    elif name == "Favorites":
        from storefront.favorites import Favorites
        return Favorites
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
