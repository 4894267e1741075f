"""Favorites Model.

Ordered set of product ids persisted under the "favorites" key.
Ids are kept even when the catalog does not (yet) know them; the
derived favorites view filters them out.
"""

from typing import Any, Callable, Optional

from storefront import derivation
from storefront.catalog import CatalogIndex, Product
from storefront.logging import get_logger
from storefront.notifications import TOAST_FAV_ADDED, TOAST_FAV_REMOVED, Notifier
from storefront.storage import KeyValueStore, StorageKeys

logger = get_logger(__name__)

MODEL_NAME = "favorites"


def load_ids(raw: Any) -> list[int]:
    """Rebuild the id list from persisted data, dropping junk and duplicates."""
    if not isinstance(raw, list):
        return []
    ids: list[int] = []
    for value in raw:
        if isinstance(value, bool) or not isinstance(value, int) or value in ids:
            continue
        ids.append(value)
    if len(ids) != len(raw):
        logger.warning("Dropped %s malformed favorite records", len(raw) - len(ids))
    return ids


class Favorites:
    """Favorites list with idempotent add and remove."""

    def __init__(
        self,
        store: KeyValueStore,
        catalog: Optional[CatalogIndex] = None,
        notifier: Optional[Notifier] = None,
        on_change: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.store = store
        self.catalog = catalog if catalog is not None else CatalogIndex()
        self.notifier = notifier
        self.on_change = on_change
        self._ids: list[int] = load_ids(self.store.get(StorageKeys.FAVORITES, []))

    def _save(self) -> None:
        self.store.set(StorageKeys.FAVORITES, list(self._ids))

    def _notify(self, key: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(key)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(MODEL_NAME)

    def toggle_add(self, product_id: int) -> bool:
        """Add product to favorites.

        Args:
            product_id: Product id

        Returns:
            True if the id was inserted, False if it was already present

        """
        inserted = product_id not in self._ids
        if inserted:
            self._ids.append(product_id)
            self._save()
            self._notify(TOAST_FAV_ADDED)
        # Re-render either way so the button state reflects the list
        self._changed()
        return inserted

    def remove(self, product_id: int) -> bool:
        """Remove product from favorites.

        Returns:
            True if the id was present

        """
        if product_id not in self._ids:
            return False
        self._ids.remove(product_id)
        self._save()
        self._notify(TOAST_FAV_REMOVED)
        self._changed()
        return True

    def is_favorite(self, product_id: int) -> bool:
        return product_id in self._ids

    def prune_stale(self) -> list[int]:
        """Drop ids missing from a loaded catalog. Returns removed ids."""
        removed = derivation.stale_ids(self._ids, self.catalog)
        if not removed:
            return []
        self._ids = [i for i in self._ids if i not in removed]
        self._save()
        self._changed()
        return removed

    @property
    def ids(self) -> list[int]:
        return list(self._ids)

    def products(self) -> list[Product]:
        return derivation.resolve_favorites(self._ids, self.catalog)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
