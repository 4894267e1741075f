"""Cart model: mutations, persistence and derived totals."""
from decimal import Decimal
from typing import Any, Callable, Optional

from storefront.catalog import CatalogIndex
from storefront import derivation
from storefront.logging import get_logger
from storefront.notifications import TOAST_CART_ADDED, TOAST_CART_REMOVED, Notifier

from .models import (
    CartEntry,
    clamp_quantity,
    dump_entries,
    load_entries,
    parse_delta,
    parse_quantity,
)
from .storage import KeyValueStore, StorageKeys

logger = get_logger(__name__)

MODEL_NAME = "cart"


class Cart:
    """
    Ordered cart entries backed by the persistent store.

    Every mutation persists the full entry list and then calls on_change
    so dependent views re-render before the mutation returns. Guarded
    no-ops (unknown product, absent entry) change nothing and return False.
    """

    def __init__(
        self,
        store: KeyValueStore,
        catalog: Optional[CatalogIndex] = None,
        notifier: Optional[Notifier] = None,
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.catalog = catalog if catalog is not None else CatalogIndex()
        self.notifier = notifier
        self.on_change = on_change
        self._entries: list[CartEntry] = load_entries(self.store.get(StorageKeys.CART, []))

    # Internals

    def _find(self, product_id: int) -> Optional[CartEntry]:
        return next((e for e in self._entries if e.product_id == product_id), None)

    def _save(self) -> None:
        self.store.set(StorageKeys.CART, dump_entries(self._entries))

    def _notify(self, key: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(key)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(MODEL_NAME)

    # Commands

    def add_or_increment(self, product_id: int) -> bool:
        """Add one unit of a catalog product; unknown products are ignored."""
        if product_id not in self.catalog:
            return False

        entry = self._find(product_id)
        if entry is not None:
            entry.quantity += 1
        else:
            self._entries.append(CartEntry(product_id=product_id, quantity=1))

        self._save()
        self._notify(TOAST_CART_ADDED)
        self._changed()
        return True

    def set_delta(self, product_id: int, delta: int) -> bool:
        """Shift an entry's quantity by delta, never below one."""
        step = parse_delta(delta)
        entry = self._find(product_id)
        if entry is None or step is None:
            return False
        entry.quantity = clamp_quantity(entry.quantity + step)
        self._save()
        self._changed()
        return True

    def set_absolute(self, product_id: int, value: Any) -> bool:
        """
        Set an entry's quantity from user input.

        Raw text is parsed as an integer; unparseable input becomes 1.
        """
        entry = self._find(product_id)
        if entry is None:
            return False
        entry.quantity = parse_quantity(value)
        self._save()
        self._changed()
        return True

    def update(self, product_id: int, value: Any) -> bool:
        """Text input sets the quantity, a number shifts it (+/- buttons)."""
        if isinstance(value, str):
            return self.set_absolute(product_id, value)
        return self.set_delta(product_id, value)

    def remove(self, product_id: int) -> bool:
        entry = self._find(product_id)
        if entry is None:
            return False
        self._entries.remove(entry)
        self._save()
        self._notify(TOAST_CART_REMOVED)
        self._changed()
        return True

    def clear(self) -> None:
        self._entries = []
        self._save()
        self._changed()

    def prune_stale(self) -> list[int]:
        """
        Drop entries whose product left the catalog.

        Does nothing until the catalog is loaded.

        Returns:
            Removed product ids
        """
        removed = derivation.stale_ids([e.product_id for e in self._entries], self.catalog)
        if not removed:
            return []
        self._entries = [e for e in self._entries if e.product_id not in removed]
        self._save()
        self._changed()
        logger.info("Pruned %s stale cart entries", len(removed))
        return removed

    # Queries

    @property
    def entries(self) -> list[CartEntry]:
        """Snapshot of the entries in display order."""
        return [CartEntry(e.product_id, e.quantity) for e in self._entries]

    def quantity_of(self, product_id: int) -> int:
        entry = self._find(product_id)
        return entry.quantity if entry is not None else 0

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, product_id: object) -> bool:
        return any(e.product_id == product_id for e in self._entries)

    @property
    def total_count(self) -> int:
        return derivation.total_count(self._entries, self.catalog)

    def line_total(self, product_id: int) -> Decimal:
        return derivation.line_total(self._entries, self.catalog, product_id)

    @property
    def grand_total(self) -> Decimal:
        return derivation.grand_total(self._entries, self.catalog)

    def line_items(self) -> list[derivation.LineItem]:
        return derivation.resolve_line_items(self._entries, self.catalog)

    def summary(self) -> derivation.OrderSummary:
        """Read-only summary for the order handoff."""
        return derivation.order_summary(self._entries, self.catalog)

    def to_list(self) -> list[dict]:
        return dump_entries(self._entries)
