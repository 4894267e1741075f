"""Cart entry model and persisted-format helpers."""
import re
from dataclasses import dataclass
from typing import Any, Optional

from storefront.logging import get_logger

logger = get_logger(__name__)

MIN_QUANTITY = 1

# Leading integer of a raw input, like "3", " 12 ", "4pcs"
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def clamp_quantity(value: int) -> int:
    """Quantities never go below one."""
    return max(MIN_QUANTITY, value)


def parse_quantity(value: Any) -> int:
    """
    Coerce user input to a quantity.

    Integers pass through, floats are truncated, text is parsed by its
    leading integer. Anything unparseable becomes 1. The result is
    clamped to at least 1.
    """
    if isinstance(value, bool):
        return MIN_QUANTITY
    if isinstance(value, int):
        return clamp_quantity(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return MIN_QUANTITY
        return clamp_quantity(int(value))
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return MIN_QUANTITY
        return clamp_quantity(int(match.group(1)))
    return MIN_QUANTITY



def parse_delta(value: Any) -> Optional[int]:
    """Coerce a +/- step to an int, or None when it is unusable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    return None


@dataclass
class CartEntry:
    """Single cart line: a product id and its quantity (always >= 1)."""
    product_id: int
    quantity: int = MIN_QUANTITY

    def __post_init__(self):
        self.quantity = clamp_quantity(self.quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted {"id", "qty"} shape."""
        return {"id": self.product_id, "qty": self.quantity}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["CartEntry"]:
        """
        Create from a persisted record.

        Returns:
            CartEntry, or None when the record has no usable integer id
        """
        if not isinstance(data, dict):
            return None
        product_id = data.get("id")
        if isinstance(product_id, bool) or not isinstance(product_id, int):
            return None
        qty = data.get("qty")
        if isinstance(qty, bool) or not isinstance(qty, int):
            qty = MIN_QUANTITY
        return cls(product_id=product_id, quantity=qty)


def load_entries(raw: Any) -> list[CartEntry]:
    """
    Rebuild the entry list from persisted data.

    Malformed records are dropped and duplicate ids keep their first entry.
    """
    if not isinstance(raw, list):
        return []

    entries: list[CartEntry] = []
    seen: set[int] = set()
    for record in raw:
        entry = CartEntry.from_dict(record)
        if entry is None or entry.product_id in seen:
            continue
        seen.add(entry.product_id)
        entries.append(entry)

    dropped = len(raw) - len(entries)
    if dropped:
        logger.warning("Dropped %s malformed cart records", dropped)
    return entries


def dump_entries(entries: list[CartEntry]) -> list[dict]:
    return [entry.to_dict() for entry in entries]
