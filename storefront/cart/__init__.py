"""Cart package: entry model, persistence keys and the cart service."""
from .models import CartEntry, parse_quantity
from .service import Cart

__all__ = [
    "Cart",
    "CartEntry",
    "parse_quantity",
]
