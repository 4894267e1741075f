"""Persistent store access for the cart."""
from storefront.storage import KeyValueStore, StorageKeys

__all__ = ["KeyValueStore", "StorageKeys"]
