"""
Common Error Constants

Centralized diagnostic messages and the storage exception types.
None of these ever reach a caller of the cart or favorites API.
"""

# Storage errors
ERROR_STORAGE_READ = "Failed to read %s from storage"
ERROR_STORAGE_WRITE = "Failed to save %s"
ERROR_STORAGE_CORRUPT = "Corrupted value under %s, using fallback"
ERROR_STORAGE_QUOTA = "Storage quota exceeded"
ERROR_STORAGE_UNCONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"

# Catalog errors
ERROR_CATALOG_LOAD = "Error loading %s: %s"
ERROR_CATALOG_RECORD = "Skipping invalid %s record: %s"
ERROR_CONFIG_NOT_LOADED = "Config not loaded"

# View errors
ERROR_VIEW_RENDER = "View %s failed to render"


class StorageError(Exception):
    """Raised by a storage backend when a read or write cannot be completed."""


class StorageQuotaExceeded(StorageError):
    """Raised by a storage backend when a write would exceed its quota."""
