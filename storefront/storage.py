"""
Persistent Key-Value Store

Best-effort, synchronous storage for the cart and favorites containers.
Values are JSON documents kept as raw strings by a pluggable backend:
- MemoryBackend: process memory (tests, ephemeral sessions)
- FileBackend: a single JSON file on disk
- RedisBackend: Upstash Redis over its REST API

KeyValueStore never raises. Reads fall back to the caller's default and
write failures are only logged: losing persistence must never block the
shopping flow.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Protocol

from upstash_redis import Redis

from storefront.config import Settings
from storefront.errors import (
    ERROR_STORAGE_CORRUPT,
    ERROR_STORAGE_QUOTA,
    ERROR_STORAGE_READ,
    ERROR_STORAGE_UNCONFIGURED,
    ERROR_STORAGE_WRITE,
    StorageError,
    StorageQuotaExceeded,
)
from storefront.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


class StorageKeys:
    """Keys owned by the engine. Each model is the sole writer of its key."""

    CART = "cart"
    FAVORITES = "favorites"


class StorageBackend(Protocol):
    def read(self, key: str) -> Optional[str]: ...

    def write(self, key: str, raw: str) -> None: ...


class MemoryBackend:
    """In-memory backend with an optional byte quota."""

    def __init__(self, initial: Optional[dict[str, str]] = None, quota: Optional[int] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.quota = quota

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, raw: str) -> None:
        if self.quota is not None:
            used = sum(len(k) + len(v) for k, v in self._data.items() if k != key)
            if used + len(key) + len(raw) > self.quota:
                raise StorageQuotaExceeded(ERROR_STORAGE_QUOTA)
        self._data[key] = raw

    @property
    def data(self) -> dict[str, str]:
        return dict(self._data)


class FileBackend:
    """
    Backend keeping every key in one JSON file.

    The file maps key -> raw JSON string. Writes go to a temp file that
    replaces the original, so a crash never leaves a half-written file.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(str(e)) from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def read(self, key: str) -> Optional[str]:
        raw = self._load().get(key)
        return raw if isinstance(raw, str) else None

    def write(self, key: str, raw: str) -> None:
        try:
            data = self._load()
        except StorageError:
            # Unreadable file: the in-memory state is authoritative, start over
            data = {}
        data[key] = raw

        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(str(e)) from e


class RedisBackend:
    """Upstash Redis backend (sync client, lazy initialization)."""

    def __init__(
        self,
        client: Optional[Redis] = None,
        url: str = "",
        token: str = "",
        ttl: Optional[int] = None,
    ):
        self._client = client
        self._url = url
        self._token = token
        self.ttl = ttl

    @property
    def client(self) -> Redis:
        if self._client is None:
            if not self._url or not self._token:
                raise StorageError(ERROR_STORAGE_UNCONFIGURED)
            self._client = Redis(url=self._url, token=self._token)
        return self._client

    def read(self, key: str) -> Optional[str]:
        value = self.client.get(key)
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else str(value)

    def write(self, key: str, raw: str) -> None:
        if self.ttl:
            self.client.set(key, raw, ex=self.ttl)
        else:
            self.client.set(key, raw)


class KeyValueStore:
    """Never-raising JSON facade over a StorageBackend."""

    def __init__(self, backend: StorageBackend, namespace: str = ""):
        self.backend = backend
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}" if self.namespace else key

    def get(self, key: str, fallback: Any) -> Any:
        """
        Read and JSON-decode the value under key.

        Args:
            key: Storage key
            fallback: Returned on missing key, null value, decode failure
                or any backend failure

        Returns:
            Decoded value or fallback
        """
        safe_key = sanitize_string_for_logging(key)
        try:
            raw = self.backend.read(self._key(key))
        except Exception as e:
            logger.warning(ERROR_STORAGE_READ + ": %s", safe_key, type(e).__name__)
            return fallback

        if raw is None:
            return fallback

        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning(ERROR_STORAGE_CORRUPT, safe_key)
            return fallback

        return fallback if value is None else value

    def set(self, key: str, value: Any) -> None:
        """
        JSON-encode value and write it under key.

        Failures are logged and swallowed; the caller carries on with its
        in-memory state.
        """
        try:
            raw = json.dumps(value, ensure_ascii=False)
            self.backend.write(self._key(key), raw)
        except Exception:
            logger.error(ERROR_STORAGE_WRITE, sanitize_string_for_logging(key), exc_info=True)


def get_store(settings: Settings) -> KeyValueStore:
    """Build the store for the configured backend."""
    if settings.storage_backend == "memory":
        backend: StorageBackend = MemoryBackend()
    elif settings.storage_backend == "redis":
        backend = RedisBackend(url=settings.redis_url, token=settings.redis_token)
    else:
        backend = FileBackend(settings.storage_path)
    return KeyValueStore(backend, namespace=settings.namespace)
