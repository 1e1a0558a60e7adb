"""Key/value store over Django's cache framework.

Stands in for the browser's local storage: one string blob per key, no
expiry, overwritten wholesale on every write.
"""

from django.core.cache import caches

from eventease.domain.errors import PersistenceFailureError
from eventease.stores.interfaces import KeyValueStore


class CacheKeyValueStore(KeyValueStore):
    """KeyValueStore on a Django cache alias, with keys namespaced by prefix."""

    def __init__(self, alias: str = "default", prefix: str = "") -> None:
        self._alias = alias
        self._prefix = prefix

    @property
    def _cache(self):
        return caches[self._alias]

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            return self._cache.get(self._key(key))
        except Exception as exc:
            raise PersistenceFailureError(key, str(exc)) from exc

    def set(self, key: str, value: str) -> None:
        try:
            self._cache.set(self._key(key), value, timeout=None)
        except Exception as exc:
            raise PersistenceFailureError(key, str(exc)) from exc

    def remove(self, key: str) -> None:
        try:
            self._cache.delete(self._key(key))
        except Exception as exc:
            raise PersistenceFailureError(key, str(exc)) from exc
