"""In-memory implementation of the TinyURL mapping store."""

import logging
import threading
from typing import Optional, List, Dict, Tuple

from .base import MappingStoreBase
from .models import UrlMapping


class InMemoryMappingStore(MappingStoreBase):
    """Thread-safe in-memory mapping store.

    Holds the canonical short code -> mapping table plus a secondary
    (owner_id, long_url) -> short code cache. Both dictionaries share one
    lock, so removing a mapping and evicting its cache entry happen together.
    Click counters are synchronized per mapping, not by this lock.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize the store.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._by_code: Dict[str, UrlMapping] = {}
        self._cache_by_owner_url: Dict[Tuple[str, str], str] = {}
        self._lock = threading.RLock()

    async def try_add(self, mapping: UrlMapping) -> bool:
        with self._lock:
            if mapping.short_code in self._by_code:
                return False
            self._by_code[mapping.short_code] = mapping
            return True

    async def get_by_code(self, short_code: str) -> Optional[UrlMapping]:
        with self._lock:
            return self._by_code.get(short_code)

    async def exists(self, short_code: str) -> bool:
        with self._lock:
            return short_code in self._by_code

    async def remove_by_code(self, short_code: str, expected_owner_id: Optional[str] = None) -> bool:
        with self._lock:
            removed = self._by_code.get(short_code)
            if removed is None:
                return False
            if expected_owner_id is not None and removed.owner_id != expected_owner_id:
                return False
            del self._by_code[short_code]

            key = (removed.owner_id, removed.long_url)
            # Only evict if the entry still points at the removed code
            if self._cache_by_owner_url.get(key) == short_code:
                del self._cache_by_owner_url[key]
            return True

    async def get_cached_code(self, owner_id: str, long_url: str) -> Optional[str]:
        with self._lock:
            return self._cache_by_owner_url.get((owner_id, long_url))

    async def set_cached_code(self, owner_id: str, long_url: str, short_code: str) -> None:
        with self._lock:
            self._cache_by_owner_url[(owner_id, long_url)] = short_code

    async def remove_cached_code(self, owner_id: str, long_url: str) -> None:
        with self._lock:
            self._cache_by_owner_url.pop((owner_id, long_url), None)

    async def list_by_owner(self, owner_id: str) -> List[UrlMapping]:
        with self._lock:
            return [m for m in self._by_code.values() if m.owner_id == owner_id]

    async def count(self) -> int:
        with self._lock:
            return len(self._by_code)

    async def close(self) -> None:
        with self._lock:
            count = len(self._by_code)
            self._by_code.clear()
            self._cache_by_owner_url.clear()
        self.logger.info(f"In-memory store closed, discarded {count} mappings")

    async def health_check(self) -> bool:
        return True
