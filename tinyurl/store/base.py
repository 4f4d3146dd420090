"""Abstract base class for TinyURL mapping store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List

from .models import UrlMapping


class MappingStoreBase(ABC):
    """Abstract base class for mapping store operations.

    Implementations must be safe to call from concurrent threads and tasks.
    Absence is always expressed through ``None``/``False`` returns, never
    through exceptions.
    """

    @abstractmethod
    async def try_add(self, mapping: UrlMapping) -> bool:
        """Insert a mapping only if its short code is free.

        Args:
            mapping: The mapping to insert

        Returns:
            True if inserted, False if the short code already exists
        """
        pass

    @abstractmethod
    async def get_by_code(self, short_code: str) -> Optional[UrlMapping]:
        """Get the mapping for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, short_code: str) -> bool:
        """Check if a short code is taken.

        Args:
            short_code: The short code to check

        Returns:
            True if exists, False otherwise
        """
        pass

    @abstractmethod
    async def remove_by_code(self, short_code: str, expected_owner_id: Optional[str] = None) -> bool:
        """Remove a mapping and its (owner, long URL) cache entry.

        The owner check and the removal are one atomic step, so a code that
        was re-claimed by someone else in between is left alone.

        Args:
            short_code: The short code to remove
            expected_owner_id: Only remove if the mapping belongs to this owner

        Returns:
            True if removed, False if not found or owned by someone else
        """
        pass

    @abstractmethod
    async def get_cached_code(self, owner_id: str, long_url: str) -> Optional[str]:
        """Get the cached short code for an (owner, long URL) pair."""
        pass

    @abstractmethod
    async def set_cached_code(self, owner_id: str, long_url: str, short_code: str) -> None:
        """Cache the short code for an (owner, long URL) pair."""
        pass

    @abstractmethod
    async def remove_cached_code(self, owner_id: str, long_url: str) -> None:
        """Drop the cache entry for an (owner, long URL) pair."""
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[UrlMapping]:
        """List all live mappings of an owner, in no particular order.

        Args:
            owner_id: The owner to list for

        Returns:
            List of mappings
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of live mappings."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store resources."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is usable.

        Returns:
            True if healthy, False otherwise
        """
        pass
