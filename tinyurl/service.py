"""Business logic service for the TinyURL service."""

import logging
from typing import Optional, Dict, Any, List

from .shortcode import ShortCodeGenerator
from .store.base import MappingStoreBase
from .store.models import UrlMapping
from .errors import InvalidInputError, ConflictError, ExhaustedError
from .common.validators import is_valid_url, is_valid_short_code, is_valid_owner_id
from .common.url_builder import build_short_url, REDIRECT_PREFIX

DEFAULT_MAX_GENERATION_ATTEMPTS = 20


class URLShortenerService:
    """Service layer for URL shortening business logic.

    Owns every domain rule: validation, idempotent re-creation through the
    (owner, long URL) cache, unique code assignment, ownership checks on
    delete, and click accounting on resolve. The store is the only shared
    state; this class keeps no mappings of its own.
    """

    def __init__(
        self,
        store: MappingStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        enable_custom_codes: bool = True,
        max_generation_attempts: int = DEFAULT_MAX_GENERATION_ATTEMPTS,
        base_url: str = "http://localhost:9200",
        redirect_prefix: str = REDIRECT_PREFIX,
    ):
        """Initialize URL shortener service.

        Args:
            store: Mapping store instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            enable_custom_codes: Whether to allow custom short codes
            max_generation_attempts: Retry ceiling for random code generation
            base_url: Base URL used when a caller does not supply one
            redirect_prefix: Path segment in front of codes in short URLs
        """
        if max_generation_attempts <= 0:
            raise ValueError("max_generation_attempts must be positive")

        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.enable_custom_codes = enable_custom_codes
        self.max_generation_attempts = max_generation_attempts
        self.base_url = base_url
        self.redirect_prefix = redirect_prefix

    async def create_short_url(
        self,
        owner_id: str,
        long_url: str,
        custom_code: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a short URL, or return the existing one for this owner and URL.

        Args:
            owner_id: Anonymous client identifier
            long_url: The absolute http(s) URL to shorten
            custom_code: Optional custom short code
            base_url: Base for the returned short URL (service default if None)

        Returns:
            Dictionary with short_code, short_url, long_url, created_at_utc

        Raises:
            InvalidInputError: Bad owner id, URL or custom code
            ConflictError: Custom code already taken
            ExhaustedError: No free random code within the retry ceiling
        """
        self._require_owner(owner_id)

        is_valid, error = is_valid_url(long_url)
        if not is_valid:
            raise InvalidInputError(f"Invalid URL: {error}")

        existing = await self._lookup_cached(owner_id, long_url)
        if existing is not None:
            self.logger.debug(f"Returning cached short code {existing.short_code} for owner {owner_id}")
            return self._to_create_view(existing, base_url)

        if custom_code is not None and custom_code.strip():
            mapping = await self._create_with_custom_code(owner_id, long_url, custom_code.strip())
        else:
            mapping = await self._create_with_generated_code(owner_id, long_url)

        await self.store.set_cached_code(owner_id, long_url, mapping.short_code)

        self.logger.info(f"Created short URL: {mapping.short_code} -> {long_url}")
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("Mapping record: %s", mapping.to_dict())
        return self._to_create_view(mapping, base_url)

    async def delete_short_url(self, owner_id: str, short_code: str) -> bool:
        """Delete a short URL owned by the caller.

        Not found and not owned are deliberately indistinguishable.

        Args:
            owner_id: Caller's client identifier
            short_code: The short code to delete

        Returns:
            True if deleted
        """
        self._require_owner(owner_id)
        self._require_code(short_code)

        mapping = await self.store.get_by_code(short_code)
        if mapping is None:
            return False

        if mapping.owner_id != owner_id:
            self.logger.debug(f"Refusing delete of {short_code}: not owned by caller")
            return False

        deleted = await self.store.remove_by_code(short_code, expected_owner_id=owner_id)
        if deleted:
            self.logger.info(f"Deleted short URL: {short_code}")
        return deleted

    async def resolve(self, short_code: str) -> Optional[Dict[str, Any]]:
        """Resolve a short code and count the click.

        Resolution is public: ownership is not checked.

        Args:
            short_code: The short code to lookup

        Returns:
            Dictionary with short_code and long_url, or None if not found
        """
        self._require_code(short_code)

        mapping = await self.store.get_by_code(short_code)
        if mapping is None:
            self.logger.debug(f"Short code not found: {short_code}")
            return None

        clicks = mapping.record_click()
        self.logger.debug(f"Resolved {short_code} (clicks={clicks})")

        return {
            "short_code": mapping.short_code,
            "long_url": mapping.long_url,
        }

    async def get_stats(self, owner_id: str, short_code: str) -> Optional[Dict[str, Any]]:
        """Get click statistics for a short code.

        Any caller may read stats for any code; only delete checks ownership.

        Args:
            owner_id: Caller's client identifier
            short_code: The short code to lookup

        Returns:
            Dictionary with short_code, long_url, clicks, created_at_utc,
            last_accessed_at_utc, or None if not found
        """
        self._require_owner(owner_id)
        self._require_code(short_code)

        mapping = await self.store.get_by_code(short_code)
        if mapping is None:
            return None

        return {
            "short_code": mapping.short_code,
            "long_url": mapping.long_url,
            "clicks": mapping.clicks,
            "created_at_utc": mapping.created_at_utc,
            "last_accessed_at_utc": mapping.last_accessed_at_utc,
        }

    async def list_urls(self, owner_id: str, base_url: Optional[str] = None) -> List[Dict[str, Any]]:
        """List the caller's short URLs, newest first.

        Args:
            owner_id: Caller's client identifier
            base_url: Base for the returned short URLs (service default if None)

        Returns:
            List of dictionaries with short_code, short_url, long_url, clicks,
            created_at_utc
        """
        self._require_owner(owner_id)

        mappings = await self.store.list_by_owner(owner_id)
        mappings.sort(key=lambda m: m.created_at_utc, reverse=True)

        return [
            {
                "short_code": m.short_code,
                "short_url": self._short_url(m.short_code, base_url),
                "long_url": m.long_url,
                "clicks": m.clicks,
                "created_at_utc": m.created_at_utc,
            }
            for m in mappings
        ]

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        store_healthy = await self.store.health_check()
        return {
            "store": store_healthy,
            "overall": store_healthy,
        }

    async def close(self) -> None:
        """Close the underlying store."""
        await self.store.close()

    async def _lookup_cached(self, owner_id: str, long_url: str) -> Optional[UrlMapping]:
        """Return the cached mapping for (owner, URL) if it is still valid.

        A cache entry whose code no longer resolves to a mapping with the same
        owner and URL is stale and gets dropped.
        """
        cached_code = await self.store.get_cached_code(owner_id, long_url)
        if not cached_code:
            return None

        mapping = await self.store.get_by_code(cached_code)
        if mapping is not None and mapping.owner_id == owner_id and mapping.long_url == long_url:
            return mapping

        self.logger.debug(f"Discarding stale cache entry {cached_code} for owner {owner_id}")
        await self.store.remove_cached_code(owner_id, long_url)
        return None

    async def _create_with_custom_code(self, owner_id: str, long_url: str, custom_code: str) -> UrlMapping:
        if not self.enable_custom_codes:
            raise InvalidInputError("Custom short codes are not enabled")

        is_valid, error = is_valid_short_code(custom_code)
        if not is_valid:
            raise InvalidInputError(error)

        if await self.store.exists(custom_code):
            raise ConflictError(f"Short code '{custom_code}' already exists")

        mapping = UrlMapping(short_code=custom_code, long_url=long_url, owner_id=owner_id)
        if not await self.store.try_add(mapping):
            # Lost the race against a concurrent request for the same code
            raise ConflictError("Failed to create short URL (collision)")

        return mapping

    async def _create_with_generated_code(self, owner_id: str, long_url: str) -> UrlMapping:
        for attempt in range(self.max_generation_attempts):
            code = self.generator.generate()
            if await self.store.exists(code):
                self.logger.warning(f"Generated code collision on attempt {attempt + 1}: {code}")
                continue

            mapping = UrlMapping(short_code=code, long_url=long_url, owner_id=owner_id)
            if await self.store.try_add(mapping):
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return mapping

        raise ExhaustedError("Failed to generate a unique short code")

    def _to_create_view(self, mapping: UrlMapping, base_url: Optional[str]) -> Dict[str, Any]:
        return {
            "short_code": mapping.short_code,
            "short_url": self._short_url(mapping.short_code, base_url),
            "long_url": mapping.long_url,
            "created_at_utc": mapping.created_at_utc,
        }

    def _short_url(self, short_code: str, base_url: Optional[str]) -> str:
        return build_short_url(
            short_code=short_code,
            base_url=base_url or self.base_url,
            path_prefix=self.redirect_prefix,
        )

    @staticmethod
    def _require_owner(owner_id: str) -> None:
        is_valid, error = is_valid_owner_id(owner_id)
        if not is_valid:
            raise InvalidInputError(error)

    @staticmethod
    def _require_code(short_code: str) -> None:
        if not short_code or not short_code.strip():
            raise InvalidInputError("Short code is required")
