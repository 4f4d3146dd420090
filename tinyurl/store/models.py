"""Data models for the TinyURL mapping store."""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UrlMapping:
    """Represents one short code -> long URL mapping.

    Everything except the click counter and the last-accessed timestamp is
    immutable after creation. Both mutable fields are only touched through
    ``record_click`` under the mapping's own lock.
    """

    short_code: str
    long_url: str
    owner_id: str
    created_at_utc: datetime = field(default_factory=utcnow)
    _clicks: int = field(default=0, repr=False)
    _last_accessed_at_utc: Optional[datetime] = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def clicks(self) -> int:
        with self._lock:
            return self._clicks

    @property
    def last_accessed_at_utc(self) -> Optional[datetime]:
        with self._lock:
            return self._last_accessed_at_utc

    def record_click(self, at: Optional[datetime] = None) -> int:
        """Atomically count one resolution.

        Args:
            at: Access timestamp (defaults to now)

        Returns:
            The new click count
        """
        with self._lock:
            self._clicks += 1
            self._last_accessed_at_utc = at or utcnow()
            return self._clicks

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        with self._lock:
            clicks = self._clicks
            last_accessed = self._last_accessed_at_utc
        return {
            "short_code": self.short_code,
            "long_url": self.long_url,
            "owner_id": self.owner_id,
            "created_at_utc": self.created_at_utc.isoformat(),
            "clicks": clicks,
            "last_accessed_at_utc": last_accessed.isoformat() if last_accessed else None,
        }
