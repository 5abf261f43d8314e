"""Short-lived in-memory store backing preview URLs.

The store is an explicit object with a lifecycle: the application creates
one at startup, passes it to whatever needs it and clears it on shutdown.
"""

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

PREVIEW_PATH = "/api/previews"


@dataclass(frozen=True)
class PreviewEntry:
    """A registered preview document."""

    token: str
    content: str
    media_type: str
    expires_at: float

    @property
    def expires_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)


class PreviewStore:
    """Token-addressed previews that expire after a fixed TTL."""

    def __init__(
        self,
        base_url: str,
        ttl_seconds: int = 300,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the store.

        Args:
            base_url: Public base URL preview links are built from.
            ttl_seconds: Lifetime of each preview.
            clock: Wall-clock source, overridable for tests.
        """
        self._base_url = base_url.rstrip("/")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, PreviewEntry] = {}

    def url_for(self, token: str) -> str:
        return f"{self._base_url}{PREVIEW_PATH}/{token}"

    def create(self, content: str, media_type: str = "text/html") -> PreviewEntry:
        """Register content and return its entry."""
        self.purge_expired()
        entry = PreviewEntry(
            token=uuid.uuid4().hex,
            content=content,
            media_type=media_type,
            expires_at=self._clock() + self._ttl,
        )
        self._entries[entry.token] = entry
        logger.info(f"Created preview {entry.token} ({len(content)} chars, ttl={self._ttl}s)")
        return entry

    def get(self, token: str) -> PreviewEntry | None:
        """Return a live entry, or None if unknown or expired."""
        entry = self._entries.get(token)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[token]
            logger.debug(f"Preview {token} expired")
            return None
        return entry

    def revoke(self, token_or_url: str) -> bool:
        """Drop a preview by token or by the URL ``create`` produced.

        Returns:
            True if a preview was removed.
        """
        token = token_or_url.rstrip("/").rsplit("/", 1)[-1]
        removed = self._entries.pop(token, None) is not None
        if removed:
            logger.info(f"Revoked preview {token}")
        return removed

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [token for token, entry in self._entries.items() if entry.expires_at <= now]
        for token in expired:
            del self._entries[token]
        if expired:
            logger.debug(f"Purged {len(expired)} expired preview(s)")
        return len(expired)

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"Cleared {count} preview(s)")

    def __len__(self) -> int:
        return len(self._entries)
