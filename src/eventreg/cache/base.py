"""Cache interface and the no-op implementation."""

from __future__ import annotations

from typing import Protocol


class StatusCache(Protocol):
    """Key-value cache holding serialized status views."""

    def get(self, key: str) -> str | None:
        """Return the live value for key, or None on a miss."""
        ...

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value under key, expiring after ttl_seconds."""
        ...

    def close(self) -> None:
        """Release any held connections."""
        ...


class NullCache:
    """Cache used when no backend is configured. Always misses."""

    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        return None

    def close(self) -> None:
        return None
