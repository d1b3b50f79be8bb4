"""StatusLookup - Read-through cached registration status."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError as SchemaError

from eventreg.cache import CacheError
from eventreg.logging import get_logger
from eventreg.lookup.models import PaymentSnapshot, RegistrationSnapshot, StatusView
from eventreg.registry import ValidationError

if TYPE_CHECKING:
    from eventreg.cache import StatusCache
    from eventreg.registry import RegistrationStore

logger = get_logger("lookup")

STATUS_CACHE_TTL = 300


def status_cache_key(registration_id: str) -> str:
    """Cache key for a registration's status view."""
    return f"status:{registration_id}"


class StatusLookup:
    """Public status lookup with a read-through cache.

    Cached views are served until they expire. Payment writes do not
    invalidate them, so a lookup may lag an admin change by up to the TTL.
    Cache failures never fail a lookup; they are logged and the store is read.
    """

    def __init__(
        self,
        store: RegistrationStore,
        cache: StatusCache,
        ttl_seconds: int = STATUS_CACHE_TTL,
    ) -> None:
        self.store = store
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    def get_status(self, registration_id: str) -> StatusView:
        """Return the registration and its payments.

        Args:
            registration_id: The registration to look up.

        Returns:
            StatusView from cache when live, otherwise freshly read and cached.

        Raises:
            ValidationError: If the ID is empty.
            RegistrationNotFoundError: If the registration doesn't exist.
            StoreError: If the store read fails.
        """
        registration_id = (registration_id or "").strip()
        if not registration_id:
            raise ValidationError("Registration ID is required")

        key = status_cache_key(registration_id)
        cached = self._read_cache(key)
        if cached is not None:
            return cached

        view = self.load(registration_id)
        self._write_cache(key, view)
        return view

    def load(self, registration_id: str) -> StatusView:
        """Read the combined view straight from the store, bypassing the cache."""
        registration = self.store.get_registration(registration_id)
        payments = self.store.list_payments(registration_id)
        return StatusView(
            registration=RegistrationSnapshot.model_validate(registration),
            payments=[PaymentSnapshot.model_validate(p) for p in payments],
        )

    def _read_cache(self, key: str) -> StatusView | None:
        try:
            raw = self.cache.get(key)
        except CacheError as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return None

        if raw is None:
            return None

        try:
            view = StatusView.model_validate_json(raw)
        except SchemaError:
            logger.warning("Discarding unreadable cached value for %s", key)
            return None

        logger.debug("Cache hit for %s", key)
        return view

    def _write_cache(self, key: str, view: StatusView) -> None:
        try:
            self.cache.set(key, view.model_dump_json(), self.ttl_seconds)
        except CacheError as e:
            logger.warning("Cache write failed for %s: %s", key, e)
