"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends, Header

from eventreg.cache import StatusCache, build_cache
from eventreg.config import Settings
from eventreg.ledger import PaymentLedger
from eventreg.lookup import StatusLookup
from eventreg.registry import RegistrationStore

# Global services (initialized on app startup)
_settings: Settings | None = None
_store: RegistrationStore | None = None
_cache: StatusCache | None = None
_ledger: PaymentLedger | None = None
_lookup: StatusLookup | None = None


def init_services(settings: Settings, cache: StatusCache | None = None) -> RegistrationStore:
    """Initialize the global store, cache, ledger and status lookup.

    Args:
        settings: Application settings.
        cache: Cache to use instead of the one built from settings.

    Returns:
        The initialized RegistrationStore.
    """
    global _settings, _store, _cache, _ledger, _lookup  # noqa: PLW0603
    _settings = settings
    _store = RegistrationStore(settings.db_path)
    _cache = cache if cache is not None else build_cache(settings)
    _ledger = PaymentLedger(_store)
    _lookup = StatusLookup(_store, _cache, ttl_seconds=settings.status_cache_ttl)
    return _store


def close_services() -> None:
    """Close the global services."""
    global _settings, _store, _cache, _ledger, _lookup  # noqa: PLW0603
    if _cache is not None:
        _cache.close()
    if _store is not None:
        _store.close()
    _settings = None
    _store = None
    _cache = None
    _ledger = None
    _lookup = None


def get_settings() -> Generator[Settings, None, None]:
    """Dependency that provides the active Settings."""
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call init_services() first.")
    yield _settings


def get_store() -> Generator[RegistrationStore, None, None]:
    """Dependency that provides the RegistrationStore instance."""
    if _store is None:
        raise RuntimeError("RegistrationStore not initialized. Call init_services() first.")
    yield _store


def get_ledger() -> Generator[PaymentLedger, None, None]:
    """Dependency that provides the PaymentLedger instance."""
    if _ledger is None:
        raise RuntimeError("PaymentLedger not initialized. Call init_services() first.")
    yield _ledger


def get_lookup() -> Generator[StatusLookup, None, None]:
    """Dependency that provides the StatusLookup instance."""
    if _lookup is None:
        raise RuntimeError("StatusLookup not initialized. Call init_services() first.")
    yield _lookup


def get_actor_id(x_actor_id: Annotated[str | None, Header()] = None) -> str | None:
    """Acting admin ID, forwarded by the identity proxy in front of the API."""
    if x_actor_id is None or not x_actor_id.strip():
        return None
    return x_actor_id.strip()


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[RegistrationStore, Depends(get_store)]
LedgerDep = Annotated[PaymentLedger, Depends(get_ledger)]
LookupDep = Annotated[StatusLookup, Depends(get_lookup)]
ActorDep = Annotated[str | None, Depends(get_actor_id)]
