"""Fixtures for API route tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from eventreg.api.app import create_app
from eventreg.api.dependencies import get_ledger, get_lookup, get_settings, get_store
from eventreg.cache import MemoryCache
from eventreg.config import Settings
from eventreg.ledger import PaymentLedger
from eventreg.lookup import StatusLookup
from eventreg.registry import RegistrationStore


class FakeClock:
    """Manually advanced clock for cache expiry."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    return Settings(db_path=":memory:", cache_backend="memory")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def lookup(store: RegistrationStore, clock: FakeClock) -> StatusLookup:
    """StatusLookup over the shared store with a controllable cache clock."""
    return StatusLookup(store, MemoryCache(clock=clock))


@pytest.fixture
def app(
    settings: Settings,
    store: RegistrationStore,
    ledger: PaymentLedger,
    lookup: StatusLookup,
) -> FastAPI:
    """Create the application with services bound to the test store."""
    app = create_app(settings)

    def override_get_settings():
        yield settings

    def override_get_store():
        yield store

    def override_get_ledger():
        yield ledger

    def override_get_lookup():
        yield lookup

    app.dependency_overrides[get_settings] = override_get_settings
    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_ledger] = override_get_ledger
    app.dependency_overrides[get_lookup] = override_get_lookup

    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
