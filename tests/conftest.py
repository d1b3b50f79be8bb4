"""Shared pytest fixtures and configuration."""

import pytest

from eventreg.ledger import PaymentLedger
from eventreg.registry import AgeCategory, RegistrationStore, RegistrationType


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def store():
    """Create an in-memory RegistrationStore."""
    s = RegistrationStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def ledger(store: RegistrationStore) -> PaymentLedger:
    """Create a PaymentLedger over the in-memory store."""
    return PaymentLedger(store)


@pytest.fixture
def individual(store: RegistrationStore):
    """An INDIVIDUAL registration with a 100,000 fee."""
    return store.create_registration(
        type=RegistrationType.INDIVIDUAL,
        representative_name="Budi Santoso",
        phone_number="081234567890",
    )


@pytest.fixture
def family(store: RegistrationStore):
    """A FAMILY registration with two members and a 300,000 fee."""
    return store.create_registration(
        type=RegistrationType.FAMILY,
        representative_name="Siti Rahma",
        phone_number="081298765432",
        family_members=[("Andi", AgeCategory.YOUTH), ("Rina", AgeCategory.CHILD)],
    )
