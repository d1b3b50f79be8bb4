"""Registry - Persistent storage for registrations, family members and payments."""

from eventreg.registry.exceptions import (
    NotFoundError,
    OverpaymentError,
    PaymentNotFoundError,
    RegistrationCancelledError,
    RegistrationNotFoundError,
    RegistryError,
    StoreError,
    ValidationError,
)
from eventreg.registry.fees import MAX_AMOUNT, UNIT_PRICE, compute_total_fee
from eventreg.registry.models import (
    AgeCategory,
    DashboardStats,
    FamilyMember,
    Payment,
    PaymentStatus,
    Registration,
    RegistrationSource,
    RegistrationStatus,
    RegistrationType,
)
from eventreg.registry.store import RegistrationStore

__all__ = [
    "MAX_AMOUNT",
    "UNIT_PRICE",
    "AgeCategory",
    "DashboardStats",
    "FamilyMember",
    "NotFoundError",
    "OverpaymentError",
    "Payment",
    "PaymentNotFoundError",
    "PaymentStatus",
    "Registration",
    "RegistrationCancelledError",
    "RegistrationNotFoundError",
    "RegistrationSource",
    "RegistrationStatus",
    "RegistrationStore",
    "RegistrationType",
    "RegistryError",
    "StoreError",
    "ValidationError",
    "compute_total_fee",
]
