"""Status lookup - Public, cached view of a registration's payments."""

from eventreg.lookup.lookup import STATUS_CACHE_TTL, StatusLookup, status_cache_key
from eventreg.lookup.models import (
    FamilyMemberSnapshot,
    PaymentSnapshot,
    RegistrationSnapshot,
    StatusView,
)

__all__ = [
    "STATUS_CACHE_TTL",
    "FamilyMemberSnapshot",
    "PaymentSnapshot",
    "RegistrationSnapshot",
    "StatusLookup",
    "StatusView",
    "status_cache_key",
]
