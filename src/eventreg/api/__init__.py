"""REST API for eventreg."""

from eventreg.api.app import create_app
from eventreg.api.models import (
    AdminRegistrationCreate,
    APIResponse,
    PaymentCreate,
    RegistrationCreate,
)

__all__ = [
    "APIResponse",
    "AdminRegistrationCreate",
    "PaymentCreate",
    "RegistrationCreate",
    "create_app",
]
