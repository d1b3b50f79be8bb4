"""Custom exceptions for the registration registry."""


class RegistryError(Exception):
    """Base exception for registry errors."""


class ValidationError(RegistryError):
    """Caller-supplied input was rejected before touching the store."""


class OverpaymentError(ValidationError):
    """Payment amount exceeds the remaining balance."""


class RegistrationCancelledError(ValidationError):
    """Operation is not allowed on a cancelled registration."""


class NotFoundError(RegistryError):
    """Referenced record does not exist."""


class RegistrationNotFoundError(NotFoundError):
    """Registration with given ID does not exist."""


class PaymentNotFoundError(NotFoundError):
    """Payment entry with given ID does not exist for the registration."""


class StoreError(RegistryError):
    """Underlying database read or write failed."""
