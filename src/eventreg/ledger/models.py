"""Data models for the Payment Ledger."""

from dataclasses import dataclass

from eventreg.registry.models import PaymentStatus, RegistrationStatus


@dataclass(frozen=True)
class BalanceSnapshot:
    """Result of a balance recalculation.

    Attributes:
        registration_id: The registration that was recalculated.
        total_paid: Sum of all live ledger entries.
        payment_status: Status derived from the ledger alone.
        status: Public status, CANCELLED when the registration is cancelled.
    """

    registration_id: str
    total_paid: int
    payment_status: PaymentStatus
    status: RegistrationStatus
