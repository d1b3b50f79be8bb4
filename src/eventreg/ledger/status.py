"""Status derivation from fee and paid totals."""

from __future__ import annotations

from eventreg.registry.models import PaymentStatus, RegistrationStatus


def derive_status(total_fee: int, total_paid: int) -> PaymentStatus:
    """Map a fee/paid pair to a payment status.

    Never returns CANCELLED; cancellation is applied by ``resolve_status``.

    Args:
        total_fee: Fee fixed at registration time.
        total_paid: Sum of all live ledger entries.

    Returns:
        PENDING when nothing is paid, PARTIAL_PAID while below the fee,
        FULLY_PAID once the fee is reached or exceeded.
    """
    if total_paid <= 0:
        return PaymentStatus.PENDING
    if total_paid < total_fee:
        return PaymentStatus.PARTIAL_PAID
    return PaymentStatus.FULLY_PAID


def resolve_status(payment_status: PaymentStatus, is_cancelled: bool) -> RegistrationStatus:
    """Combine the ledger-derived status with the cancellation flag."""
    if is_cancelled:
        return RegistrationStatus.CANCELLED
    return RegistrationStatus(payment_status.value)
