"""PaymentLedger - Records payments and keeps registration balances in step."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eventreg.ledger.models import BalanceSnapshot
from eventreg.ledger.status import derive_status, resolve_status
from eventreg.logging import get_logger
from eventreg.registry import MAX_AMOUNT, StoreError, ValidationError

if TYPE_CHECKING:
    from eventreg.registry import Payment, RegistrationStore

logger = get_logger("ledger")


class PaymentLedger:
    """Append/delete log of payments backing each registration's paid total.

    Every mutation is followed by a full recalculation from the ledger, which
    is the only path that writes ``total_paid`` and the payment status.

    The write and the recalculation are two separate store operations. When
    the recalculation fails the ledger change is kept and the StoreError is
    raised to the caller; the registration's stored totals are then stale
    until the next successful recalculation.
    """

    def __init__(self, store: RegistrationStore) -> None:
        """Initialize the ledger.

        Args:
            store: RegistrationStore used for all reads and writes.
        """
        self.store = store

    def add_payment(
        self,
        registration_id: str,
        amount: int,
        recorded_by: str | None = None,
    ) -> Payment:
        """Record a payment and recalculate the registration balance.

        Overpayment is accepted. Cancelled registrations are not checked here.

        Args:
            registration_id: The registration being paid for.
            amount: Positive amount in whole currency units.
            recorded_by: Opaque ID of the acting admin, if any.

        Returns:
            The created Payment entry.

        Raises:
            ValidationError: If the ID is missing or amount is not a positive int
                no larger than MAX_AMOUNT.
            RegistrationNotFoundError: If the registration doesn't exist.
            StoreError: If the insert or the recalculation fails.
        """
        _require_id(registration_id, "Registration ID")
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError(f"Payment amount must be an integer, got {amount!r}")
        if amount <= 0:
            raise ValidationError(f"Payment amount must be positive, got {amount}")
        if amount > MAX_AMOUNT:
            raise ValidationError(f"Payment amount must not exceed {MAX_AMOUNT}, got {amount}")

        payment = self.store.insert_payment(registration_id, amount, recorded_by)
        logger.info(
            "Recorded payment %s of %d for %s (by %s)",
            payment.id,
            amount,
            registration_id,
            recorded_by or "-",
        )

        self._recalculate_after(registration_id, f"insert of payment {payment.id}")
        return payment

    def delete_payment(self, payment_id: str, registration_id: str) -> None:
        """Permanently delete a payment and recalculate the registration balance.

        Args:
            payment_id: The payment entry to remove.
            registration_id: The registration it belongs to.

        Raises:
            ValidationError: If either ID is missing.
            PaymentNotFoundError: If no such payment exists for the registration.
            StoreError: If the delete or the recalculation fails.
        """
        _require_id(payment_id, "Payment ID")
        _require_id(registration_id, "Registration ID")

        self.store.delete_payment(payment_id, registration_id)
        logger.info("Deleted payment %s from %s", payment_id, registration_id)

        self._recalculate_after(registration_id, f"deletion of payment {payment_id}")

    def recalculate(self, registration_id: str) -> BalanceSnapshot:
        """Recompute total_paid and status from the full ledger.

        Args:
            registration_id: The registration to recalculate.

        Returns:
            BalanceSnapshot with the new total and statuses.

        Raises:
            ValidationError: If the ID is missing.
            RegistrationNotFoundError: If the registration doesn't exist.
            StoreError: If a read or the write-back fails.
        """
        _require_id(registration_id, "Registration ID")

        registration = self.store.get_registration(registration_id)
        payments = self.store.list_payments(registration_id)

        total_paid = sum(p.amount for p in payments)
        payment_status = derive_status(registration.total_fee, total_paid)

        updated = self.store.update_balance(registration_id, total_paid, payment_status)
        snapshot = BalanceSnapshot(
            registration_id=registration_id,
            total_paid=total_paid,
            payment_status=payment_status,
            status=resolve_status(payment_status, updated.is_cancelled),
        )
        logger.debug(
            "Recalculated %s: paid=%d over %d entries, status=%s",
            registration_id,
            total_paid,
            len(payments),
            snapshot.status.value,
        )
        return snapshot

    def _recalculate_after(self, registration_id: str, change: str) -> BalanceSnapshot:
        try:
            return self.recalculate(registration_id)
        except StoreError:
            logger.error(
                "Balance for %s is stale after %s; manual reconciliation needed",
                registration_id,
                change,
            )
            raise


def _require_id(value: str, label: str) -> None:
    if not value or not str(value).strip():
        raise ValidationError(f"{label} is required")
