"""Unit tests for PaymentLedger."""

from unittest.mock import MagicMock

import pytest

from eventreg.ledger import BalanceSnapshot, PaymentLedger
from eventreg.registry import (
    MAX_AMOUNT,
    PaymentNotFoundError,
    PaymentStatus,
    RegistrationNotFoundError,
    RegistrationStatus,
    RegistrationStore,
    StoreError,
    ValidationError,
)


def _ledger_sum(store: RegistrationStore, registration_id: str) -> int:
    return sum(p.amount for p in store.list_payments(registration_id))


@pytest.mark.unit
class TestAddPayment:
    """Tests for add_payment."""

    def test_add_payment_updates_balance(
        self, store: RegistrationStore, ledger: PaymentLedger, individual
    ) -> None:
        """Partial payment moves the registration to PARTIAL_PAID."""
        payment = ledger.add_payment(individual.id, 40_000, recorded_by="admin-1")

        registration = store.get_registration(individual.id)
        assert payment.amount == 40_000
        assert payment.recorded_by == "admin-1"
        assert registration.total_paid == 40_000
        assert registration.status is RegistrationStatus.PARTIAL_PAID

    def test_add_payment_accepts_overpayment(
        self, store: RegistrationStore, ledger: PaymentLedger, individual
    ) -> None:
        """Amounts beyond the fee are recorded, not rejected."""
        ledger.add_payment(individual.id, 150_000)

        registration = store.get_registration(individual.id)
        assert registration.total_paid == 150_000
        assert registration.status is RegistrationStatus.FULLY_PAID
        assert registration.remaining_balance == -50_000

    @pytest.mark.parametrize("amount", [0, -1, -40_000])
    def test_add_payment_non_positive_rejected(
        self, ledger: PaymentLedger, individual, amount: int
    ) -> None:
        """Amounts must be positive."""
        with pytest.raises(ValidationError):
            ledger.add_payment(individual.id, amount)

    def test_add_payment_above_max_rejected(self, ledger: PaymentLedger, individual) -> None:
        """Amounts beyond MAX_AMOUNT are refused before reaching the store."""
        for amount in (MAX_AMOUNT + 1, 2**63):
            with pytest.raises(ValidationError, match="must not exceed"):
                ledger.add_payment(individual.id, amount)

    def test_add_payment_at_max_accepted(
        self, store: RegistrationStore, ledger: PaymentLedger, individual
    ) -> None:
        """MAX_AMOUNT itself is a valid amount."""
        ledger.add_payment(individual.id, MAX_AMOUNT)
        assert store.get_registration(individual.id).total_paid == MAX_AMOUNT

    @pytest.mark.parametrize("amount", [1.5, "1000", True])
    def test_add_payment_non_integer_rejected(
        self, ledger: PaymentLedger, individual, amount: object
    ) -> None:
        """Amounts must be whole integers."""
        with pytest.raises(ValidationError):
            ledger.add_payment(individual.id, amount)  # type: ignore[arg-type]

    def test_add_payment_validation_before_store_access(self) -> None:
        """Invalid input never reaches the store."""
        store = MagicMock()
        ledger = PaymentLedger(store)

        with pytest.raises(ValidationError):
            ledger.add_payment("", 10_000)
        with pytest.raises(ValidationError):
            ledger.add_payment("reg-1", 0)

        store.insert_payment.assert_not_called()

    def test_add_payment_unknown_registration(self, ledger: PaymentLedger) -> None:
        """RegistrationNotFoundError for unknown ID."""
        with pytest.raises(RegistrationNotFoundError):
            ledger.add_payment("nonexistent", 10_000)

    def test_add_payment_recalc_failure_keeps_entry(self) -> None:
        """A failed recalculation surfaces StoreError without undoing the insert."""
        store = MagicMock()
        store.insert_payment.return_value = MagicMock(id="pay-1")
        store.get_registration.return_value = MagicMock(total_fee=100_000)
        store.list_payments.return_value = [MagicMock(amount=10_000)]
        store.update_balance.side_effect = StoreError("disk full")
        ledger = PaymentLedger(store)

        with pytest.raises(StoreError):
            ledger.add_payment("reg-1", 10_000)

        store.insert_payment.assert_called_once_with("reg-1", 10_000, None)
        store.delete_payment.assert_not_called()


@pytest.mark.unit
class TestDeletePayment:
    """Tests for delete_payment."""

    def test_delete_payment_rescans_ledger(
        self, store: RegistrationStore, ledger: PaymentLedger, individual
    ) -> None:
        """Balance after delete is the sum of the remaining entries."""
        ledger.add_payment(individual.id, 30_000)
        second = ledger.add_payment(individual.id, 70_000)
        assert store.get_registration(individual.id).status is RegistrationStatus.FULLY_PAID

        ledger.delete_payment(second.id, individual.id)

        registration = store.get_registration(individual.id)
        assert registration.total_paid == 30_000
        assert registration.status is RegistrationStatus.PARTIAL_PAID

    def test_delete_last_payment_returns_to_pending(
        self, store: RegistrationStore, ledger: PaymentLedger, individual
    ) -> None:
        """Removing every entry brings the balance back to zero."""
        payment = ledger.add_payment(individual.id, 30_000)

        ledger.delete_payment(payment.id, individual.id)

        registration = store.get_registration(individual.id)
        assert registration.total_paid == 0
        assert registration.status is RegistrationStatus.PENDING

    def test_delete_unknown_payment(self, ledger: PaymentLedger, individual) -> None:
        """PaymentNotFoundError for unknown payment."""
        with pytest.raises(PaymentNotFoundError):
            ledger.delete_payment("nonexistent", individual.id)

    def test_delete_requires_ids(self, ledger: PaymentLedger) -> None:
        """Both IDs are required."""
        with pytest.raises(ValidationError):
            ledger.delete_payment("", "reg-1")
        with pytest.raises(ValidationError):
            ledger.delete_payment("pay-1", " ")


@pytest.mark.unit
class TestRecalculate:
    """Tests for recalculate."""

    def test_recalculate_returns_snapshot(
        self, ledger: PaymentLedger, store: RegistrationStore, family
    ) -> None:
        """Snapshot reflects the ledger sum and derived status."""
        store.insert_payment(family.id, 100_000)
        store.insert_payment(family.id, 50_000)

        snapshot = ledger.recalculate(family.id)

        assert snapshot == BalanceSnapshot(
            registration_id=family.id,
            total_paid=150_000,
            payment_status=PaymentStatus.PARTIAL_PAID,
            status=RegistrationStatus.PARTIAL_PAID,
        )
        assert store.get_registration(family.id).total_paid == 150_000

    def test_recalculate_repairs_stale_total(
        self, ledger: PaymentLedger, store: RegistrationStore, individual
    ) -> None:
        """A stale stored total is overwritten from the ledger."""
        store.insert_payment(individual.id, 20_000)
        store.update_balance(individual.id, 999_999, PaymentStatus.FULLY_PAID)

        snapshot = ledger.recalculate(individual.id)

        assert snapshot.total_paid == 20_000
        assert store.get_registration(individual.id).status is RegistrationStatus.PARTIAL_PAID

    def test_recalculate_is_idempotent(
        self, ledger: PaymentLedger, store: RegistrationStore, individual
    ) -> None:
        """Two recalculations without ledger changes agree."""
        store.insert_payment(individual.id, 60_000)

        first = ledger.recalculate(individual.id)
        second = ledger.recalculate(individual.id)

        assert first == second

    def test_recalculate_unknown_registration(self, ledger: PaymentLedger) -> None:
        """RegistrationNotFoundError for unknown ID."""
        with pytest.raises(RegistrationNotFoundError):
            ledger.recalculate("nonexistent")


@pytest.mark.unit
class TestCancellationIsSticky:
    """Cancelled registrations stay cancelled through ledger changes."""

    def test_add_after_cancel_stays_cancelled(
        self, store: RegistrationStore, ledger: PaymentLedger, individual
    ) -> None:
        """Recording a payment on a cancelled registration keeps it CANCELLED."""
        store.cancel_registration(individual.id)

        ledger.add_payment(individual.id, 100_000)

        registration = store.get_registration(individual.id)
        assert registration.total_paid == 100_000
        assert registration.status is RegistrationStatus.CANCELLED

    def test_delete_after_cancel_stays_cancelled(
        self, store: RegistrationStore, ledger: PaymentLedger, individual
    ) -> None:
        """Deleting a payment on a cancelled registration keeps it CANCELLED."""
        payment = ledger.add_payment(individual.id, 40_000)
        store.cancel_registration(individual.id)

        ledger.delete_payment(payment.id, individual.id)

        registration = store.get_registration(individual.id)
        assert registration.total_paid == 0
        assert registration.status is RegistrationStatus.CANCELLED

    def test_recalculate_reports_cancelled(
        self, store: RegistrationStore, ledger: PaymentLedger, individual
    ) -> None:
        """Snapshot status is CANCELLED while payment_status tracks the ledger."""
        store.insert_payment(individual.id, 40_000)
        store.cancel_registration(individual.id)

        snapshot = ledger.recalculate(individual.id)

        assert snapshot.status is RegistrationStatus.CANCELLED
        assert snapshot.payment_status is PaymentStatus.PARTIAL_PAID


@pytest.mark.unit
class TestLedgerScenarios:
    """End-to-end ledger scenarios."""

    def test_individual_payment_lifecycle(
        self, store: RegistrationStore, ledger: PaymentLedger, individual
    ) -> None:
        """40k partial, 60k settles, deleting the 60k reverts to partial."""
        assert individual.total_fee == 100_000
        assert individual.total_paid == 0
        assert individual.status is RegistrationStatus.PENDING

        ledger.add_payment(individual.id, 40_000)
        registration = store.get_registration(individual.id)
        assert registration.total_paid == 40_000
        assert registration.status is RegistrationStatus.PARTIAL_PAID

        final = ledger.add_payment(individual.id, 60_000)
        registration = store.get_registration(individual.id)
        assert registration.total_paid == 100_000
        assert registration.status is RegistrationStatus.FULLY_PAID

        ledger.delete_payment(final.id, individual.id)
        registration = store.get_registration(individual.id)
        assert registration.total_paid == 40_000
        assert registration.status is RegistrationStatus.PARTIAL_PAID

    def test_total_matches_ledger_after_mixed_operations(
        self, store: RegistrationStore, ledger: PaymentLedger, family
    ) -> None:
        """total_paid equals the live ledger sum after every operation."""
        added = []
        for amount in (50_000, 25_000, 75_000, 10_000, 140_000):
            added.append(ledger.add_payment(family.id, amount))
            assert store.get_registration(family.id).total_paid == _ledger_sum(store, family.id)

        for payment in (added[1], added[4], added[0]):
            ledger.delete_payment(payment.id, family.id)
            assert store.get_registration(family.id).total_paid == _ledger_sum(store, family.id)

        assert store.get_registration(family.id).total_paid == 85_000

    def test_family_fee_fixed_at_creation(
        self, store: RegistrationStore, ledger: PaymentLedger, family
    ) -> None:
        """Fee stays 300,000 after members are added and payments recorded."""
        assert family.total_fee == 300_000

        store.add_family_member(family.id, "Dewi")
        ledger.add_payment(family.id, 300_000)

        registration = store.get_registration(family.id)
        assert registration.total_fee == 300_000
        assert len(registration.family_members) == 3
        assert registration.status is RegistrationStatus.FULLY_PAID
