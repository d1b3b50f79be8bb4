"""Admin payment recording endpoints."""

from fastapi import APIRouter, status

from eventreg.api.dependencies import ActorDep, LedgerDep, StoreDep
from eventreg.api.models import (
    APIResponse,
    PaymentCreate,
    PaymentResponse,
    payment_to_response,
)
from eventreg.registry import (
    OverpaymentError,
    Registration,
    RegistrationCancelledError,
    RegistrationStore,
)

router = APIRouter(prefix="/admin/registrations/{registration_id}/payments", tags=["payments"])


def _get_open_registration(store: RegistrationStore, registration_id: str) -> Registration:
    registration = store.get_registration(registration_id)
    if registration.is_cancelled:
        raise RegistrationCancelledError(f"Registration '{registration_id}' is cancelled")
    return registration


@router.get("", response_model=APIResponse[list[PaymentResponse]])
def list_payments(registration_id: str, store: StoreDep) -> APIResponse[list[PaymentResponse]]:
    """List recorded payments, newest first."""
    store.get_registration(registration_id)
    payments = store.list_payments(registration_id)
    return APIResponse(data=[payment_to_response(p) for p in payments])


@router.post(
    "",
    response_model=APIResponse[PaymentResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_payment(
    registration_id: str,
    payment: PaymentCreate,
    store: StoreDep,
    ledger: LedgerDep,
    actor: ActorDep,
) -> APIResponse[PaymentResponse]:
    """Record a cash payment. Amounts above the remaining balance are refused."""
    registration = _get_open_registration(store, registration_id)
    if payment.amount > registration.remaining_balance:
        raise OverpaymentError(
            f"Amount {payment.amount} exceeds remaining balance {registration.remaining_balance}"
        )

    created = ledger.add_payment(registration_id, payment.amount, recorded_by=actor)
    return APIResponse(data=payment_to_response(created))


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(
    registration_id: str, payment_id: str, store: StoreDep, ledger: LedgerDep
) -> None:
    """Delete a recorded payment and recalculate the balance."""
    _get_open_registration(store, registration_id)
    ledger.delete_payment(payment_id, registration_id)
