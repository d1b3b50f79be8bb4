"""Admin registration management endpoints."""

from fastapi import APIRouter, status

from eventreg.api.dependencies import (
    ActorDep,
    LedgerDep,
    LookupDep,
    SettingsDep,
    StoreDep,
)
from eventreg.api.models import (
    AdminRegistrationCreate,
    APIResponse,
    FamilyMemberCreate,
    RegistrationDetailResponse,
    RegistrationResponse,
    registration_to_response,
)
from eventreg.registry import RegistrationSource, RegistrationStatus

router = APIRouter(prefix="/admin/registrations", tags=["admin"])


@router.get("", response_model=APIResponse[list[RegistrationResponse]])
def list_registrations(
    store: StoreDep,
    search: str | None = None,
    status: RegistrationStatus | None = None,
) -> APIResponse[list[RegistrationResponse]]:
    """List registrations, newest first, with optional search and status filter."""
    registrations = store.list_registrations(search=search, status=status)
    return APIResponse(data=[registration_to_response(r) for r in registrations])


@router.post(
    "",
    response_model=APIResponse[RegistrationResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_registration(
    registration: AdminRegistrationCreate,
    store: StoreDep,
    ledger: LedgerDep,
    settings: SettingsDep,
    actor: ActorDep,
) -> APIResponse[RegistrationResponse]:
    """Enter a registration on behalf of a registrant, optionally with a first payment."""
    created = store.create_registration(
        type=registration.type,
        representative_name=registration.representative_name,
        phone_number=registration.phone_number,
        age_category=registration.age_category,
        family_members=[(m.name, m.age_category) for m in registration.family_members],
        source=RegistrationSource.ADMIN,
        unit_price=settings.unit_price,
    )

    if registration.initial_payment > 0:
        ledger.add_payment(created.id, registration.initial_payment, recorded_by=actor)
        created = store.get_registration(created.id)

    return APIResponse(data=registration_to_response(created))


@router.get("/{registration_id}", response_model=APIResponse[RegistrationDetailResponse])
def get_registration(
    registration_id: str, lookup: LookupDep
) -> APIResponse[RegistrationDetailResponse]:
    """Registration with its payment history, always read from the store."""
    return APIResponse(data=lookup.load(registration_id))


@router.post("/{registration_id}/cancel", response_model=APIResponse[RegistrationResponse])
def cancel_registration(
    registration_id: str, store: StoreDep
) -> APIResponse[RegistrationResponse]:
    """Cancel a registration. Cancellation is permanent."""
    cancelled = store.cancel_registration(registration_id)
    return APIResponse(data=registration_to_response(cancelled))


@router.post(
    "/{registration_id}/members",
    response_model=APIResponse[RegistrationResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_family_member(
    registration_id: str, member: FamilyMemberCreate, store: StoreDep
) -> APIResponse[RegistrationResponse]:
    """Add a family member. The registration fee is not changed."""
    updated = store.add_family_member(registration_id, member.name, member.age_category)
    return APIResponse(data=registration_to_response(updated))
