"""Public self-service registration endpoint."""

from fastapi import APIRouter, status

from eventreg.api.dependencies import SettingsDep, StoreDep
from eventreg.api.models import (
    APIResponse,
    RegistrationCreate,
    RegistrationResponse,
    registration_to_response,
)
from eventreg.registry import RegistrationSource

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.post(
    "",
    response_model=APIResponse[RegistrationResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_registration(
    registration: RegistrationCreate, store: StoreDep, settings: SettingsDep
) -> APIResponse[RegistrationResponse]:
    """Submit a registration from the public form."""
    created = store.create_registration(
        type=registration.type,
        representative_name=registration.representative_name,
        phone_number=registration.phone_number,
        age_category=registration.age_category,
        family_members=[(m.name, m.age_category) for m in registration.family_members],
        source=RegistrationSource.SELF,
        unit_price=settings.unit_price,
    )
    return APIResponse(data=registration_to_response(created))
