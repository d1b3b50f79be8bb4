"""Public status lookup endpoint."""

from fastapi import APIRouter

from eventreg.api.dependencies import LookupDep
from eventreg.api.models import APIResponse
from eventreg.lookup import StatusView

router = APIRouter(prefix="/status", tags=["status"])


@router.get("/{registration_id}", response_model=APIResponse[StatusView])
def get_status(registration_id: str, lookup: LookupDep) -> APIResponse[StatusView]:
    """Look up a registration and its payments. May be up to the cache TTL stale."""
    return APIResponse(data=lookup.get_status(registration_id))
