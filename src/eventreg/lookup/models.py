"""Pydantic views shared by the status lookup and the REST API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from eventreg.registry.models import (
    AgeCategory,
    RegistrationSource,
    RegistrationStatus,
    RegistrationType,
)


class FamilyMemberSnapshot(BaseModel):
    """A family member as shown to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    member_name: str
    age_category: AgeCategory


class RegistrationSnapshot(BaseModel):
    """A registration as shown to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    type: RegistrationType
    representative_name: str
    phone_number: str
    age_category: AgeCategory
    total_fee: int
    total_paid: int
    remaining_balance: int
    status: RegistrationStatus
    registration_source: RegistrationSource
    created_at: datetime
    family_members: list[FamilyMemberSnapshot] = []


class PaymentSnapshot(BaseModel):
    """A ledger entry as shown to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    registration_id: str
    amount: int
    payment_date: datetime
    recorded_by: str | None = None


class StatusView(BaseModel):
    """Registration combined with its payment history, newest payment first."""

    registration: RegistrationSnapshot
    payments: list[PaymentSnapshot] = []
