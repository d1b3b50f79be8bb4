"""Pydantic models for REST API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from eventreg.lookup.models import (
    PaymentSnapshot,
    RegistrationSnapshot,
    StatusView,
)
from eventreg.registry.fees import MAX_AMOUNT
from eventreg.registry.models import AgeCategory, RegistrationType

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Registration models


class FamilyMemberCreate(BaseModel):
    """A family member submitted with a registration."""

    name: str = Field(..., min_length=1, max_length=255)
    age_category: AgeCategory = AgeCategory.ADULT


class RegistrationCreate(BaseModel):
    """Request model for the public registration form."""

    type: RegistrationType
    representative_name: str = Field(..., min_length=1, max_length=255)
    phone_number: str = Field(..., min_length=6, max_length=32, pattern=r"^\+?[\d\s\-]+$")
    age_category: AgeCategory = AgeCategory.ADULT
    family_members: list[FamilyMemberCreate] = Field(default_factory=list, max_length=20)


class AdminRegistrationCreate(RegistrationCreate):
    """Request model for admin entry, optionally with a first payment."""

    initial_payment: int = Field(default=0, ge=0, le=MAX_AMOUNT)


RegistrationResponse = RegistrationSnapshot
PaymentResponse = PaymentSnapshot
RegistrationDetailResponse = StatusView


def registration_to_response(registration: Any) -> RegistrationResponse:
    """Convert a Registration model to RegistrationResponse."""
    return RegistrationResponse.model_validate(registration)


def payment_to_response(payment: Any) -> PaymentResponse:
    """Convert a Payment model to PaymentResponse."""
    return PaymentResponse.model_validate(payment)


# Payment models


class PaymentCreate(BaseModel):
    """Request model for recording a payment."""

    amount: int = Field(..., gt=0, le=MAX_AMOUNT)


# Dashboard models


class DashboardStatsResponse(BaseModel):
    """Response model for dashboard totals."""

    model_config = ConfigDict(from_attributes=True)

    total_registrants: int
    total_expected: int
    total_collected: int
    total_unpaid: int
    recent_registrations: list[RegistrationResponse]


def dashboard_stats_to_response(stats: Any) -> DashboardStatsResponse:
    """Convert DashboardStats to DashboardStatsResponse."""
    return DashboardStatsResponse.model_validate(stats)
