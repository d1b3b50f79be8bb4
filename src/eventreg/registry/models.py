"""SQLAlchemy models for the registration registry."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class RegistrationType(StrEnum):
    """Registrant unit kind."""

    INDIVIDUAL = "INDIVIDUAL"
    FAMILY = "FAMILY"


class AgeCategory(StrEnum):
    """Age bracket of a registered person."""

    ADULT = "ADULT"
    YOUTH = "YOUTH"
    CHILD = "CHILD"


class RegistrationSource(StrEnum):
    """Where the registration was entered. Provenance only."""

    SELF = "SELF"
    ADMIN = "ADMIN"


class PaymentStatus(StrEnum):
    """Status derived from the payment ledger."""

    PENDING = "PENDING"
    PARTIAL_PAID = "PARTIAL_PAID"
    FULLY_PAID = "FULLY_PAID"


class RegistrationStatus(StrEnum):
    """Public registration status: a payment status or the terminal CANCELLED."""

    PENDING = "PENDING"
    PARTIAL_PAID = "PARTIAL_PAID"
    FULLY_PAID = "FULLY_PAID"
    CANCELLED = "CANCELLED"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time, to microsecond precision."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Registration(Base):
    """Registration model - one row per individual or family representative.

    ``total_paid`` and ``payment_status`` are owned by balance recalculation.
    Cancellation is a separate flag so recalculation can never clear it.
    """

    __tablename__ = "registrations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    representative_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)
    age_category: Mapped[str] = mapped_column(String(10), nullable=False)
    total_fee: Mapped[int] = mapped_column(Integer, nullable=False)
    total_paid: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False)
    is_cancelled: Mapped[bool] = mapped_column(Boolean, nullable=False)
    registration_source: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    # Relationships
    family_members: Mapped[list[FamilyMember]] = relationship(
        "FamilyMember",
        back_populates="registration",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="FamilyMember.id",
    )
    payments: Mapped[list[Payment]] = relationship(
        "Payment", back_populates="registration", cascade="all, delete-orphan"
    )

    def __init__(
        self,
        type: str,
        representative_name: str,
        phone_number: str,
        total_fee: int,
        id: str | None = None,
        age_category: str = AgeCategory.ADULT.value,
        total_paid: int = 0,
        payment_status: str | None = None,
        is_cancelled: bool = False,
        registration_source: str = RegistrationSource.SELF.value,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.type = type
        self.representative_name = representative_name
        self.phone_number = phone_number
        self.age_category = age_category
        self.total_fee = total_fee
        self.total_paid = total_paid
        self.payment_status = (
            payment_status if payment_status is not None else PaymentStatus.PENDING.value
        )
        self.is_cancelled = is_cancelled
        self.registration_source = registration_source

    @property
    def status(self) -> RegistrationStatus:
        """Public status; cancellation takes priority over the ledger."""
        if self.is_cancelled:
            return RegistrationStatus.CANCELLED
        return RegistrationStatus(self.payment_status)

    @property
    def registration_type(self) -> RegistrationType:
        """Get type as RegistrationType enum."""
        return RegistrationType(self.type)

    @property
    def remaining_balance(self) -> int:
        """Fee still owed; negative when overpaid."""
        return self.total_fee - self.total_paid

    def __repr__(self) -> str:
        return (
            f"<Registration(id={self.id!r}, type={self.type!r}, "
            f"status={self.status.value!r})>"
        )


class FamilyMember(Base):
    """Family member owned by a FAMILY registration."""

    __tablename__ = "family_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    registration_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("registrations.id", ondelete="CASCADE"), nullable=False
    )
    member_name: Mapped[str] = mapped_column(String(255), nullable=False)
    age_category: Mapped[str] = mapped_column(String(10), nullable=False)

    registration: Mapped[Registration] = relationship(
        "Registration", back_populates="family_members"
    )

    def __init__(
        self,
        member_name: str,
        age_category: str = AgeCategory.ADULT.value,
        registration_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.member_name = member_name
        self.age_category = age_category
        if registration_id is not None:
            self.registration_id = registration_id

    def __repr__(self) -> str:
        return f"<FamilyMember(name={self.member_name!r}, age={self.age_category!r})>"


class Payment(Base):
    """Payment ledger entry - one recorded cash payment."""

    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    registration_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("registrations.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    recorded_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    registration: Mapped[Registration] = relationship("Registration", back_populates="payments")

    def __init__(
        self,
        registration_id: str,
        amount: int,
        payment_date: datetime,
        id: str | None = None,
        recorded_by: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.registration_id = registration_id
        self.amount = amount
        self.payment_date = payment_date
        self.recorded_by = recorded_by

    def __repr__(self) -> str:
        return (
            f"<Payment(id={self.id!r}, registration_id={self.registration_id!r}, "
            f"amount={self.amount!r})>"
        )


@dataclass
class DashboardStats:
    """Aggregated totals across non-cancelled registrations."""

    total_registrants: int
    total_expected: int
    total_collected: int
    total_unpaid: int
    recent_registrations: list[Registration] = field(default_factory=list)
