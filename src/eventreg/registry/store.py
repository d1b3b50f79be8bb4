"""RegistrationStore - Main API for registry persistence."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.orm import Session, selectinload

from eventreg.logging import get_logger
from eventreg.registry.database import Database
from eventreg.registry.exceptions import (
    PaymentNotFoundError,
    RegistrationNotFoundError,
    ValidationError,
)
from eventreg.registry.fees import UNIT_PRICE, compute_total_fee
from eventreg.registry.models import (
    AgeCategory,
    DashboardStats,
    FamilyMember,
    Payment,
    PaymentStatus,
    Registration,
    RegistrationSource,
    RegistrationStatus,
    RegistrationType,
    utcnow,
)

logger = get_logger("registry")

MemberSpec = tuple[str, AgeCategory | str]

LIKE_ESCAPE = "\\"


def _escape_like(term: str) -> str:
    """Make % and _ in a search term match literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class RegistrationStore:
    """Main API for registry operations.

    Provides insert, select, update and delete operations over the
    registrations, family_members and payments tables. Balance fields are
    written only through ``update_balance``.
    """

    def __init__(self, db_path: str = "eventreg.db") -> None:
        """Initialize the store with a SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    @staticmethod
    def _load_registration(session: Session, registration_id: str) -> Registration:
        stmt = (
            select(Registration)
            .options(selectinload(Registration.family_members))
            .where(Registration.id == registration_id)
            .execution_options(populate_existing=True)
        )
        registration = session.execute(stmt).scalar_one_or_none()
        if registration is None:
            raise RegistrationNotFoundError(f"Registration with id '{registration_id}' not found")
        return registration

    # --- Registration Operations ---

    def create_registration(
        self,
        type: RegistrationType | str,
        representative_name: str,
        phone_number: str,
        age_category: AgeCategory | str = AgeCategory.ADULT,
        family_members: Iterable[MemberSpec] = (),
        source: RegistrationSource | str = RegistrationSource.SELF,
        unit_price: int = UNIT_PRICE,
    ) -> Registration:
        """Create a new registration with its family members.

        The fee is fixed here from the member count and never recomputed.

        Args:
            type: INDIVIDUAL or FAMILY
            representative_name: Name of the registrant or family representative
            phone_number: Contact number
            age_category: Age category of the representative
            family_members: (name, age_category) pairs, FAMILY only
            source: SELF for the public form, ADMIN for admin entry
            unit_price: Fee per person

        Returns:
            Created Registration with generated ID, PENDING and nothing paid

        Raises:
            ValidationError: If required fields are missing, enums are invalid
                or an INDIVIDUAL registration lists family members
            StoreError: If the insert fails
        """
        if not representative_name or not representative_name.strip():
            raise ValidationError("Representative name is required")
        if not phone_number or not phone_number.strip():
            raise ValidationError("Phone number is required")

        try:
            reg_type = RegistrationType(type)
            rep_age = AgeCategory(age_category)
            reg_source = RegistrationSource(source)
            members = [(name.strip(), AgeCategory(age)) for name, age in family_members]
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if reg_type is RegistrationType.INDIVIDUAL and members:
            raise ValidationError("Individual registrations cannot have family members")
        if any(not name for name, _ in members):
            raise ValidationError("Family member name is required")

        total_fee = compute_total_fee(len(members), unit_price)

        with self._db.session_scope() as session:
            registration = Registration(
                type=reg_type.value,
                representative_name=representative_name.strip(),
                phone_number=phone_number.strip(),
                age_category=rep_age.value,
                total_fee=total_fee,
                registration_source=reg_source.value,
            )
            registration.family_members = [
                FamilyMember(member_name=name, age_category=age.value) for name, age in members
            ]
            session.add(registration)
            session.commit()
            created = self._load_registration(session, registration.id)

        logger.info(
            "Created %s registration %s (source=%s, fee=%d)",
            reg_type.value,
            created.id,
            reg_source.value,
            total_fee,
        )
        return created

    def get_registration(self, registration_id: str) -> Registration:
        """Get registration by ID, with family members loaded.

        Raises:
            RegistrationNotFoundError: If registration doesn't exist
            StoreError: If the read fails
        """
        with self._db.session_scope() as session:
            return self._load_registration(session, registration_id)

    def list_registrations(
        self,
        search: str | None = None,
        status: RegistrationStatus | None = None,
    ) -> list[Registration]:
        """List registrations with optional filters.

        Args:
            search: Case-insensitive match on representative name, phone
                number, registration ID or any family member name
            status: Filter by public status (CANCELLED included)

        Returns:
            Matching registrations, most recent first
        """
        with self._db.session_scope() as session:
            stmt = select(Registration).options(selectinload(Registration.family_members))

            query = (search or "").strip().lower()
            if query:
                pattern = f"%{_escape_like(query)}%"
                member_match = (
                    select(FamilyMember.id)
                    .where(
                        FamilyMember.registration_id == Registration.id,
                        func.lower(FamilyMember.member_name).like(pattern, escape=LIKE_ESCAPE),
                    )
                    .exists()
                )
                stmt = stmt.where(
                    or_(
                        func.lower(Registration.representative_name).like(pattern, escape=LIKE_ESCAPE),
                        Registration.phone_number.like(pattern, escape=LIKE_ESCAPE),
                        func.lower(Registration.id).like(pattern, escape=LIKE_ESCAPE),
                        member_match,
                    )
                )

            if status is RegistrationStatus.CANCELLED:
                stmt = stmt.where(Registration.is_cancelled.is_(True))
            elif status is not None:
                stmt = stmt.where(
                    Registration.is_cancelled.is_(False),
                    Registration.payment_status == status.value,
                )

            stmt = stmt.order_by(Registration.created_at.desc(), Registration.id)
            return list(session.execute(stmt).scalars().all())

    def add_family_member(
        self,
        registration_id: str,
        member_name: str,
        age_category: AgeCategory | str = AgeCategory.ADULT,
    ) -> Registration:
        """Attach a family member. The fee fixed at creation is left as is.

        Raises:
            ValidationError: If the name is empty, the category is invalid or
                the registration is not a FAMILY registration
            RegistrationNotFoundError: If registration doesn't exist
        """
        if not member_name or not member_name.strip():
            raise ValidationError("Family member name is required")
        try:
            age = AgeCategory(age_category)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        with self._db.session_scope() as session:
            registration = self._load_registration(session, registration_id)
            if registration.registration_type is not RegistrationType.FAMILY:
                raise ValidationError("Only family registrations can have members")

            session.add(
                FamilyMember(
                    member_name=member_name.strip(),
                    age_category=age.value,
                    registration_id=registration_id,
                )
            )
            session.commit()
            return self._load_registration(session, registration_id)

    def cancel_registration(self, registration_id: str) -> Registration:
        """Mark a registration as cancelled. Cancelling twice is a no-op.

        Raises:
            RegistrationNotFoundError: If registration doesn't exist
        """
        with self._db.session_scope() as session:
            registration = self._load_registration(session, registration_id)
            if not registration.is_cancelled:
                registration.is_cancelled = True
                session.commit()
                logger.info("Cancelled registration %s", registration_id)
            return self._load_registration(session, registration_id)

    def update_balance(
        self,
        registration_id: str,
        total_paid: int,
        payment_status: PaymentStatus,
    ) -> Registration:
        """Write the recalculated balance back to a registration.

        Only balance recalculation should call this.

        Raises:
            RegistrationNotFoundError: If registration doesn't exist
        """
        with self._db.session_scope() as session:
            result = session.execute(
                update(Registration)
                .where(Registration.id == registration_id)
                .values(total_paid=total_paid, payment_status=payment_status.value)
            )
            if result.rowcount == 0:
                session.rollback()
                raise RegistrationNotFoundError(
                    f"Registration with id '{registration_id}' not found"
                )
            session.commit()
            return self._load_registration(session, registration_id)

    # --- Payment Operations ---

    def insert_payment(
        self,
        registration_id: str,
        amount: int,
        recorded_by: str | None = None,
    ) -> Payment:
        """Append a ledger entry stamped with the current time.

        Raises:
            RegistrationNotFoundError: If registration doesn't exist
            StoreError: If the insert fails
        """
        with self._db.session_scope() as session:
            if session.get(Registration, registration_id) is None:
                raise RegistrationNotFoundError(
                    f"Registration with id '{registration_id}' not found"
                )

            payment = Payment(
                registration_id=registration_id,
                amount=amount,
                payment_date=utcnow(),
                recorded_by=recorded_by,
            )
            session.add(payment)
            session.commit()
            session.refresh(payment)
            return payment

    def list_payments(self, registration_id: str) -> list[Payment]:
        """List ledger entries for a registration, most recent first."""
        with self._db.session_scope() as session:
            stmt = (
                select(Payment)
                .where(Payment.registration_id == registration_id)
                .order_by(Payment.payment_date.desc(), Payment.id)
            )
            return list(session.execute(stmt).scalars().all())

    def delete_payment(self, payment_id: str, registration_id: str) -> None:
        """Permanently remove a ledger entry.

        Raises:
            PaymentNotFoundError: If no such entry exists for the registration
        """
        with self._db.session_scope() as session:
            result = session.execute(
                delete(Payment).where(
                    Payment.id == payment_id,
                    Payment.registration_id == registration_id,
                )
            )
            if result.rowcount == 0:
                session.rollback()
                raise PaymentNotFoundError(
                    f"Payment '{payment_id}' not found for registration '{registration_id}'"
                )
            session.commit()

    # --- Stats ---

    def get_dashboard_stats(self, recent_limit: int = 5) -> DashboardStats:
        """Aggregate fees and collections across non-cancelled registrations.

        Args:
            recent_limit: How many of the newest registrations to include

        Returns:
            DashboardStats with counts, totals and recent registrations
        """
        with self._db.session_scope() as session:
            active = Registration.is_cancelled.is_(False)
            totals = session.execute(
                select(
                    func.sum(case((active, 1), else_=0)).label("registrants"),
                    func.sum(case((active, Registration.total_fee), else_=0)).label("expected"),
                    func.sum(case((active, Registration.total_paid), else_=0)).label("collected"),
                )
            ).one()

            recent_stmt = (
                select(Registration)
                .options(selectinload(Registration.family_members))
                .order_by(Registration.created_at.desc(), Registration.id)
                .limit(recent_limit)
            )
            recent = list(session.execute(recent_stmt).scalars().all())

        expected = int(totals.expected or 0)
        collected = int(totals.collected or 0)
        return DashboardStats(
            total_registrants=int(totals.registrants or 0),
            total_expected=expected,
            total_collected=collected,
            total_unpaid=expected - collected,
            recent_registrations=recent,
        )
