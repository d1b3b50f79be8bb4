"""Registration fee computation."""

from __future__ import annotations

from eventreg.registry.exceptions import ValidationError

UNIT_PRICE = 100_000

# Largest single amount accepted; keeps ledger sums well inside SQLite INTEGER
MAX_AMOUNT = 1_000_000_000_000


def compute_total_fee(member_count: int, unit_price: int = UNIT_PRICE) -> int:
    """Fee for the representative plus each family member.

    Args:
        member_count: Number of family members besides the representative.
        unit_price: Fee per person.

    Returns:
        (1 + member_count) * unit_price

    Raises:
        ValidationError: If member_count is negative or unit_price is not positive.
    """
    if member_count < 0:
        raise ValidationError(f"Member count cannot be negative, got {member_count}")
    if unit_price <= 0:
        raise ValidationError(f"Unit price must be positive, got {unit_price}")
    return (1 + member_count) * unit_price
