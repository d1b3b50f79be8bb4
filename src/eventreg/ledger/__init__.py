"""Payment Ledger - Payment recording and balance recalculation."""

from eventreg.ledger.ledger import PaymentLedger
from eventreg.ledger.models import BalanceSnapshot
from eventreg.ledger.status import derive_status, resolve_status

__all__ = [
    "BalanceSnapshot",
    "PaymentLedger",
    "derive_status",
    "resolve_status",
]
