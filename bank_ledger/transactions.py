"""
Transaction Record Module

Immutable records of completed ledger events. An Account creates one record
per successful balance mutation and appends it to its history; records are
never shared between accounts or modified afterwards.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum


class TransactionKind(Enum):
    """Kinds of balance-affecting events"""
    DEPOSIT = "deposit"              # Cash in
    WITHDRAWAL = "withdrawal"        # Cash out
    TRANSFER_OUT = "transfer_out"    # Sent to another account
    TRANSFER_IN = "transfer_in"      # Received from another account

    @property
    def is_credit(self) -> bool:
        """Check if this kind increases the balance"""
        return self in (TransactionKind.DEPOSIT, TransactionKind.TRANSFER_IN)

    @property
    def is_transfer(self) -> bool:
        """Check if this kind is one leg of a transfer"""
        return self in (TransactionKind.TRANSFER_OUT, TransactionKind.TRANSFER_IN)


@dataclass(frozen=True)
class TransactionRecord:
    """
    One completed ledger event

    Transfer legs carry the account number on the other side. balance_after
    is the owning account's balance once this record was posted.
    """
    kind: TransactionKind
    amount: Decimal
    occurred_at: datetime
    counterpart_account_number: Optional[int] = None
    balance_after: Optional[Decimal] = None

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            raise TypeError("Transaction amount must be a Decimal")

        if self.amount <= Decimal('0'):
            raise ValueError("Transaction amount must be positive")

        if self.kind.is_transfer and self.counterpart_account_number is None:
            raise ValueError(f"{self.kind.value} record requires a counterpart account number")

        if not self.kind.is_transfer and self.counterpart_account_number is not None:
            raise ValueError(f"{self.kind.value} record cannot have a counterpart account")

    @property
    def is_credit(self) -> bool:
        return self.kind.is_credit

    @property
    def is_debit(self) -> bool:
        return not self.kind.is_credit

    @property
    def signed_amount(self) -> Decimal:
        """Amount as it affects the balance: positive for credits, negative for debits"""
        return self.amount if self.is_credit else -self.amount

    @property
    def description(self) -> str:
        """Short human-readable label"""
        if self.kind == TransactionKind.TRANSFER_OUT:
            return f"Transfer to {self.counterpart_account_number}"
        if self.kind == TransactionKind.TRANSFER_IN:
            return f"Transfer from {self.counterpart_account_number}"
        return self.kind.value.capitalize()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for presentation"""
        return {
            "kind": self.kind.value,
            "amount": str(self.amount),
            "occurred_at": self.occurred_at.isoformat(),
            "counterpart_account_number": self.counterpart_account_number,
            "balance_after": str(self.balance_after) if self.balance_after is not None else None,
            "description": self.description,
        }
