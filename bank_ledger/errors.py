"""
Ledger Error Hierarchy

Every rule the ledger enforces has its own exception class so callers can
tell a validation problem (re-prompt) from a terminal one (report and stop).
All of them derive from ValueError.
"""

from decimal import Decimal
from typing import Optional


class LedgerError(ValueError):
    """Base exception for all ledger errors"""


class InvalidAmount(LedgerError):
    """Raised when an amount is zero, negative or not a number"""

    def __init__(self, message: str, amount: Optional[object] = None):
        super().__init__(message)
        self.amount = amount


class InsufficientFunds(InvalidAmount):
    """Raised when a debit exceeds the account balance"""

    def __init__(self, amount: Decimal, balance: Decimal, account_number: int):
        super().__init__(
            f"Insufficient funds in account {account_number}: "
            f"requested {amount}, available {balance}",
            amount=amount,
        )
        self.balance = balance
        self.account_number = account_number


class InvalidName(LedgerError):
    """Raised when a customer name is not a sequence of capitalised words"""

    def __init__(self, name: str):
        super().__init__(
            f"Invalid name format: {name!r} (each word starts with a capital letter)"
        )
        self.name = name


class InvalidId(LedgerError):
    """Raised when a customer ID is not ASCII alphanumeric"""

    def __init__(self, external_id: str):
        super().__init__(
            f"Invalid customer ID format: {external_id!r} (alphanumeric only)"
        )
        self.external_id = external_id


class DuplicateId(LedgerError):
    """Raised when a customer ID is already registered"""

    def __init__(self, external_id: str):
        super().__init__(f"Customer ID {external_id} already exists")
        self.external_id = external_id


class CustomerNotFound(LedgerError):
    """Raised when no customer is registered under an ID"""

    def __init__(self, external_id: str):
        super().__init__(f"Customer {external_id} not found")
        self.external_id = external_id
