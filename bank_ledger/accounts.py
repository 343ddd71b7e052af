"""
Account Module

An account owns a balance and the ordered history of records that produced
it. Deposits, withdrawals and transfers are the only ways to change the
balance, and each successful one appends exactly one record per account it
touches, so the balance always equals the net of the history.

Each account guards its state with its own lock. Transfers take both locks in
ascending account-number order so two opposing transfers cannot deadlock.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple
from contextlib import contextmanager
import threading

from .clock import Clock, SystemClock
from .errors import InvalidAmount, InsufficientFunds
from .logging_config import get_logger, log_action
from .money import AmountLike, DEFAULT_PRECISION, parse_amount, to_minor_units, from_minor_units
from .transactions import TransactionKind, TransactionRecord


@dataclass(frozen=True)
class AccountDetails:
    """Read-only snapshot of an account"""
    account_number: int
    balance: Decimal
    transactions: Tuple[TransactionRecord, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "account_number": self.account_number,
            "balance": str(self.balance),
            "transactions": [record.to_dict() for record in self.transactions],
        }


class Account:
    """
    Single-currency deposit account with an append-only history
    """

    def __init__(
        self,
        account_number: int,
        clock: Optional[Clock] = None,
        precision: int = DEFAULT_PRECISION
    ):
        self._account_number = account_number
        self._clock = clock or SystemClock()
        self._precision = precision

        # Balance held in minor units; never negative
        self._balance_units = 0
        self._transactions: List[TransactionRecord] = []
        self._lock = threading.RLock()
        self.logger = get_logger("bank_ledger.accounts")

    @property
    def account_number(self) -> int:
        return self._account_number

    @property
    def balance(self) -> Decimal:
        """Current balance"""
        with self._lock:
            return from_minor_units(self._balance_units, self._precision)

    @property
    def balance_units(self) -> int:
        """Current balance in minor units"""
        with self._lock:
            return self._balance_units

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def transaction_count(self) -> int:
        with self._lock:
            return len(self._transactions)

    def deposit(self, amount: AmountLike) -> TransactionRecord:
        """
        Credit the account

        Args:
            amount: Positive amount to add

        Returns:
            The DEPOSIT record appended to the history

        Raises:
            InvalidAmount: If amount is not a positive number
        """
        value = self._validate_amount(amount)

        with self._lock:
            self._balance_units += to_minor_units(value, self._precision)
            return self._append(TransactionKind.DEPOSIT, value)

    def withdraw(self, amount: AmountLike) -> TransactionRecord:
        """
        Debit the account

        Args:
            amount: Positive amount to remove

        Returns:
            The WITHDRAWAL record appended to the history

        Raises:
            InvalidAmount: If amount is not a positive number
            InsufficientFunds: If amount exceeds the balance
        """
        value = self._validate_amount(amount)

        with self._lock:
            units = self._check_funds(value)
            self._balance_units -= units
            return self._append(TransactionKind.WITHDRAWAL, value)

    def transfer(self, target: 'Account', amount: AmountLike) -> TransactionRecord:
        """
        Move funds from this account to another

        Both accounts are locked for the whole operation. Funds are checked
        before either balance changes, so a failed transfer leaves both
        accounts exactly as they were.

        Args:
            target: Receiving account
            amount: Positive amount to move

        Returns:
            The TRANSFER_OUT record appended to this account

        Raises:
            InvalidAmount: If amount is not a positive number
            InsufficientFunds: If amount exceeds this account's balance
        """
        if not isinstance(target, Account):
            raise TypeError("Transfer target must be an Account")

        if target.precision != self._precision:
            raise ValueError(
                f"Cannot transfer between accounts with precision {self._precision} "
                f"and {target.precision}"
            )

        value = self._validate_amount(amount)

        with self._hold_both(target):
            units = self._check_funds(value)
            self._balance_units -= units
            target._balance_units += units

            outgoing = self._append(
                TransactionKind.TRANSFER_OUT, value, target.account_number
            )
            target._append(TransactionKind.TRANSFER_IN, value, self.account_number)
            return outgoing

    def show_details(self) -> AccountDetails:
        """Snapshot of balance and full history"""
        with self._lock:
            return AccountDetails(
                account_number=self._account_number,
                balance=from_minor_units(self._balance_units, self._precision),
                transactions=tuple(self._transactions),
            )

    def show_transactions(self) -> List[TransactionRecord]:
        """Copy of the history in chronological order"""
        with self._lock:
            return list(self._transactions)

    def verify_balance(self) -> bool:
        """Check that the balance equals the net effect of the history"""
        with self._lock:
            net_units = sum(
                to_minor_units(record.signed_amount, self._precision)
                for record in self._transactions
            )
            return net_units == self._balance_units and self._balance_units >= 0

    def _validate_amount(self, amount: AmountLike) -> Decimal:
        value = parse_amount(amount, self._precision)
        if value <= Decimal('0'):
            raise InvalidAmount(f"Amount must be positive, got {value}", amount=value)
        return value

    def _check_funds(self, value: Decimal) -> int:
        # Caller holds the lock
        units = to_minor_units(value, self._precision)
        if units > self._balance_units:
            raise InsufficientFunds(
                amount=value,
                balance=from_minor_units(self._balance_units, self._precision),
                account_number=self._account_number,
            )
        return units

    def _append(
        self,
        kind: TransactionKind,
        value: Decimal,
        counterpart: Optional[int] = None
    ) -> TransactionRecord:
        # Caller holds the lock
        record = TransactionRecord(
            kind=kind,
            amount=value,
            occurred_at=self._clock.now(),
            counterpart_account_number=counterpart,
            balance_after=from_minor_units(self._balance_units, self._precision),
        )
        self._transactions.append(record)

        log_action(
            self.logger, "debug", f"Posted {kind.value} to account {self._account_number}",
            action=kind.value, resource=f"account:{self._account_number}",
            extra={"amount": str(value), "counterpart": counterpart}
        )
        return record

    @contextmanager
    def _hold_both(self, other: 'Account') -> Iterator[None]:
        """Lock two accounts in ascending account-number order"""
        first, second = sorted(
            (self, other), key=lambda account: (account.account_number, id(account))
        )
        with first._lock:
            with second._lock:
                yield

    def __repr__(self) -> str:
        return f"<Account {self._account_number} balance={self.balance}>"
