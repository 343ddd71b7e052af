"""
Customer Registry Module

BankSystem is the single entry point to the ledger. It creates customers,
enforces unique customer IDs, hands out sequence and account numbers, and
routes deposits, withdrawals and transfers to the right account. It never
changes a balance itself.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import threading

from .accounts import AccountDetails
from .clock import Clock, SystemClock
from .config import LedgerConfig, get_config
from .customers import Customer, validate_customer_id, validate_name
from .errors import CustomerNotFound, DuplicateId, LedgerError
from .logging_config import get_logger, log_action
from .money import AmountLike, from_minor_units
from .transactions import TransactionRecord


@dataclass(frozen=True)
class AccountStatement:
    """Customer identity together with a snapshot of their account"""
    sequence_number: int
    customer_id: str
    name: str
    account: AccountDetails

    @property
    def account_number(self) -> int:
        return self.account.account_number

    @property
    def balance(self) -> Decimal:
        return self.account.balance

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sequence_number": self.sequence_number,
            "customer_id": self.customer_id,
            "name": self.name,
            **self.account.to_dict(),
        }


class BankSystem:
    """
    Registry of customers and the operations callers may run against them
    """

    def __init__(self, clock: Optional[Clock] = None, config: Optional[LedgerConfig] = None):
        self.config = config or get_config()
        self.clock = clock or SystemClock()
        self.logger = get_logger("bank_ledger.bank")

        self._customers: List[Customer] = []
        self._index: Dict[str, Customer] = {}
        self._next_sequence = self.config.first_sequence_number
        self._lock = threading.RLock()

    @property
    def customer_count(self) -> int:
        with self._lock:
            return len(self._customers)

    def create_customer(self, name: str, external_id: str) -> Customer:
        """
        Register a new customer and open their account

        Args:
            name: Display name, each word capitalised ("Mary Ann")
            external_id: Alphanumeric customer ID, unique in this registry

        Returns:
            Created Customer

        Raises:
            InvalidName: If name is not a sequence of capitalised words
            InvalidId: If external_id is not alphanumeric
            DuplicateId: If external_id is already registered
        """
        try:
            validate_name(name)
            validate_customer_id(external_id)

            with self._lock:
                if external_id in self._index:
                    raise DuplicateId(external_id)

                customer = Customer(
                    display_name=name,
                    external_id=external_id,
                    sequence_number=self._next_sequence,
                    clock=self.clock,
                    account_number_offset=self.config.account_number_offset,
                    precision=self.config.amount_precision,
                )
                # Only a successful creation consumes a sequence number
                self._next_sequence += 1
                self._customers.append(customer)
                self._index[external_id] = customer
        except LedgerError as e:
            self._log_rejection("create_customer", external_id, e)
            raise

        log_action(
            self.logger, "info", "Customer created",
            customer_id=external_id, action="create_customer",
            resource=f"account:{customer.account_number}",
            extra={
                "sequence_number": customer.sequence_number,
                "account_number": customer.account_number,
            }
        )
        return customer

    def find_customer(self, external_id: str) -> Optional[Customer]:
        """Exact, case-sensitive lookup; None when absent"""
        with self._lock:
            return self._index.get(external_id)

    def get_customer(self, external_id: str) -> Customer:
        """Lookup that raises CustomerNotFound when absent"""
        customer = self.find_customer(external_id)
        if customer is None:
            raise CustomerNotFound(external_id)
        return customer

    def deposit(self, external_id: str, amount: AmountLike) -> TransactionRecord:
        """Deposit into a customer's account"""
        try:
            record = self.get_customer(external_id).account.deposit(amount)
        except LedgerError as e:
            self._log_rejection("deposit", external_id, e)
            raise

        self._log_posting("deposit", external_id, record)
        return record

    def withdraw(self, external_id: str, amount: AmountLike) -> TransactionRecord:
        """Withdraw from a customer's account"""
        try:
            record = self.get_customer(external_id).account.withdraw(amount)
        except LedgerError as e:
            self._log_rejection("withdraw", external_id, e)
            raise

        self._log_posting("withdraw", external_id, record)
        return record

    def transfer(self, from_id: str, to_id: str, amount: AmountLike) -> TransactionRecord:
        """
        Transfer between two customers' accounts

        Both customers are resolved before any account is touched.

        Returns:
            The TRANSFER_OUT record appended to the sender's account

        Raises:
            CustomerNotFound: If either customer is not registered
            InvalidAmount: If amount is not a positive number
            InsufficientFunds: If the sender's balance is too low
        """
        try:
            sender = self.get_customer(from_id)
            receiver = self.get_customer(to_id)
            record = sender.account.transfer(receiver.account, amount)
        except LedgerError as e:
            self._log_rejection("transfer", from_id, e, extra={"to_customer": to_id})
            raise

        self._log_posting("transfer", from_id, record, extra={"to_customer": to_id})
        return record

    def view_account(self, external_id: str) -> AccountStatement:
        """Customer identity plus account balance and history"""
        customer = self.get_customer(external_id)
        return AccountStatement(
            sequence_number=customer.sequence_number,
            customer_id=customer.external_id,
            name=customer.display_name,
            account=customer.account_details(),
        )

    def list_customers(self) -> List[Customer]:
        """All customers in creation order"""
        with self._lock:
            return list(self._customers)

    def customer_summaries(self) -> List[Dict[str, Any]]:
        """One summary row per customer, in creation order"""
        return [customer.to_dict() for customer in self.list_customers()]

    def verify_integrity(self) -> Dict[str, Any]:
        """
        Check every account's balance against its history

        Returns:
            Dictionary with is_balanced, accounts_checked,
            mismatched_accounts and total_balance
        """
        customers = self.list_customers()
        mismatched = [
            customer.account_number
            for customer in customers
            if not customer.account.verify_balance()
        ]
        total_units = sum(customer.account.balance_units for customer in customers)

        result = {
            "is_balanced": not mismatched,
            "accounts_checked": len(customers),
            "mismatched_accounts": mismatched,
            "total_balance": str(from_minor_units(total_units, self.config.amount_precision)),
        }

        if mismatched:
            log_action(
                self.logger, "error", "Ledger integrity check failed",
                action="verify_integrity", extra=result
            )
        return result

    def _log_posting(self, action: str, external_id: str, record: TransactionRecord,
                     extra: Optional[Dict[str, Any]] = None) -> None:
        log_action(
            self.logger, "info", f"{record.description} posted",
            customer_id=external_id, action=action,
            resource=f"transaction:{record.kind.value}",
            extra={"amount": str(record.amount), **(extra or {})}
        )

    def _log_rejection(self, action: str, external_id: str, error: LedgerError,
                       extra: Optional[Dict[str, Any]] = None) -> None:
        log_action(
            self.logger, "warning", f"{action} rejected: {error}",
            customer_id=external_id if isinstance(external_id, str) else None,
            action=action,
            extra={"error": type(error).__name__, **(extra or {})}
        )
