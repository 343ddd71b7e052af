"""
Customer Module

A customer is an immutable identity (display name, external ID, sequence
number) that owns exactly one account for its whole lifetime. The account is
created together with the customer and its number is derived from the
sequence number.
"""

from typing import Any, Dict, Optional
import re

from .accounts import Account, AccountDetails
from .clock import Clock
from .errors import InvalidId, InvalidName
from .money import DEFAULT_PRECISION

NAME_PATTERN = re.compile(r'([A-Z][a-z]*)( [A-Z][a-z]*)*')
CUSTOMER_ID_PATTERN = re.compile(r'[A-Za-z0-9]+')

DEFAULT_ACCOUNT_NUMBER_OFFSET = 1000


def is_valid_name(name: str) -> bool:
    """Each space-separated word is one capital letter followed by lowercase letters"""
    return isinstance(name, str) and NAME_PATTERN.fullmatch(name) is not None


def is_valid_customer_id(external_id: str) -> bool:
    """Customer IDs are non-empty ASCII letters and digits"""
    return isinstance(external_id, str) and CUSTOMER_ID_PATTERN.fullmatch(external_id) is not None


def validate_name(name: str) -> str:
    if not is_valid_name(name):
        raise InvalidName(name)
    return name


def validate_customer_id(external_id: str) -> str:
    if not is_valid_customer_id(external_id):
        raise InvalidId(external_id)
    return external_id


def derive_account_number(sequence_number: int,
                          offset: int = DEFAULT_ACCOUNT_NUMBER_OFFSET) -> int:
    """Account numbers follow the customer sequence: 1 -> 1001, 2 -> 1002, ..."""
    return sequence_number + offset


class Customer:
    """
    Account holder

    Identity fields are read-only. The owned account is reachable through
    ``account`` for mutation and ``account_details()`` for a read-only view.
    """

    def __init__(
        self,
        display_name: str,
        external_id: str,
        sequence_number: int,
        clock: Optional[Clock] = None,
        account_number_offset: int = DEFAULT_ACCOUNT_NUMBER_OFFSET,
        precision: int = DEFAULT_PRECISION
    ):
        self._display_name = validate_name(display_name)
        self._external_id = validate_customer_id(external_id)
        self._sequence_number = sequence_number
        self._account = Account(
            derive_account_number(sequence_number, account_number_offset),
            clock=clock,
            precision=precision,
        )

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def external_id(self) -> str:
        return self._external_id

    @property
    def sequence_number(self) -> int:
        return self._sequence_number

    @property
    def account_number(self) -> int:
        return self._account.account_number

    @property
    def account(self) -> Account:
        """The customer's account, for operations that change it"""
        return self._account

    def account_details(self) -> AccountDetails:
        """Read-only snapshot of the customer's account"""
        return self._account.show_details()

    def to_dict(self) -> Dict[str, Any]:
        """Summary row: sequence number, ID, name, account number, balance"""
        return {
            "sequence_number": self._sequence_number,
            "customer_id": self._external_id,
            "name": self._display_name,
            "account_number": self.account_number,
            "balance": str(self._account.balance),
        }

    def __repr__(self) -> str:
        return f"<Customer {self._external_id} {self._display_name!r} #{self._sequence_number}>"
