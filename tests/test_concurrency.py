"""
Test suite for concurrent access

Tests that parallel deposits, withdrawals, transfers and customer creation
keep balances exact and never deadlock.
"""

import threading

import pytest
from decimal import Decimal

from bank_ledger.bank import BankSystem
from bank_ledger.clock import ManualClock
from bank_ledger.errors import DuplicateId, InsufficientFunds


JOIN_TIMEOUT = 30


def run_threads(target, count):
    """Start count threads on target behind a barrier and wait for all of them"""
    barrier = threading.Barrier(count)
    errors = []

    def worker(index):
        barrier.wait()
        try:
            target(index)
        except Exception as e:  # collected and asserted on by the caller
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(JOIN_TIMEOUT)

    assert not any(thread.is_alive() for thread in threads), "threads did not finish"
    return errors


class TestConcurrentPostings:
    """Test parallel mutations of the same accounts"""

    def setup_method(self):
        """Set up test fixtures"""
        self.bank = BankSystem(clock=ManualClock())
        self.john = self.bank.create_customer("John Smith", "john1")
        self.mary = self.bank.create_customer("Mary Ann", "mary2")

    def test_parallel_deposits_sum_exactly(self):
        def deposit_many(index):
            for _ in range(100):
                self.bank.deposit("john1", Decimal('0.01'))

        errors = run_threads(deposit_many, 8)

        assert errors == []
        assert self.john.account.balance == Decimal('8.00')
        assert self.john.account.transaction_count == 800
        assert self.john.account.verify_balance()

    def test_opposing_transfers_do_not_deadlock(self):
        """Test transfers in both directions at once complete and conserve money"""
        self.bank.deposit("john1", Decimal('1000'))
        self.bank.deposit("mary2", Decimal('1000'))

        def shuffle(index):
            source, target = ("john1", "mary2") if index % 2 == 0 else ("mary2", "john1")
            for _ in range(200):
                self.bank.transfer(source, target, Decimal('1'))

        errors = run_threads(shuffle, 6)

        assert errors == []
        total = self.john.account.balance + self.mary.account.balance
        assert total == Decimal('2000')
        assert self.bank.verify_integrity()["is_balanced"]

    def test_overdraw_race(self):
        """Test exactly as many withdrawals succeed as the balance allows"""
        self.bank.deposit("john1", Decimal('100'))

        def withdraw_ten(index):
            self.bank.withdraw("john1", Decimal('10'))

        errors = run_threads(withdraw_ten, 25)

        assert len(errors) == 15
        assert all(isinstance(e, InsufficientFunds) for e in errors)
        assert self.john.account.balance == Decimal('0')
        assert self.john.account.transaction_count == 11


class TestConcurrentRegistration:
    """Test parallel customer creation"""

    def setup_method(self):
        """Set up test fixtures"""
        self.bank = BankSystem(clock=ManualClock())

    def test_duplicate_race_has_one_winner(self):
        def register(index):
            self.bank.create_customer("John", "john1")

        errors = run_threads(register, 10)

        assert len(errors) == 9
        assert all(isinstance(e, DuplicateId) for e in errors)
        assert self.bank.customer_count == 1
        assert self.bank.get_customer("john1").sequence_number == 1

    @pytest.mark.parametrize("count", [5, 20])
    def test_sequence_numbers_have_no_gaps(self, count):
        def register(index):
            self.bank.create_customer("Customer", f"cust{index}")

        errors = run_threads(register, count)

        assert errors == []
        numbers = sorted(c.sequence_number for c in self.bank.list_customers())
        assert numbers == list(range(1, count + 1))
        accounts = sorted(c.account_number for c in self.bank.list_customers())
        assert accounts == [1000 + n for n in numbers]
