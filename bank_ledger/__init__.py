"""
Retail Banking Ledger

An in-memory ledger of customers, their single account, and the ordered
history of deposits, withdrawals and transfers. Balances are kept in integer
minor units so accumulation never drifts.
"""

__version__ = "1.0.0"
