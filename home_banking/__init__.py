"""
Home Banking Ledger

A small single-user banking ledger: accounts with password login, deposits,
withdrawals, transfers and transaction history, persisted to a flat text file.
All monetary values use Decimal.
"""

__version__ = "1.0.0"
