"""
Account Module

A customer account owning its balance and an append-only transaction history.
Balance changes go through deposit/withdraw, or through credit/debit plus an
explicit transfer-leg record when the Ledger coordinates a transfer.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .amounts import MAX_BALANCE, ZERO, to_amount
from .transactions import Transaction, TransactionKind


@dataclass
class Account:
    """
    Bank account with balance and chronological transaction history

    The password is stored and compared verbatim.
    """
    account_number: int
    name: str
    password: str = field(repr=False)
    balance: Decimal = ZERO
    _history: List[Transaction] = field(default_factory=list, repr=False)

    def __post_init__(self):
        self.balance = to_amount(self.balance)
        if self.balance < ZERO:
            raise ValueError("Account balance cannot be negative")

    def check_password(self, candidate: str) -> bool:
        """Check a login password"""
        return self.password == candidate

    def credit(self, amount: Decimal) -> bool:
        """Increase balance without recording a transaction"""
        amount = _valid_amount(amount)
        if amount is None or self.balance + amount > MAX_BALANCE:
            return False

        self.balance += amount
        return True

    def debit(self, amount: Decimal) -> bool:
        """Decrease balance without recording a transaction"""
        amount = _valid_amount(amount)
        if amount is None or amount > self.balance:
            return False

        self.balance -= amount
        return True

    def deposit(self, amount: Decimal) -> bool:
        """
        Deposit funds

        Returns:
            True if the amount was positive and was credited; False for
            non-positive, float or unconvertible amounts
        """
        if not self.credit(amount):
            return False

        self._append(TransactionKind.CREDIT, amount, "Deposit")
        return True

    def withdraw(self, amount: Decimal) -> bool:
        """
        Withdraw funds

        Returns:
            True if the amount was positive, covered by the balance and debited
        """
        if not self.debit(amount):
            return False

        self._append(TransactionKind.DEBIT, amount, "Withdrawal")
        return True

    def record_transfer_leg(self, is_credit: bool, amount: Decimal, counterparty: int) -> Transaction:
        """
        Record one side of a transfer against the current balance

        The balance change must already have been applied with credit/debit.
        """
        if is_credit:
            return self._append(TransactionKind.CREDIT, amount, f"Transfer from {counterparty}")
        return self._append(TransactionKind.DEBIT, amount, f"Transfer to {counterparty}")

    def restore_transaction(self, transaction: Transaction) -> None:
        """Append a stored record while loading; balance is not touched"""
        self._history.append(transaction)

    def list_history(self) -> Tuple[Transaction, ...]:
        """All transactions, oldest first"""
        return tuple(self._history)

    @property
    def opening_balance(self) -> Decimal:
        """Balance before any recorded transaction"""
        credits = sum((t.amount for t in self._history if t.is_credit), ZERO)
        debits = sum((t.amount for t in self._history if t.is_debit), ZERO)
        return self.balance - credits + debits

    def _append(self, kind: TransactionKind, amount: Decimal, description: str) -> Transaction:
        transaction = Transaction(
            kind=kind,
            amount=to_amount(amount),
            description=description,
            balance_after=self.balance,
        )
        self._history.append(transaction)
        return transaction


def _valid_amount(amount) -> Optional[Decimal]:
    """Positive amount rounded to cents, or None"""
    try:
        amount = to_amount(amount)
    except ValueError:
        return None
    return amount if amount > ZERO else None
