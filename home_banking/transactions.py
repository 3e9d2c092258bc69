"""
Transaction Records

Immutable log entries for balance-changing events. Each record carries the
owning account's balance immediately after the event.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum

from .amounts import to_amount, amount_to_text

# Human readable local time, e.g. "Mon Oct 19 14:03:12 2026"
TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %Y"

FIELD_SEPARATOR = ","
TRANSACTION_FIELD_COUNT = 5


class TransactionKind(Enum):
    """Direction of a balance change"""
    CREDIT = "CREDIT"  # Money in
    DEBIT = "DEBIT"    # Money out


def _now() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


@dataclass(frozen=True)
class Transaction:
    """
    One balance-affecting event on an account

    Callers (Account) guarantee that amount is positive and balance_after is
    the account balance at insertion; nothing is validated here.
    """
    kind: TransactionKind
    amount: Decimal
    description: str
    balance_after: Decimal
    timestamp: str = field(default_factory=_now)

    @property
    def is_credit(self) -> bool:
        return self.kind == TransactionKind.CREDIT

    @property
    def is_debit(self) -> bool:
        return self.kind == TransactionKind.DEBIT

    def to_line(self) -> str:
        """Serialize as timestamp,kind,amount,description,balanceAfter"""
        return FIELD_SEPARATOR.join([
            self.timestamp,
            self.kind.value,
            amount_to_text(self.amount),
            self.description,
            amount_to_text(self.balance_after),
        ])

    @classmethod
    def from_line(cls, line: str) -> 'Transaction':
        """
        Parse a stored transaction line

        Raises:
            ValueError: If the line does not hold exactly five valid fields
        """
        fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
        if len(fields) != TRANSACTION_FIELD_COUNT:
            raise ValueError(
                f"Expected {TRANSACTION_FIELD_COUNT} fields, got {len(fields)}"
            )

        timestamp, kind, amount, description, balance_after = fields
        return cls(
            kind=TransactionKind(kind),
            amount=to_amount(amount),
            description=description,
            balance_after=to_amount(balance_after),
            timestamp=timestamp,
        )
