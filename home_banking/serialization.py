"""
Backing Store Format

Plain text, comma separated, one logical record per line group:

    <nextAccountNumber>
    <accountCount>
    <accountNumber>,<name>,<password>,<balance>
    <transactionCountForThisAccount>
    <timestamp>,<kind>,<amount>,<description>,<balanceAfter>
    ...

Fields are not escaped. A comma inside a name, password or description
splits the line into extra fields; such records are skipped on load.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List

from .accounts import Account
from .amounts import amount_to_text, to_amount
from .transactions import FIELD_SEPARATOR, Transaction
from .logging_config import get_logger

ACCOUNT_FIELD_COUNT = 4

logger = get_logger("home_banking.serialization")


@dataclass
class LedgerSnapshot:
    """Everything the backing store holds"""
    next_account_number: int
    accounts: Dict[int, Account] = field(default_factory=dict)


def dump_ledger(next_account_number: int, accounts: Iterable[Account]) -> str:
    """
    Render the full ledger state

    Accounts are written in ascending account number order.
    """
    ordered = sorted(accounts, key=lambda account: account.account_number)
    lines: List[str] = [str(next_account_number), str(len(ordered))]

    for account in ordered:
        _warn_on_separator(account, "name", account.name)
        _warn_on_separator(account, "password", account.password)
        lines.append(FIELD_SEPARATOR.join([
            str(account.account_number),
            account.name,
            account.password,
            amount_to_text(account.balance),
        ]))

        history = account.list_history()
        lines.append(str(len(history)))
        for transaction in history:
            _warn_on_separator(account, "description", transaction.description)
            lines.append(transaction.to_line())

    return "\n".join(lines) + "\n"


def parse_ledger(text: str) -> LedgerSnapshot:
    """
    Parse backing store text

    Malformed account or transaction lines are skipped.

    Raises:
        ValueError: If a counter line is unparseable or the text is truncated
    """
    lines = _lines(text)
    next_account_number = int(_next_line(lines))
    account_count = int(_next_line(lines))

    snapshot = LedgerSnapshot(next_account_number=next_account_number)

    for _ in range(account_count):
        account_line = _next_line(lines)
        transaction_count = int(_next_line(lines))
        transaction_lines = [_next_line(lines) for _ in range(transaction_count)]

        try:
            account = _parse_account(account_line)
        except ValueError as e:
            logger.warning(f"Skipping malformed account record: {e}")
            continue

        for transaction_line in transaction_lines:
            try:
                account.restore_transaction(Transaction.from_line(transaction_line))
            except ValueError as e:
                logger.warning(
                    f"Skipping malformed transaction record for account "
                    f"{account.account_number}: {e}"
                )

        snapshot.accounts[account.account_number] = account

    # Keep the counter ahead of every stored account number
    if snapshot.accounts:
        snapshot.next_account_number = max(
            snapshot.next_account_number, max(snapshot.accounts) + 1
        )

    return snapshot


def _parse_account(line: str) -> Account:
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != ACCOUNT_FIELD_COUNT:
        raise ValueError(f"Expected {ACCOUNT_FIELD_COUNT} fields, got {len(fields)}")

    account_number, name, password, balance = fields
    if int(account_number) <= 0:
        raise ValueError(f"Account number must be positive, got {account_number}")

    return Account(
        account_number=int(account_number),
        name=name,
        password=password,
        balance=to_amount(balance),
    )


def _lines(text: str) -> Iterator[str]:
    return iter(text.splitlines())


def _next_line(lines: Iterator[str]) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise ValueError("Unexpected end of ledger data")


def _warn_on_separator(account: Account, field_name: str, value: str) -> None:
    if FIELD_SEPARATOR in value:
        logger.warning(
            f"Account {account.account_number} {field_name} contains "
            f"'{FIELD_SEPARATOR}'; the record will not reload cleanly"
        )
