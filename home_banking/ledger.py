"""
Ledger Module

The Ledger owns every account, the account number counter and the backing
store. Each mutating operation updates memory and then rewrites the whole
store under a single lock. A failed save does not undo the in-memory change;
memory and disk stay apart until the next successful save.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple
import threading

from .accounts import Account
from .amounts import MAX_BALANCE, ZERO, to_amount, format_amount
from .config import BankingConfig
from .exceptions import PersistenceError
from .serialization import dump_ledger, parse_ledger
from .storage import StorageInterface, FlatFileStorage
from .transactions import Transaction
from .logging_config import get_logger, log_action

DEFAULT_FIRST_ACCOUNT_NUMBER = 1001

SAVE_FAILED_SUFFIX = " (warning: unable to save accounts)"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a ledger operation, with a message for the user"""
    success: bool
    message: str
    account_number: Optional[int] = None
    persisted: bool = True

    def __bool__(self) -> bool:
        return self.success


class Ledger:
    """
    Aggregate owner of accounts, persistence and transfer coordination

    State is restored from storage on construction. Use as a context manager
    (or call close()) to persist once more on teardown.
    """

    def __init__(
        self,
        storage: StorageInterface,
        first_account_number: int = DEFAULT_FIRST_ACCOUNT_NUMBER
    ):
        self.storage = storage
        self.first_account_number = first_account_number
        self._accounts: Dict[int, Account] = {}
        self._next_account_number = first_account_number
        self._lock = threading.RLock()
        self.logger = get_logger("home_banking.ledger")
        self._modified = False

        self.loaded = self.restore()

    @classmethod
    def open(cls, config: BankingConfig) -> 'Ledger':
        """Create a ledger backed by the configured data file"""
        return cls(
            FlatFileStorage(config.data_file),
            first_account_number=config.first_account_number
        )

    def __enter__(self) -> 'Ledger':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> bool:
        """
        Final persist

        Skipped when nothing was loaded or changed, so an unreadable store is
        not replaced by an empty ledger.
        """
        if not (self.loaded or self._modified):
            return True
        return self.save()

    @property
    def next_account_number(self) -> int:
        return self._next_account_number

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_number: int) -> bool:
        return account_number in self._accounts

    def accounts(self) -> Iterator[Account]:
        """Accounts in ascending account number order"""
        for account_number in sorted(self._accounts):
            yield self._accounts[account_number]

    def restore(self) -> bool:
        """
        Load state from storage

        Returns:
            True if stored state was loaded; False if the store was missing or
            unreadable, in which case the ledger starts empty
        """
        with self._lock:
            self._accounts = {}
            self._next_account_number = self.first_account_number

            try:
                data = self.storage.read()
            except PersistenceError as e:
                self.logger.error(f"Starting with an empty ledger: {e}")
                return False

            if data is None:
                self.logger.info("No existing account data found")
                return False

            try:
                snapshot = parse_ledger(data)
            except ValueError as e:
                self.logger.error(f"Starting with an empty ledger, stored data is corrupt: {e}")
                return False

            self._accounts = snapshot.accounts
            self._next_account_number = max(
                snapshot.next_account_number, self.first_account_number
            )
            self.logger.info(f"Loaded {len(self._accounts)} accounts")
            return True

    def save(self) -> bool:
        """
        Overwrite the backing store with the full ledger state

        Returns:
            True on success; a failure is logged and leaves memory untouched
        """
        with self._lock:
            data = dump_ledger(self._next_account_number, self._accounts.values())
            try:
                self.storage.write(data)
            except PersistenceError as e:
                self.logger.error(f"Unable to save accounts: {e}")
                return False
            return True

    def create_account(self, name: str, password: str, initial_deposit: Decimal) -> OperationResult:
        """
        Open a new account

        Args:
            name: Account holder name
            password: Login password
            initial_deposit: Opening balance, must not be negative

        Returns:
            OperationResult carrying the new account number on success
        """
        try:
            initial_deposit = to_amount(initial_deposit)
        except ValueError:
            return OperationResult(False, "Invalid amount")

        if initial_deposit > MAX_BALANCE:
            return OperationResult(False, "Invalid amount")
        if initial_deposit < ZERO:
            return OperationResult(False, "Initial deposit cannot be negative")

        with self._lock:
            account_number = self._next_account_number
            self._next_account_number += 1
            self._accounts[account_number] = Account(
                account_number=account_number,
                name=name,
                password=password,
                balance=initial_deposit
            )

            log_action(
                self.logger, "info", "Account created",
                action="create_account", resource=f"account:{account_number}",
                extra={"initial_deposit": str(initial_deposit)}
            )
            return self._saved(OperationResult(
                True, "Account created successfully!", account_number=account_number
            ))

    def login(self, account_number: int, password: str) -> bool:
        """True iff the account exists and the password matches"""
        account = self.get_account(account_number)
        return account is not None and account.check_password(password)

    def get_account(self, account_number: int) -> Optional[Account]:
        """Get account by number; the returned account is live, not a copy"""
        return self._accounts.get(account_number)

    def history(self, account_number: int) -> Tuple[Transaction, ...]:
        """Transactions of an account, oldest first"""
        account = self.get_account(account_number)
        if account is None:
            return ()
        return account.list_history()

    def deposit(self, account_number: int, amount: Decimal) -> OperationResult:
        """Deposit into an account and persist"""
        with self._lock:
            account = self.get_account(account_number)
            if account is None:
                return OperationResult(False, "Invalid account number")

            if not account.deposit(amount):
                return OperationResult(False, "Invalid amount!")

            log_action(
                self.logger, "info", "Deposit posted",
                action="deposit", resource=f"account:{account_number}",
                extra={"amount": str(to_amount(amount)), "balance": str(account.balance)}
            )
            return self._saved(OperationResult(True, "Deposit successful!", account_number))

    def withdraw(self, account_number: int, amount: Decimal) -> OperationResult:
        """Withdraw from an account and persist"""
        with self._lock:
            account = self.get_account(account_number)
            if account is None:
                return OperationResult(False, "Invalid account number")

            if not account.withdraw(amount):
                return OperationResult(False, "Invalid amount or insufficient balance!")

            log_action(
                self.logger, "info", "Withdrawal posted",
                action="withdraw", resource=f"account:{account_number}",
                extra={"amount": str(to_amount(amount)), "balance": str(account.balance)}
            )
            return self._saved(OperationResult(True, "Withdrawal successful!", account_number))

    def transfer(self, from_account_number: int, to_account_number: int, amount: Decimal) -> OperationResult:
        """
        Move funds between two accounts

        Both balances are changed first; each account then records one
        transfer leg against its own post-transfer balance.
        """
        with self._lock:
            source = self.get_account(from_account_number)
            destination = self.get_account(to_account_number)

            if source is None or destination is None:
                return OperationResult(False, "Invalid account number(s)")

            try:
                amount = to_amount(amount)
            except ValueError:
                return OperationResult(False, "Invalid amount")
            if amount <= ZERO:
                return OperationResult(False, "Invalid amount")

            if source.balance < amount:
                return OperationResult(False, "Insufficient balance")

            # debit re-validates the balance checked above
            if not source.debit(amount):
                return OperationResult(False, "Transfer failed")
            if not destination.credit(amount):
                source.credit(amount)
                return OperationResult(False, "Transfer failed")

            source.record_transfer_leg(False, amount, to_account_number)
            destination.record_transfer_leg(True, amount, from_account_number)

            log_action(
                self.logger, "info", f"Transfer of {format_amount(amount)} posted",
                action="transfer", resource=f"account:{from_account_number}",
                extra={
                    "from_account": from_account_number,
                    "to_account": to_account_number,
                    "amount": str(amount)
                }
            )
            return self._saved(OperationResult(True, "Transfer successful", from_account_number))

    def _saved(self, result: OperationResult) -> OperationResult:
        self._modified = True
        if self.save():
            return result
        return OperationResult(
            result.success,
            result.message + SAVE_FAILED_SUFFIX,
            account_number=result.account_number,
            persisted=False
        )
