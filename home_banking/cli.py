"""
Interactive Menu

Thin text front end over the Ledger. Each menu option reads raw input,
calls one ledger operation and prints its result.
"""

from decimal import Decimal
from typing import Callable, Optional

from .amounts import decimal_from_string, format_amount
from .ledger import Ledger

RULE_WIDTH = 50

LOGGED_OUT_MENU = (
    "\n=== Banking System ===\n"
    "1. Create Account\n"
    "2. Login\n"
    "3. Exit"
)

LOGGED_IN_MENU = (
    "\n=== Account Menu ===\n"
    "1. Check Balance\n"
    "2. Deposit\n"
    "3. Withdraw\n"
    "4. Transfer Money\n"
    "5. Transaction History\n"
    "6. Logout"
)


class InvalidInput(Exception):
    """Raised when typed input cannot be parsed"""
    pass


class BankingShell:
    """
    Two-state menu loop: logged out and logged in

    Input and output functions are injectable so the loop can be driven
    from tests.
    """

    def __init__(
        self,
        ledger: Ledger,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print
    ):
        self.ledger = ledger
        self.input = input_func
        self.output = output_func
        self.current_account: Optional[int] = None

    def run(self) -> int:
        """Loop until the user exits; returns the process exit code"""
        if self.ledger.loaded:
            self.output("Accounts loaded successfully!")
        else:
            self.output("No existing account data found. Starting fresh!")

        try:
            while True:
                if self.current_account is None:
                    if not self._logged_out_step():
                        break
                else:
                    self._logged_in_step()
        except EOFError:
            self.output("")

        self.output("Thank you for using our banking system!")
        return 0

    def _logged_out_step(self) -> bool:
        self.output(LOGGED_OUT_MENU)
        choice = self._read_int("Enter choice (1-3): ")

        if choice == 1:
            self.create_account()
        elif choice == 2:
            self.login()
        elif choice == 3:
            return False
        elif choice is not None:
            self.output("Invalid choice!")
        return True

    def _logged_in_step(self) -> None:
        self.output(LOGGED_IN_MENU)
        choice = self._read_int("Enter choice (1-6): ")

        actions = {
            1: self.show_balance,
            2: self.deposit,
            3: self.withdraw,
            4: self.transfer,
            5: self.show_history,
            6: self.logout,
        }
        action = actions.get(choice)
        if action:
            action()
        elif choice is not None:
            self.output("Invalid choice!")

    def create_account(self) -> None:
        name = self.input("Enter your name: ")
        password = self.input("Create password: ")
        initial_deposit = self._read_amount("Enter initial deposit amount: ")
        if initial_deposit is None:
            return

        result = self.ledger.create_account(name, password, initial_deposit)
        if not result:
            self.output(f"Error: {result.message}")
            return

        self.output("\n=== Account Created Successfully ===")
        self.output("Your account details:")
        self.output(f"Account Number: {result.account_number}")
        self.output(f"Name: {name}")
        self.output(f"Initial Balance: {format_amount(initial_deposit)}")
        self.output("\nPLEASE SAVE YOUR ACCOUNT NUMBER FOR FUTURE LOGIN!")
        if not result.persisted:
            self.output("Warning: unable to save accounts!")
        self.output("=" * 40)

    def login(self) -> None:
        account_number = self._read_int("Enter account number: ")
        if account_number is None:
            return
        password = self.input("Enter password: ")

        if self.ledger.login(account_number, password):
            self.current_account = account_number
            self.output("Login successful!")
        else:
            self.output("Invalid credentials!")

    def logout(self) -> None:
        self.current_account = None
        self.output("Logged out successfully!")

    def show_balance(self) -> None:
        account = self.ledger.get_account(self.current_account)
        self.output(f"Current balance: {format_amount(account.balance)}")

    def deposit(self) -> None:
        amount = self._read_amount("Enter amount to deposit: ")
        if amount is not None:
            self.output(self.ledger.deposit(self.current_account, amount).message)

    def withdraw(self) -> None:
        amount = self._read_amount("Enter amount to withdraw: ")
        if amount is not None:
            self.output(self.ledger.withdraw(self.current_account, amount).message)

    def transfer(self) -> None:
        to_account = self._read_int("Enter recipient's account number: ")
        if to_account is None:
            return
        amount = self._read_amount("Enter amount to transfer: ")
        if amount is None:
            return

        result = self.ledger.transfer(self.current_account, to_account, amount)
        self.output(result.message)

    def show_history(self) -> None:
        self.output(f"\n=== Transaction History for Account {self.current_account} ===")
        history = self.ledger.history(self.current_account)
        if not history:
            self.output("No transactions yet.")
            return

        for transaction in history:
            self.output(f"Date: {transaction.timestamp}")
            self.output(f"Type: {transaction.kind.value}")
            self.output(f"Amount: {format_amount(transaction.amount)}")
            self.output(f"Description: {transaction.description}")
            self.output(f"Balance after: {format_amount(transaction.balance_after)}")
            self.output("-" * RULE_WIDTH)

    def _read_int(self, prompt: str) -> Optional[int]:
        try:
            return _parse_int(self.input(prompt))
        except InvalidInput:
            self.output("Invalid input!")
            return None

    def _read_amount(self, prompt: str) -> Optional[Decimal]:
        try:
            return _parse_amount(self.input(prompt))
        except InvalidInput:
            self.output("Invalid input!")
            return None


def _parse_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise InvalidInput(text)


def _parse_amount(text: str) -> Decimal:
    try:
        return decimal_from_string(text)
    except ValueError:
        raise InvalidInput(text)
