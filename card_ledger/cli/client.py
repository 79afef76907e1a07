"""
Interactive banking client.
Menu loop over the ledger engine; renders errors and keeps the session alive.
"""

from card_ledger.cli.input_reader import InputReader
from card_ledger.core.exceptions import DomainError, LedgerError, StorageError
from card_ledger.core.logging import get_logger
from card_ledger.schemas.account import Account
from card_ledger.services.ledger import LedgerEngine

logger = get_logger(__name__)

MAIN_MENU = """=== Main menu ===
1. Create an account
2. Log into account
0. Exit"""

ACCOUNT_MENU = """=== Account menu ===
1. Balance
2. Add income
3. Withdraw
4. Do transfer
5. Close account
6. Log out
0. Exit"""


class ExitRequested(Exception):
    """Raised inside the account menu when the user picks Exit."""


class BankingClient:
    """
    Console session: one logged-in account at a time, one operation at a time.
    """

    def __init__(self, engine: LedgerEngine, reader: InputReader):
        self.engine = engine
        self.reader = reader

    def run(self) -> None:
        """Main loop. Returns when the user exits or input runs out."""
        try:
            while True:
                choice = self._menu(MAIN_MENU)
                if choice == "1":
                    self.create_account_flow()
                elif choice == "2":
                    self.login_flow()
                elif choice == "0":
                    break
                else:
                    self.reader.say("Invalid option.")
        except (EOFError, ExitRequested):
            pass
        self.reader.say("Bye!")

    def _menu(self, text: str) -> str:
        self.reader.say(text)
        return self.reader.read_line("Enter your choice:").strip()

    def create_account_flow(self) -> None:
        try:
            account = self.engine.create_account()
        except LedgerError as e:
            self.reader.say(f"Failed to create account: {e}")
            return
        self.reader.say("Your card has been created")
        self.reader.say("Your card number:")
        self.reader.say(account.card_number)
        self.reader.say("Your card PIN:")
        self.reader.say(account.pin)

    def login_flow(self) -> None:
        card_number = self.reader.read_card_number("Enter your card number:")
        if card_number is None:
            return
        pin = self.reader.read_pin("Enter your PIN:")
        if pin is None:
            return

        try:
            account = self.engine.authenticate(card_number, pin)
        except DomainError as e:
            self.reader.say(f"Login failed: {e}")
            return
        except StorageError as e:
            self.reader.say(f"Database error: {e}")
            return

        self.reader.say("You have successfully logged in!")
        self.account_menu(account)

    def account_menu(self, account: Account) -> None:
        """
        Serve the logged-in menu until logout or closure.

        Raises ExitRequested when the user chooses Exit.
        """
        while True:
            choice = self._menu(ACCOUNT_MENU)
            if choice == "1":
                self._guarded(self.show_balance, account)
            elif choice == "2":
                self._guarded(self.deposit_flow, account)
            elif choice == "3":
                self._guarded(self.withdraw_flow, account)
            elif choice == "4":
                self._guarded(self.transfer_flow, account)
            elif choice == "5":
                if self._guarded(self.close_flow, account):
                    return
            elif choice == "6":
                self.reader.say("You have successfully logged out!")
                return
            elif choice == "0":
                raise ExitRequested
            else:
                self.reader.say("Invalid option.")

    def _guarded(self, flow, account: Account) -> bool:
        """Run one account operation; report its failure and carry on."""
        try:
            flow(account)
        except DomainError as e:
            self.reader.say(f"Operation failed: {e}")
            return False
        except StorageError as e:
            logger.warning("Storage error during %s: %s", flow.__name__, e)
            self.reader.say(f"Database error: {e}")
            return False
        return True

    def show_balance(self, account: Account) -> None:
        self.reader.say(f"Balance: {self.engine.balance(account)}")

    def deposit_flow(self, account: Account) -> None:
        amount = self.reader.read_amount("Enter income:")
        if amount is None:
            return
        self.engine.deposit(account, amount)
        self.reader.say("Income was added!")

    def withdraw_flow(self, account: Account) -> None:
        amount = self.reader.read_amount("Enter amount to withdraw:")
        if amount is None:
            return
        self.engine.withdraw(account, amount)
        self.reader.say("Withdrawal successful!")

    def transfer_flow(self, account: Account) -> None:
        to_card = self.reader.read_card_number("Enter card number:")
        if to_card is None:
            return
        amount = self.reader.read_amount("Enter how much money you want to transfer:")
        if amount is None:
            return
        self.engine.transfer_funds(account, to_card, amount)
        self.reader.say("Success!")

    def close_flow(self, account: Account) -> None:
        self.engine.close_account(account)
        self.reader.say("The account has been closed!")
