"""
Console input: prompts, and parsing of card numbers, PINs and amounts.
"""

import sys
from decimal import Decimal
from typing import Optional, TextIO

from card_ledger.core.exceptions import InvalidAmountError
from card_ledger.core.money import to_money
from card_ledger.services import luhn


class InputReader:
    """
    Reads one line per prompt. Invalid input is reported and returned as None.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def say(self, message: str) -> None:
        print(message, file=self.stdout)

    def read_line(self, prompt: str) -> str:
        """Show the prompt and return the next line without its newline.

        Raises EOFError when input is exhausted.
        """
        if prompt:
            self.say(prompt)
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def read_card_number(self, prompt: str) -> Optional[str]:
        card_number = "".join(self.read_line(prompt).split())
        if not luhn.validate(card_number):
            self.say("Invalid card number.")
            return None
        return card_number

    def read_pin(self, prompt: str) -> Optional[str]:
        pin = self.read_line(prompt).strip()
        if not pin:
            self.say("PIN cannot be empty.")
            return None
        return pin

    def read_amount(self, prompt: str) -> Optional[Decimal]:
        # Accept both 12.50 and 12,50
        text = self.read_line(prompt).strip().replace(",", ".")
        try:
            return to_money(text)
        except InvalidAmountError:
            self.say("Invalid amount. Please enter a number.")
            return None
