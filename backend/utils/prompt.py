# backend/utils/prompt.py
from decimal import Decimal, InvalidOperation
import sys

from utils.errors import EndOfInput, InputError


class Prompter:
    """Blocking line input from the operator's terminal."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def prompt_line(self, message: str) -> str:
        self.stdout.write(message)
        self.stdout.flush()
        try:
            line = self.stdin.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Error reading input: {e}") from e
        if line == "":
            raise EndOfInput("Error reading input: end of input")
        return line.rstrip("\r\n")

    def prompt_int(self, message: str) -> int:
        raw = self.prompt_line(message).strip()
        try:
            return int(raw)
        except ValueError:
            raise InputError(f"'{raw}' is not a whole number.")

    def prompt_decimal(self, message: str) -> Decimal:
        raw = self.prompt_line(message).strip().lstrip("$")
        try:
            value = Decimal(raw)
        except InvalidOperation:
            raise InputError(f"'{raw}' is not a number.")
        if not value.is_finite():
            raise InputError(f"'{raw}' is not a number.")
        return value

    def confirm(self, message: str) -> bool:
        return self.prompt_line(message).strip() in ("y", "Y")

    def say(self, message: str = ""):
        self.stdout.write(f"{message}\n")
        self.stdout.flush()
