from __future__ import annotations

import time
import typing as t
from dataclasses import dataclass

from no_log_tears import LogMixin

from pychange.denomination import SMALL_COINS
from pychange.formatting import format_breakdown, format_small_coins
from pychange.money import Money, parse_money

if t.TYPE_CHECKING:
    from pychange.calculator import ChangeBreakdown, ChangeCalculator


@dataclass(frozen=True, kw_only=True)
class SessionResult:
    due: Money
    received: Money
    allow_small_coins: bool
    breakdown: ChangeBreakdown
    elapsed_ns: int

    @property
    def change(self) -> Money:
        return self.received - self.due


class Session(LogMixin):
    """
    One cashier interaction over text streams.

    Every invalid answer is reported and asked again, so `run` only fails when the input stream ends.
    """

    def __init__(
        self,
        calculator: ChangeCalculator,
        stdin: t.TextIO,
        stdout: t.TextIO,
        currency_name: str = "Euro",
        small_coins: t.Collection[int] = SMALL_COINS,
    ) -> None:
        self.__calculator = calculator
        self.__stdin = stdin
        self.__stdout = stdout
        self.__currency_name = currency_name
        self.__small_coins_title = format_small_coins(small_coins, currency_name)

    def run(self) -> SessionResult:
        self.__write("The customer bought items with a total value of ")
        due = self.read_amount()

        received = self.read_received_amount(due)

        self.__write(f"Can we use {self.__small_coins_title}? (yes/no)")
        allow_small_coins = self.read_allow_small_coins()
        if allow_small_coins:
            self.__write(f"The cashier can use {self.__small_coins_title}.")
        else:
            self.__write(f"The cashier cannot use {self.__small_coins_title}.")

        start = time.perf_counter_ns()
        breakdown = self.__calculator.compute_change((received - due).cents, allow_small_coins)
        self.__write(format_breakdown(breakdown, self.__currency_name))
        elapsed_ns = time.perf_counter_ns() - start

        result = SessionResult(
            due=due,
            received=received,
            allow_small_coins=allow_small_coins,
            breakdown=breakdown,
            elapsed_ns=elapsed_ns,
        )
        self._log.info("session finished", change=result.change, pieces=breakdown.pieces)

        return result

    def read_amount(self) -> Money:
        while True:
            value = self.__read_line()

            try:
                money = parse_money(value)

            except ValueError:
                self._log.debug("invalid amount was entered", value=value)
                self.__write(
                    "Invalid input. Enter a number with at most two decimal places (for example, 16, 16.09 or 16,09):"
                )

            else:
                return money

    def read_received_amount(self, due: Money) -> Money:
        while True:
            self.__write("The customer pays with ")
            received = self.read_amount()

            if received >= due:
                return received

            self._log.debug("received amount is not enough", due=due, received=received)
            self.__write("Error: received amount is less than the amount to pay. Please try again.")

    def read_allow_small_coins(self) -> bool:
        while True:
            answer = self.__read_line().strip().lower()

            if answer == "yes":
                return True

            elif answer == "no":
                return False

            else:
                self.__write("Please answer with 'yes' or 'no':")

    def __read_line(self) -> str:
        line = self.__stdin.readline()
        if not line:
            msg = "input stream was closed"
            raise EOFError(msg)

        return line.rstrip("\r\n")

    def __write(self, text: str) -> None:
        print(text, file=self.__stdout, flush=True)
