from __future__ import annotations

import typing as t
from collections import OrderedDict
from types import MappingProxyType
from dataclasses import dataclass
from functools import cache

from no_log_tears import LogMixin

from pychange.denomination import EURO_DENOMINATIONS, SMALL_COINS, Denomination

DEFAULT_ROUNDING_UNIT: t.Final[int] = 5


class InvalidAmountError(ValueError):
    pass


class ChangeError(RuntimeError):
    pass


@dataclass(frozen=True, kw_only=True)
class ChangeBreakdown:
    requested: int
    amount: int
    counts: t.Mapping[Denomination, int]

    @property
    def total(self) -> int:
        return sum(denomination.cents * count for denomination, count in self.counts.items())

    @property
    def pieces(self) -> int:
        return sum(self.counts.values())

    def count_of(self, cents: int) -> int:
        return sum(count for denomination, count in self.counts.items() if denomination.cents == cents)

    def iter_bills(self) -> t.Iterable[tuple[Denomination, int]]:
        return ((denomination, count) for denomination, count in self.counts.items() if denomination.is_bill)

    def iter_coins(self) -> t.Iterable[tuple[Denomination, int]]:
        return ((denomination, count) for denomination, count in self.counts.items() if not denomination.is_bill)


def round_half_up(amount: int, unit: int) -> int:
    """Round `amount` to the nearest multiple of `unit`, ties going up."""
    quotient, remainder = divmod(amount, unit)
    if remainder * 2 >= unit:
        quotient += 1

    return quotient * unit


def check_amount(amount: object) -> int:
    # bool is an int subclass
    if isinstance(amount, bool) or not isinstance(amount, int):
        msg = "amount must be an integer number of cents"
        raise InvalidAmountError(msg, amount)

    if amount < 0:
        msg = "amount must not be negative"
        raise InvalidAmountError(msg, amount)

    return amount


class ChangeCalculator(LogMixin):
    def __init__(
        self,
        denominations: t.Sequence[Denomination] = EURO_DENOMINATIONS,
        small_coins: t.Collection[int] = SMALL_COINS,
        rounding_unit: int = DEFAULT_ROUNDING_UNIT,
    ) -> None:
        self.__denominations = tuple(denominations)
        self.__small_coins = frozenset(small_coins)
        self.__rounding_unit = rounding_unit

    @property
    def denominations(self) -> t.Sequence[Denomination]:
        return self.__denominations

    def compute_change(self, amount: int, allow_small_coins: bool) -> ChangeBreakdown:
        """
        Split `amount` cents into bills and coins, largest first.

        When small coins are not allowed, the amount is first rounded half up to the rounding unit and the small
        coins are skipped, so their counts stay zero.
        """
        log = self._log(amount=amount, allow_small_coins=allow_small_coins)

        requested = check_amount(amount)
        remaining = requested if allow_small_coins else round_half_up(requested, self.__rounding_unit)
        if remaining != requested:
            log.debug("amount was rounded", rounded=remaining)

        effective = remaining
        counts = OrderedDict[Denomination, int]()

        for denomination in self.__denominations:
            if not allow_small_coins and denomination.cents in self.__small_coins:
                counts[denomination] = 0
                continue

            counts[denomination], remaining = divmod(remaining, denomination.cents)

        if remaining != 0:
            msg = "amount can't be split with the configured denominations"
            raise ChangeError(msg, effective, remaining)

        breakdown = ChangeBreakdown(requested=requested, amount=effective, counts=MappingProxyType(counts))
        log.debug("change was computed", pieces=breakdown.pieces)

        return breakdown


def compute_change(
    amount: int,
    allow_small_coins: bool,
    denominations: t.Sequence[Denomination] = EURO_DENOMINATIONS,
) -> ChangeBreakdown:
    return ChangeCalculator(denominations).compute_change(amount, allow_small_coins)


def count_greedy_pieces(amount: int, values: t.Sequence[int]) -> int | None:
    pieces = 0
    for value in sorted(values, reverse=True):
        count, amount = divmod(amount, value)
        pieces += count

    return pieces if amount == 0 else None


def build_min_pieces_table(values: t.Sequence[int], limit: int) -> t.Sequence[int | None]:
    """Minimal piece count for every amount in `0..limit` (`None` where unreachable)."""
    table: list[int | None] = [0]

    for amount in range(1, limit + 1):
        candidates = [
            previous + 1
            for value in values
            if value <= amount and (previous := table[amount - value]) is not None
        ]
        table.append(min(candidates, default=None))

    return table


@cache
def find_greedy_counterexample(values: tuple[int, ...]) -> int | None:
    """
    Return the smallest amount for which greedy uses more pieces than necessary.

    A counterexample, if any, is smaller than the sum of the two largest values (Kozen & Zaks), so the search stops
    there. `None` means the system is canonical.
    """
    ordered = sorted(values, reverse=True)
    limit = sum(ordered[:2])
    table = build_min_pieces_table(ordered, limit)

    for amount in range(1, limit + 1):
        optimum = table[amount]
        if optimum is not None and count_greedy_pieces(amount, ordered) != optimum:
            return amount

    return None
