from __future__ import annotations

import re
import typing as t
from dataclasses import dataclass
from decimal import Decimal
from functools import cache

CENTS_PER_UNIT = 100


@dataclass(frozen=True, kw_only=True, order=True)
class Money:
    cents: int

    @property
    def amount(self) -> Decimal:
        return Decimal(self.cents).scaleb(-2)

    def __sub__(self, other: Money) -> Money:
        return Money(cents=self.cents - other.cents)


@cache
def _get_money_pattern() -> t.Pattern[str]:
    return re.compile(r"^(?P<units>\d*)(?:[.,](?P<fraction>\d{1,2}))?$", re.ASCII)


def parse_money(value: str) -> Money:
    """Parse `16`, `16.09`, `16,9` or `,5` into exact cents."""
    match = _get_money_pattern().match(value.strip())
    if match is None:
        msg = "value doesn't match money pattern"
        raise ValueError(msg, value)

    units, fraction = match.group("units"), match.group("fraction") or ""
    if not units and not fraction:
        msg = "value has no digits"
        raise ValueError(msg, value)

    return Money(cents=int(units or "0") * CENTS_PER_UNIT + int(fraction.ljust(2, "0")))
