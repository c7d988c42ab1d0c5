from __future__ import annotations

import typing as t
from dataclasses import dataclass

DenominationKind: t.TypeAlias = t.Literal["bill", "coin"]


@dataclass(frozen=True, kw_only=True)
class Denomination:
    cents: int
    kind: DenominationKind

    @property
    def is_bill(self) -> bool:
        return self.kind == "bill"


def bills(*values: int) -> tuple[Denomination, ...]:
    return tuple(Denomination(cents=value, kind="bill") for value in values)


def coins(*values: int) -> tuple[Denomination, ...]:
    return tuple(Denomination(cents=value, kind="coin") for value in values)


EURO_DENOMINATIONS: t.Final[tuple[Denomination, ...]] = (
    *bills(50000, 20000, 10000, 5000, 2000, 1000, 500),
    *coins(200, 100, 50, 20, 10, 5, 2, 1),
)

SMALL_COINS: t.Final[frozenset[int]] = frozenset({1, 2})
