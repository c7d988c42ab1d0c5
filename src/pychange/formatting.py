from __future__ import annotations

import typing as t

from pychange.money import CENTS_PER_UNIT

if t.TYPE_CHECKING:
    from pychange.calculator import ChangeBreakdown
    from pychange.denomination import Denomination


def format_units(cents: int, separator: str = ",") -> str:
    units, fraction = divmod(cents, CENTS_PER_UNIT)
    if fraction == 0:
        return str(units)

    return f"{units}{separator}{fraction:02d}"


def format_denomination(denomination: Denomination, currency_name: str = "Euro") -> str:
    return f"{format_units(denomination.cents)} {currency_name} {denomination.kind}s"


def format_small_coins(small_coins: t.Collection[int], currency_name: str = "Euro") -> str:
    return " and ".join(f"{format_units(cents, '.')} {currency_name} coins" for cents in sorted(small_coins))


def format_breakdown(breakdown: ChangeBreakdown, currency_name: str = "Euro") -> str:
    lines = ["The cashier has to return to the customer:", "BILLS:"]
    lines.extend(
        f"{format_denomination(denomination, currency_name)}: {count}" for denomination, count in breakdown.iter_bills()
    )
    lines.append("COINS:")
    lines.extend(
        f"{format_denomination(denomination, currency_name)}: {count}" for denomination, count in breakdown.iter_coins()
    )

    return "\n".join(lines) + "\n"
