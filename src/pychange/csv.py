from __future__ import annotations

import csv
import sys
import typing as t
from contextlib import contextmanager, nullcontext
from pathlib import Path

from pychange.formatting import format_units

if t.TYPE_CHECKING:
    from pychange.calculator import ChangeBreakdown


@contextmanager
def use_csv_writer(
    dest: Path | t.TextIO | None,
    fieldnames: t.Sequence[str],
    delimiter: str | None = None,
) -> t.Iterator[csv.DictWriter[str]]:
    if isinstance(dest, Path):
        stream = dest.open("w", newline="")
    else:
        stream = nullcontext(dest if dest is not None else sys.stdout)

    with stream as fd:
        writer = csv.DictWriter(
            fd,
            fieldnames=fieldnames,
            delimiter=delimiter or ",",
        )
        writer.writeheader()

        yield writer


def dump_csv(breakdown: ChangeBreakdown, dest: Path | t.TextIO | None, delimiter: str | None = None) -> None:
    with use_csv_writer(dest, fieldnames=("kind", "denomination", "count"), delimiter=delimiter) as writer:
        for denomination, count in breakdown.counts.items():
            writer.writerow(
                {
                    "kind": denomination.kind,
                    "denomination": format_units(denomination.cents, "."),
                    "count": count,
                }
            )
