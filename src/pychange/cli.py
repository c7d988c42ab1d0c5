from __future__ import annotations

import logging
import sys
import typing as t
from argparse import ArgumentParser, BooleanOptionalAction
from pathlib import Path

from no_log_tears import get_logger
from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pychange.calculator import DEFAULT_ROUNDING_UNIT, ChangeCalculator, find_greedy_counterexample
from pychange.csv import dump_csv
from pychange.denomination import EURO_DENOMINATIONS, SMALL_COINS, Denomination
from pychange.session import Session


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PYCHANGE_",
    )

    currency_name: str = "Euro"
    denominations: t.Sequence[Denomination] = EURO_DENOMINATIONS
    small_coins: frozenset[int] = SMALL_COINS
    rounding_unit: int = DEFAULT_ROUNDING_UNIT

    @model_validator(mode="after")
    def check_denominations(self) -> t.Self:
        values = [denomination.cents for denomination in self.denominations]

        if not values or any(value <= 0 for value in values):
            msg = "denominations must be positive"
            raise ValueError(msg, values)

        if any(left <= right for left, right in zip(values, values[1:], strict=False)):
            msg = "denominations must be strictly descending"
            raise ValueError(msg, values)

        if values[-1] != 1:
            msg = "denominations must include the 1 cent unit"
            raise ValueError(msg, values)

        if self.rounding_unit not in values or self.rounding_unit in self.small_coins:
            msg = "rounding unit must be one of the denominations allowed without small coins"
            raise ValueError(msg, self.rounding_unit)

        if any(value % self.rounding_unit for value in values if value not in self.small_coins):
            msg = "denominations allowed without small coins must be multiples of the rounding unit"
            raise ValueError(msg, values, self.rounding_unit)

        if tuple(self.denominations) == EURO_DENOMINATIONS:
            return self

        counterexample = find_greedy_counterexample(tuple(values))
        if counterexample is not None:
            msg = "denominations are not canonical, greedy change is not minimal"
            raise ValueError(msg, values, counterexample)

        return self


class CLIOptions(BaseModel):
    verbose: int
    timing: bool
    output: Path | None

    @property
    def logging_level(self) -> int:
        return max(logging.WARNING - self.verbose * 10, logging.DEBUG)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Calculate bills and coins a cashier has to return as change.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Enable verbose / debug messages.",
    )
    parser.add_argument(
        "--timing",
        action=BooleanOptionalAction,
        default=False,
        help="Print change calculation time. Default: %(default)s",
    )
    parser.add_argument("-o", "--output", type=Path, default=None, help="Also write the change as CSV file.")

    return parser


def create_calculator(config: Config) -> ChangeCalculator:
    return ChangeCalculator(
        denominations=config.denominations,
        small_coins=config.small_coins,
        rounding_unit=config.rounding_unit,
    )


def run(options: CLIOptions, config: Config, stdin: t.TextIO, stdout: t.TextIO) -> None:
    log = get_logger()(options=options)

    session = Session(
        calculator=create_calculator(config),
        stdin=stdin,
        stdout=stdout,
        currency_name=config.currency_name,
        small_coins=config.small_coins,
    )

    try:
        result = session.run()

    except (EOFError, KeyboardInterrupt):
        log.warning("session was aborted")
        raise SystemExit(1) from None

    if options.timing:
        print(f"Execution time: {result.elapsed_ns} nanoseconds", file=stdout)

    if options.output is not None:
        dump_csv(result.breakdown, options.output)
        log.info("change was written to csv", output=options.output)


def main(argv: t.Sequence[str] | None = None) -> None:
    options = CLIOptions.model_validate(build_parser().parse_args(argv).__dict__)

    get_logger("pychange").setLevel(options.logging_level)
    run(options, Config(), sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()
