from __future__ import annotations

import pytest

from pychange.calculator import (
    ChangeCalculator,
    ChangeError,
    InvalidAmountError,
    build_min_pieces_table,
    compute_change,
    count_greedy_pieces,
    find_greedy_counterexample,
    round_half_up,
)
from pychange.denomination import EURO_DENOMINATIONS, coins

EURO_VALUES = [denomination.cents for denomination in EURO_DENOMINATIONS]


def nonzero_counts(amount: int, allow_small_coins: bool) -> dict[int, int]:
    breakdown = compute_change(amount, allow_small_coins)
    return {denomination.cents: count for denomination, count in breakdown.counts.items() if count}


def test_change_for_609_cents_with_small_coins() -> None:
    assert nonzero_counts(609, allow_small_coins=True) == {500: 1, 100: 1, 5: 1, 2: 2}


def test_breakdown_counts_are_read_only() -> None:
    breakdown = compute_change(609, allow_small_coins=True)

    with pytest.raises(TypeError):
        breakdown.counts[EURO_DENOMINATIONS[0]] = 7  # type: ignore[index]

    assert breakdown.total == 609


def test_change_for_600_cents_without_small_coins() -> None:
    breakdown = compute_change(600, allow_small_coins=False)

    assert breakdown.amount == 600
    assert nonzero_counts(600, allow_small_coins=False) == {500: 1, 100: 1}


def test_change_for_609_cents_without_small_coins_is_rounded() -> None:
    breakdown = compute_change(609, allow_small_coins=False)

    assert breakdown.requested == 609
    assert breakdown.amount == 610
    assert nonzero_counts(609, allow_small_coins=False) == {500: 1, 100: 1, 10: 1}


@pytest.mark.parametrize("allow_small_coins", [True, False])
def test_zero_amount_lists_every_denomination(allow_small_coins: bool) -> None:
    breakdown = compute_change(0, allow_small_coins)

    assert list(breakdown.counts) == list(EURO_DENOMINATIONS)
    assert all(count == 0 for count in breakdown.counts.values())
    assert breakdown.pieces == 0


def test_large_amount_uses_many_top_bills() -> None:
    breakdown = compute_change(123456, allow_small_coins=True)

    assert breakdown.count_of(50000) == 2
    assert breakdown.total == 123456


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(0, 0), (1, 0), (2, 0), (3, 5), (5, 5), (7, 5), (8, 10), (12, 10), (13, 15), (1609, 1610), (1602, 1600)],
)
def test_round_half_up_to_five(amount: int, expected: int) -> None:
    assert round_half_up(amount, 5) == expected


def test_round_half_up_ties_go_up() -> None:
    assert round_half_up(5, 10) == 10
    assert round_half_up(15, 10) == 20
    assert round_half_up(4, 10) == 0


def test_small_coins_allowed_sum_matches_amount() -> None:
    for amount in range(10001):
        breakdown = compute_change(amount, allow_small_coins=True)

        assert breakdown.amount == amount
        assert breakdown.total == amount
        assert all(count >= 0 for count in breakdown.counts.values())


def test_small_coins_disallowed_are_never_used() -> None:
    for amount in range(10001):
        breakdown = compute_change(amount, allow_small_coins=False)

        assert breakdown.amount == round_half_up(amount, 5)
        assert breakdown.total == breakdown.amount
        assert breakdown.count_of(1) == 0
        assert breakdown.count_of(2) == 0


def test_greedy_piece_count_is_minimal() -> None:
    limit = 10000
    table = build_min_pieces_table(EURO_VALUES, limit)

    for amount in range(limit + 1):
        assert compute_change(amount, allow_small_coins=True).pieces == table[amount]


@pytest.mark.parametrize("amount", [-1, 1.5, 10.0, True, "10", None])
def test_invalid_amounts_are_rejected(amount: object) -> None:
    with pytest.raises(InvalidAmountError):
        compute_change(amount, allow_small_coins=True)  # type: ignore[arg-type]


def test_remainder_that_cannot_be_split_raises() -> None:
    calculator = ChangeCalculator(denominations=coins(10, 5), small_coins=frozenset())

    with pytest.raises(ChangeError):
        calculator.compute_change(3, allow_small_coins=True)


def test_calculator_uses_given_denominations() -> None:
    calculator = ChangeCalculator(denominations=coins(25, 10, 5, 1), small_coins=frozenset({1}))

    breakdown = calculator.compute_change(41, allow_small_coins=True)

    assert [count for _, count in breakdown.counts.items()] == [1, 1, 1, 1]
    assert calculator.compute_change(41, allow_small_coins=False).amount == 40


def test_count_greedy_pieces() -> None:
    assert count_greedy_pieces(609, EURO_VALUES) == 5
    assert count_greedy_pieces(3, [5, 2]) is None


def test_min_pieces_table_marks_unreachable_amounts() -> None:
    assert build_min_pieces_table([5, 2], 6) == [0, None, 1, None, 2, 1, 3]


@pytest.mark.parametrize(
    ("values", "expected"),
    [
        ((1, 3, 4), 6),
        ((1, 5, 11), 15),
        ((25, 10, 5, 1), None),
        ((1,), None),
        (tuple(EURO_VALUES), None),
    ],
)
def test_find_greedy_counterexample(values: tuple[int, ...], expected: int | None) -> None:
    assert find_greedy_counterexample(values) == expected
