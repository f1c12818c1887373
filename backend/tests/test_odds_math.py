import pytest

from sharpline.utils.odds_math import (
    calculate_ev,
    decimal_to_implied_prob,
    fair_odds_from_prob,
    normalize_quote,
    parse_price,
    remove_vig_proportional,
    round_or_none,
)


def test_implied_prob_guards_sub_unity_prices():
    assert decimal_to_implied_prob(2.0) == 0.5
    assert decimal_to_implied_prob(1.0) == 0.0
    assert decimal_to_implied_prob(0.5) == 0.0


@pytest.mark.parametrize(
    "prices",
    [
        [1.80, 2.10],
        [1.91, 1.91],
        [2.6, 3.3, 2.9],
        [1.01, 50.0],
        [0.9, 2.5, 3.0],
        [7.5],
    ],
)
def test_remove_vig_sums_to_one(prices):
    probs = remove_vig_proportional(prices)
    assert probs is not None
    assert len(probs) == len(prices)
    assert sum(probs) == pytest.approx(1.0, abs=1e-9)


def test_remove_vig_keeps_zero_for_unusable_price():
    probs = remove_vig_proportional([0.9, 2.0, 2.0])
    assert probs == [0.0, 0.5, 0.5]


@pytest.mark.parametrize("prices", [[1.0, 0.5], [1.0], [], [-2.0, 0.0]])
def test_remove_vig_degenerate_returns_none(prices):
    assert remove_vig_proportional(prices) is None


def test_normalize_quote_rejects_count_mismatch():
    assert normalize_quote(["Team A", "Team B"], [1.8]) is None
    assert normalize_quote([], []) is None


def test_normalize_quote_maps_names():
    out = normalize_quote(["Team A", "Team B"], [1.80, 2.10])
    assert out is not None
    assert out["Team A"] == pytest.approx(0.5385, abs=1e-4)
    assert out["Team B"] == pytest.approx(0.4615, abs=1e-4)


def test_calculate_ev_and_fair_odds():
    assert calculate_ev(0.55, 2.0) == pytest.approx(0.10)
    assert round_or_none(fair_odds_from_prob(0.55), 3) == 1.818
    assert fair_odds_from_prob(0.0) is None
    assert round_or_none(None, 3) is None


def test_parse_price():
    assert parse_price("2.05") == 2.05
    assert parse_price(3) == 3.0
    assert parse_price("abc") is None
    assert parse_price(None) is None
    assert parse_price(float("nan")) is None
    assert parse_price(True) is None
