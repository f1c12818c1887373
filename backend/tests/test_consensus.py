import pytest

from sharpline.analytics.consensus import (
    build_sharp_consensus,
    calculate_consensus,
    select_best_prices,
    sharp_probability_vectors,
)
from sharpline.analytics.sharp_books import is_sharp_book
from sharpline.services.odds_normalizer import QuoteOutcome, SourceQuote


def _quote(key, title, outcomes):
    return SourceQuote(key=key, title=title, outcomes=[QuoteOutcome(name, price) for name, price in outcomes])


def test_is_sharp_book_matches_key_or_title_case_insensitive():
    assert is_sharp_book("pinnacle", "")
    assert is_sharp_book("", "Pinnacle")
    assert is_sharp_book("betfair_ex_eu", "Betfair")
    assert is_sharp_book("xyz", "Matchbook Exchange")
    assert not is_sharp_book("williamhill", "William Hill")
    assert not is_sharp_book(None, None)


def test_is_sharp_book_custom_allow_list():
    assert is_sharp_book("unibet", "Unibet", ["UNIBET"])
    assert not is_sharp_book("pinnacle", "Pinnacle", ["circa"])


def test_single_sharp_source_reproduces_its_probabilities():
    vector = {"Team A": 0.5384615384615384, "Team B": 0.46153846153846156}
    assert calculate_consensus([vector]) == vector


def test_two_sharp_sources_average():
    consensus = calculate_consensus([{"Team A": 0.60, "Team B": 0.40}, {"Team A": 0.50, "Team B": 0.50}])
    assert consensus["Team A"] == pytest.approx(0.55)
    assert consensus["Team B"] == pytest.approx(0.45)


def test_consensus_averages_only_sources_quoting_the_outcome():
    consensus = calculate_consensus([{"A": 0.5, "B": 0.5}, {"A": 0.4, "Draw": 0.3, "B": 0.3}])
    assert list(consensus) == ["A", "B", "Draw"]
    assert consensus["A"] == pytest.approx(0.45)
    assert consensus["Draw"] == pytest.approx(0.3)


def test_consensus_empty():
    assert calculate_consensus([]) == {}


def test_sharp_vectors_skip_soft_malformed_and_degenerate_quotes():
    quotes = [
        _quote("pinnacle", "Pinnacle", [("A", 1.80), ("B", 2.10)]),
        _quote("matchbook", "Matchbook", [("A", 1.85), ("B", None)]),
        _quote("circa", "Circa", [("A", 1.0), ("B", 0.8)]),
        _quote("unibet", "Unibet", [("A", 2.05), ("B", 2.00)]),
    ]
    vectors, titles = sharp_probability_vectors(quotes)
    assert len(vectors) == 1
    assert titles == {"Pinnacle"}


def test_sharp_vectors_fall_back_to_key_when_title_missing():
    _, titles = sharp_probability_vectors([_quote("pinnacle", "", [("A", 1.9), ("B", 1.9)])])
    assert titles == {"pinnacle"}


def test_soft_only_outcomes_never_enter_the_universe():
    quotes = [
        _quote("pinnacle", "Pinnacle", [("A", 1.80), ("B", 2.10)]),
        _quote("unibet", "Unibet", [("A", 2.05), ("B", 2.00), ("Draw", 9.0)]),
    ]
    consensus = build_sharp_consensus(quotes)
    assert consensus is not None
    assert consensus.outcomes == ["A", "B"]


def test_no_sharp_sources_yields_none():
    assert build_sharp_consensus([_quote("unibet", "Unibet", [("A", 2.05), ("B", 2.00)])]) is None


def test_best_price_across_all_sources_with_first_seen_ties():
    quotes = [
        _quote("pinnacle", "Pinnacle", [("A", 1.80), ("B", 2.10)]),
        _quote("unibet", "Unibet", [("A", 2.05), ("B", 2.00)]),
        _quote("bet365", "Bet365", [("A", 2.05), ("B", 1.95), ("Draw", 3.0)]),
    ]
    best = select_best_prices(quotes, ["A", "B"])
    assert set(best) == {"A", "B"}
    assert (best["A"].odds, best["A"].book) == (2.05, "Unibet")
    assert (best["B"].odds, best["B"].book) == (2.10, "Pinnacle")


def test_best_price_absent_when_nobody_prices_outcome():
    best = select_best_prices([_quote("unibet", "Unibet", [("A", None)])], ["A"])
    assert best["A"].odds == 0.0
    assert best["A"].book is None


def test_sharp_quote_with_misaligned_name_and_price_is_skipped():
    quotes = [_quote("pinnacle", "Pinnacle", [("A", None), (None, 2.0)])]
    vectors, titles = sharp_probability_vectors(quotes)
    assert vectors == []
    assert titles == set()
