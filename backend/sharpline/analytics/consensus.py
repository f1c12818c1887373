from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from statistics import mean

from sharpline.analytics.sharp_books import SHARP_BOOKS, is_sharp_book
from sharpline.services.odds_normalizer import SourceQuote
from sharpline.utils.odds_math import normalize_quote

logger = logging.getLogger(__name__)


@dataclass
class SharpConsensus:
    outcomes: list[str]
    fair_probs: dict[str, float]
    sharp_titles: set[str] = field(default_factory=set)


@dataclass
class BestPrice:
    name: str
    odds: float = 0.0
    book: str | None = None


def sharp_probability_vectors(
    quotes: Iterable[SourceQuote], sharp_books: Iterable[str] = SHARP_BOOKS
) -> tuple[list[dict[str, float]], set[str]]:
    """No-vig vectors for every usable sharp quote, plus the titles that contributed."""
    sharp_books = tuple(sharp_books)
    vectors: list[dict[str, float]] = []
    titles: set[str] = set()
    for quote in quotes:
        if not is_sharp_book(quote.key, quote.title, sharp_books):
            continue
        vector = normalize_quote(quote.names(), quote.prices()) if quote.is_complete() else None
        if vector is None:
            logger.debug("skipping unusable sharp quote: book=%s outcomes=%s", quote.label, len(quote.outcomes))
            continue
        vectors.append(vector)
        titles.add(quote.label)
    return vectors, titles


def calculate_consensus(vectors: Sequence[dict[str, float]]) -> dict[str, float]:
    """Mean no-vig probability per outcome over the sharp vectors that quote it.

    Keys follow first-seen order across vectors; an empty input yields an empty mapping.
    """
    outcomes: list[str] = []
    for vector in vectors:
        for name in vector:
            if name not in outcomes:
                outcomes.append(name)

    consensus: dict[str, float] = {}
    for name in outcomes:
        values = [vector[name] for vector in vectors if name in vector]
        consensus[name] = mean(values) if values else 0.0
    return consensus


def build_sharp_consensus(
    quotes: Sequence[SourceQuote], sharp_books: Iterable[str] = SHARP_BOOKS
) -> SharpConsensus | None:
    vectors, titles = sharp_probability_vectors(quotes, sharp_books)
    if not vectors:
        return None
    fair_probs = calculate_consensus(vectors)
    return SharpConsensus(outcomes=list(fair_probs), fair_probs=fair_probs, sharp_titles=titles)


def select_best_prices(quotes: Iterable[SourceQuote], outcomes: Sequence[str]) -> dict[str, BestPrice]:
    """Highest price per outcome across all books. Ties keep the first book seen."""
    best = {name: BestPrice(name=name) for name in outcomes}
    for quote in quotes:
        for outcome in quote.outcomes:
            current = best.get(outcome.name) if outcome.name else None
            if current is None or outcome.price is None:
                continue
            if outcome.price > current.odds:
                best[outcome.name] = BestPrice(name=outcome.name, odds=outcome.price, book=quote.label)
    return best
