from __future__ import annotations

import math
from collections.abc import Sequence


def decimal_to_implied_prob(decimal_odds: float) -> float:
    """Implied probability of a decimal price. 2.0 -> 0.5, anything <= 1 -> 0.0"""
    if decimal_odds <= 1:
        return 0.0
    return 1 / decimal_odds


def remove_vig_proportional(decimal_odds: Sequence[float]) -> list[float] | None:
    """Proportional overround removal. None when the implied probabilities sum to <= 0."""
    probs = [decimal_to_implied_prob(o) for o in decimal_odds]
    total = sum(probs)
    if total <= 0:
        return None
    return [p / total for p in probs]


def normalize_quote(names: Sequence[str], decimal_odds: Sequence[float]) -> dict[str, float] | None:
    """Map each outcome name to its no-vig probability, or None if the quote is unusable."""
    if not names or len(names) != len(decimal_odds):
        return None
    probs = remove_vig_proportional(decimal_odds)
    if probs is None:
        return None
    return dict(zip(names, probs))


def calculate_ev(fair_prob: float, decimal_odds: float) -> float:
    """EV = (fair_prob * decimal_odds) - 1. Returns as decimal (0.05 = 5%)."""
    return (fair_prob * decimal_odds) - 1


def fair_odds_from_prob(fair_prob: float) -> float | None:
    if fair_prob <= 0:
        return None
    return 1 / fair_prob


def round_or_none(value: float | None, digits: int = 2) -> float | None:
    if value is None:
        return None
    return round(float(value), digits)


def parse_price(raw: object) -> float | None:
    """Coerce a provider price to a finite float."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value
