from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sharpline.analytics.consensus import BestPrice, build_sharp_consensus, select_best_prices
from sharpline.analytics.sharp_books import SHARP_BOOKS
from sharpline.models.pick import H2H_MARKET
from sharpline.services.odds_normalizer import MarketSnapshot
from sharpline.utils.odds_math import calculate_ev, fair_odds_from_prob, round_or_none

DEFAULT_EV_MIN = 0.03


@dataclass(slots=True)
class PickCandidate:
    sport_key: str
    event_id: str
    commence_time: datetime
    home_team: str
    away_team: str
    selection: str
    market: str
    fair_odds: float | None
    soft_odds: float
    ev_pct: float
    best_book: str | None
    sharp_sources: str


def evaluate_outcome(fair_prob: float, best: BestPrice, ev_min: float = DEFAULT_EV_MIN) -> float | None:
    """Relative EV of backing ``best`` at ``fair_prob``, or None when it does not clear ``ev_min``."""
    if not best.odds or not fair_prob:
        return None
    ev = calculate_ev(fair_prob, best.odds)
    if ev < ev_min:
        return None
    return ev


def find_value_picks(
    snapshot: MarketSnapshot,
    sport_key: str,
    *,
    ev_min: float = DEFAULT_EV_MIN,
    sharp_books=SHARP_BOOKS,
) -> list[PickCandidate]:
    consensus = build_sharp_consensus(snapshot.quotes, sharp_books)
    if consensus is None:
        return []

    best_prices = select_best_prices(snapshot.quotes, consensus.outcomes)
    sharp_sources = ", ".join(sorted(consensus.sharp_titles))

    candidates: list[PickCandidate] = []
    for name in consensus.outcomes:
        fair_prob = consensus.fair_probs[name]
        best = best_prices[name]
        ev = evaluate_outcome(fair_prob, best, ev_min)
        if ev is None:
            continue
        candidates.append(
            PickCandidate(
                sport_key=sport_key,
                event_id=snapshot.event_id,
                commence_time=snapshot.commence_time,
                home_team=snapshot.home_team,
                away_team=snapshot.away_team,
                selection=best.name,
                market=H2H_MARKET,
                fair_odds=round_or_none(fair_odds_from_prob(fair_prob), 3),
                soft_odds=round(best.odds, 3),
                ev_pct=round(ev * 100, 2),
                best_book=best.book,
                sharp_sources=sharp_sources,
            )
        )
    return candidates
