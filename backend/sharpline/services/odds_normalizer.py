import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sharpline.models.pick import H2H_MARKET
from sharpline.utils.odds_math import parse_price

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QuoteOutcome:
    name: str | None
    price: float | None


@dataclass(slots=True)
class SourceQuote:
    key: str
    title: str
    outcomes: list[QuoteOutcome] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.title or self.key

    def is_complete(self) -> bool:
        """Every outcome carries both a name and a usable price."""
        return bool(self.outcomes) and all(o.name and o.price is not None for o in self.outcomes)

    def names(self) -> list[str]:
        return [o.name for o in self.outcomes if o.name]

    def prices(self) -> list[float]:
        return [o.price for o in self.outcomes if o.price is not None]


@dataclass(slots=True)
class MarketSnapshot:
    event_id: str
    home_team: str
    away_team: str
    commence_time: datetime
    quotes: list[SourceQuote] = field(default_factory=list)


def parse_commence_time(raw: str) -> datetime:
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


def _parse_quote(bookmaker: dict[str, Any], market_key: str) -> SourceQuote | None:
    market = next((m for m in bookmaker.get("markets") or [] if m and m.get("key") == market_key), None)
    if market is None:
        return None
    outcomes = [
        QuoteOutcome(name=(o.get("name") or None), price=parse_price(o.get("price")))
        for o in market.get("outcomes") or []
        if isinstance(o, dict)
    ]
    return SourceQuote(
        key=str(bookmaker.get("key") or ""),
        title=str(bookmaker.get("title") or ""),
        outcomes=outcomes,
    )


def parse_market_snapshot(event: dict[str, Any], market_key: str = H2H_MARKET) -> MarketSnapshot | None:
    """Build a snapshot from one provider event. Incomplete events yield None."""
    event_id = event.get("id")
    home = event.get("home_team")
    away = event.get("away_team")
    commence = event.get("commence_time")
    if not event_id or not home or not away or not commence:
        logger.debug("skipping incomplete event payload: id=%s", event_id)
        return None
    try:
        commence_time = parse_commence_time(commence)
    except ValueError:
        logger.warning("skipping event with unparseable commence_time: id=%s commence_time=%s", event_id, commence)
        return None

    quotes: list[SourceQuote] = []
    for bookmaker in event.get("bookmakers") or []:
        if not isinstance(bookmaker, dict):
            continue
        quote = _parse_quote(bookmaker, market_key)
        if quote is not None:
            quotes.append(quote)

    return MarketSnapshot(
        event_id=str(event_id),
        home_team=home,
        away_team=away,
        commence_time=commence_time,
        quotes=quotes,
    )
