from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from sharpline.analytics.ev_calculator import PickCandidate, find_value_picks
from sharpline.config import ScanConfig
from sharpline.data_providers.odds_api import OddsAPIClient, OddsAPIError
from sharpline.services.odds_normalizer import parse_market_snapshot
from sharpline.services.pick_store import upsert_pick

logger = logging.getLogger(__name__)


@dataclass
class ScanSummary:
    sports_scanned: int = 0
    events_seen: int = 0
    candidates: int = 0
    picks_inserted: int = 0
    failed_sports: list[str] = field(default_factory=list)
    generated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def scan_events(events: list[dict[str, Any]], sport_key: str, config: ScanConfig) -> list[PickCandidate]:
    """Value picks for one league's odds payload, in provider event order."""
    candidates: list[PickCandidate] = []
    for event in events or []:
        if not isinstance(event, dict):
            continue
        snapshot = parse_market_snapshot(event)
        if snapshot is None:
            continue
        candidates.extend(
            find_value_picks(snapshot, sport_key, ev_min=config.ev_min, sharp_books=config.sharp_books)
        )
    return candidates


async def run_scan(
    client: OddsAPIClient,
    session: AsyncSession,
    config: ScanConfig,
    *,
    now: datetime | None = None,
) -> ScanSummary:
    """Scan every tracked league and persist new value picks.

    Picks are committed league by league, so a provider failure on a later
    league keeps the work already done. Failing to list leagues aborts the run.
    """
    now = now or datetime.now(UTC)
    commence_to = now + timedelta(hours=config.hours)
    summary = ScanSummary(generated_at=now.isoformat())

    sports = await client.list_tracked_sports(config.sport_prefixes)
    for sport_key in sports:
        try:
            result = await client.get_odds(
                sport_key, regions=config.region, commence_from=now, commence_to=commence_to
            )
        except OddsAPIError:
            logger.exception("Failed to fetch odds for sport %s", sport_key)
            summary.failed_sports.append(sport_key)
            continue

        summary.sports_scanned += 1
        summary.events_seen += len(result.data)
        candidates = scan_events(result.data, sport_key, config)
        summary.candidates += len(candidates)
        for candidate in candidates:
            if await upsert_pick(session, candidate) is not None:
                summary.picks_inserted += 1
        await session.commit()

    logger.info(
        "scan complete: sports=%s events=%s candidates=%s picks_inserted=%s failed_sports=%s",
        summary.sports_scanned,
        summary.events_seen,
        summary.candidates,
        summary.picks_inserted,
        summary.failed_sports,
    )
    return summary
