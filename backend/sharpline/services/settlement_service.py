from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from sharpline.config import SettlementConfig
from sharpline.data_providers.odds_api import OddsAPIClient, OddsAPIError
from sharpline.models.pick import PickStatus
from sharpline.services.pick_store import mark_resolved, query_upcoming_due, upcoming_picks_for_event

logger = logging.getLogger(__name__)

DRAW_SELECTION = "Draw"


@dataclass
class FinalScore:
    event_id: str
    home_team: str
    away_team: str
    home_score: int
    away_score: int


@dataclass
class SettlementSummary:
    events_considered: int = 0
    events_completed: int = 0
    picks_settled: int = 0
    wins: int = 0
    losses: int = 0
    unresolved: int = 0
    failed_batches: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def resolve_outcome(
    selection: str, home_team: str, away_team: str, home_score: int, away_score: int
) -> PickStatus | None:
    """Grade a head-to-head selection from the final score.

    A drawn match loses for either team; "push" is never produced. Selections
    matching neither team nor "Draw" return None.
    """
    if selection == DRAW_SELECTION:
        return PickStatus.WON if home_score == away_score else PickStatus.LOST
    if selection == home_team:
        return PickStatus.WON if home_score > away_score else PickStatus.LOST
    if selection == away_team:
        return PickStatus.WON if away_score > home_score else PickStatus.LOST
    return None


def _parse_score(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or not value.is_integer():
        return None
    return int(value)


def extract_final_score(row: dict[str, Any]) -> FinalScore | None:
    """Final score of a completed event, matched by exact participant name."""
    if not isinstance(row, dict) or not row.get("completed"):
        return None
    home_team = row.get("home_team")
    away_team = row.get("away_team")
    if not row.get("id") or not home_team or not away_team:
        return None

    name_to_score: dict[str, int | None] = {}
    for item in row.get("scores") or []:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        if name:
            name_to_score[name] = _parse_score(item.get("score"))

    home_score = name_to_score.get(home_team)
    away_score = name_to_score.get(away_team)
    if home_score is None or away_score is None:
        return None
    return FinalScore(
        event_id=str(row["id"]),
        home_team=home_team,
        away_team=away_team,
        home_score=home_score,
        away_score=away_score,
    )


async def settle_event(
    session: AsyncSession, score: FinalScore, summary: SettlementSummary, resolved_at: datetime
) -> None:
    for pick in await upcoming_picks_for_event(session, score.event_id):
        outcome = resolve_outcome(pick.selection, score.home_team, score.away_team, score.home_score, score.away_score)
        if outcome is None:
            summary.unresolved += 1
            logger.info(
                "unresolved selection: event_id=%s selection=%s home=%s away=%s",
                score.event_id,
                pick.selection,
                score.home_team,
                score.away_team,
            )
            continue
        if not await mark_resolved(session, pick.id, outcome, score.home_score, score.away_score, resolved_at):
            continue
        summary.picks_settled += 1
        if outcome == PickStatus.WON:
            summary.wins += 1
        else:
            summary.losses += 1


def _batches(ids: list[str], size: int) -> list[list[str]]:
    return [ids[i : i + size] for i in range(0, len(ids), size)]


async def settle_pending(
    client: OddsAPIClient,
    session: AsyncSession,
    config: SettlementConfig,
    *,
    now: datetime | None = None,
) -> SettlementSummary:
    now = now or datetime.now(UTC)
    due = await query_upcoming_due(session, lookahead_hours=config.lookahead_hours, limit=config.max_events, now=now)
    summary = SettlementSummary(events_considered=len(due))

    by_sport: dict[str, list[str]] = {}
    for sport_key, event_id in due:
        by_sport.setdefault(sport_key, []).append(event_id)

    for sport_key, event_ids in by_sport.items():
        for group in _batches(event_ids, config.batch_size):
            try:
                result = await client.get_scores(sport_key, group, days_from=config.days_from)
            except OddsAPIError:
                logger.exception("Failed to fetch scores for sport %s (%s events)", sport_key, len(group))
                summary.failed_batches.append(f"{sport_key}:{','.join(group)}")
                continue

            for row in result.data:
                score = extract_final_score(row)
                if score is None:
                    if isinstance(row, dict) and row.get("completed"):
                        logger.warning("completed event without usable scores: event_id=%s", row.get("id"))
                    continue
                summary.events_completed += 1
                await settle_event(session, score, summary, now)
            await session.commit()

    logger.info(
        "settlement complete: events_considered=%s events_completed=%s picks_settled=%s wins=%s losses=%s unresolved=%s failed_batches=%s",
        summary.events_considered,
        summary.events_completed,
        summary.picks_settled,
        summary.wins,
        summary.losses,
        summary.unresolved,
        len(summary.failed_batches),
    )
    return summary
