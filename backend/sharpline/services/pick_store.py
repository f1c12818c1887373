from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from sharpline.analytics.ev_calculator import PickCandidate
from sharpline.models.pick import Pick, PickStatus


async def find_pick(session: AsyncSession, event_id: str, selection: str) -> Pick | None:
    return await session.scalar(select(Pick).where(Pick.event_id == event_id, Pick.selection == selection))


async def upsert_pick(session: AsyncSession, candidate: PickCandidate) -> int | None:
    """Insert a pick unless one exists for (event_id, selection). Returns the new id, None if it existed."""
    dialect = session.bind.dialect.name if session.bind is not None else "postgresql"
    insert_stmt = (sqlite_insert(Pick) if dialect == "sqlite" else pg_insert(Pick)).values(
        sport_key=candidate.sport_key,
        event_id=candidate.event_id,
        commence_time=candidate.commence_time,
        home_team=candidate.home_team,
        away_team=candidate.away_team,
        selection=candidate.selection,
        market=candidate.market,
        fair_odds=candidate.fair_odds,
        soft_odds=candidate.soft_odds,
        ev_pct=candidate.ev_pct,
        best_book=candidate.best_book,
        sharp_sources=candidate.sharp_sources,
        status=PickStatus.UPCOMING.value,
    )
    stmt = insert_stmt.on_conflict_do_nothing(index_elements=["event_id", "selection"]).returning(Pick.id)
    return await session.scalar(stmt)


async def query_upcoming_due(
    session: AsyncSession, *, lookahead_hours: int = 6, limit: int = 200, now: datetime | None = None
) -> list[tuple[str, str]]:
    """Distinct (sport_key, event_id) pairs with upcoming picks starting before now + lookahead."""
    cutoff = (now or datetime.now(UTC)) + timedelta(hours=lookahead_hours)
    rows = (
        await session.execute(
            select(Pick.sport_key, Pick.event_id)
            .where(Pick.status == PickStatus.UPCOMING.value, Pick.commence_time <= cutoff)
            .distinct()
            .order_by(Pick.sport_key, Pick.event_id)
            .limit(limit)
        )
    ).all()
    return [(sport_key, event_id) for sport_key, event_id in rows]


async def upcoming_picks_for_event(session: AsyncSession, event_id: str) -> list[Pick]:
    return list(
        (
            await session.scalars(
                select(Pick).where(Pick.event_id == event_id, Pick.status == PickStatus.UPCOMING.value).order_by(Pick.id)
            )
        ).all()
    )


async def mark_resolved(
    session: AsyncSession,
    pick_id: int,
    status: PickStatus,
    home_score: int,
    away_score: int,
    resolved_at: datetime | None = None,
) -> bool:
    """Grade a pick that is still upcoming. Returns False when it was already terminal."""
    result = await session.execute(
        update(Pick)
        .where(Pick.id == pick_id, Pick.status == PickStatus.UPCOMING.value)
        .values(
            status=status.value,
            home_score=home_score,
            away_score=away_score,
            resolved_at=resolved_at or datetime.now(UTC),
        )
    )
    return result.rowcount == 1
