from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sharpline.database import get_session
from sharpline.models.pick import Pick
from sharpline.schemas.picks import PickResponse, PickStatsResponse
from sharpline.services.performance_service import (
    get_pick_stats,
    list_resolved_picks,
    list_upcoming_picks,
    stats_to_dict,
)

router = APIRouter(prefix="/picks", tags=["picks"])


@router.get("/upcoming", response_model=list[PickResponse])
async def get_upcoming_picks(session: AsyncSession = Depends(get_session)) -> list[PickResponse]:
    picks = await list_upcoming_picks(session)
    return [PickResponse.model_validate(p) for p in picks]


@router.get("/logs", response_model=list[PickResponse])
async def get_pick_logs(
    limit: int = Query(default=500, ge=1, le=5000),
    session: AsyncSession = Depends(get_session),
) -> list[PickResponse]:
    picks = await list_resolved_picks(session, limit=limit)
    return [PickResponse.model_validate(p) for p in picks]


@router.get("/stats", response_model=PickStatsResponse)
async def get_stats(session: AsyncSession = Depends(get_session)) -> PickStatsResponse:
    stats = await get_pick_stats(session)
    return PickStatsResponse(**stats_to_dict(stats))


@router.get("/{pick_id}", response_model=PickResponse)
async def get_pick_detail(pick_id: int, session: AsyncSession = Depends(get_session)) -> PickResponse:
    pick = await session.scalar(select(Pick).where(Pick.id == pick_id))
    if pick is None:
        raise HTTPException(status_code=404, detail="Pick not found")
    return PickResponse.model_validate(pick)
