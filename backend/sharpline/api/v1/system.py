import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sharpline.config import settings
from sharpline.data_providers.odds_api import OddsAPIClient, OddsAPIError
from sharpline.database import get_session
from sharpline.models.pick import Pick

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
async def health(session: AsyncSession = Depends(get_session)) -> dict[str, str | int]:
    pick_count = int((await session.scalar(select(func.count(Pick.id)))) or 0)
    return {"status": "ok", "pick_count": pick_count}


@router.get("/diag")
async def diag(session: AsyncSession = Depends(get_session)):
    has_key = len(settings.odds_api_key) > 10
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.exception("diagnostic database check failed")
        return JSONResponse({"ok": False, "where": "database", "error": str(exc), "has_key": has_key}, status_code=500)

    client = OddsAPIClient()
    try:
        await client.get_sports()
    except OddsAPIError as exc:
        return {
            "ok": True,
            "has_key": has_key,
            "odds_api": {"ok": False, "status": exc.status_code, "error": str(exc)},
        }
    return {
        "ok": True,
        "has_key": has_key,
        "odds_api": {"ok": True, "requests_remaining": client.requests_remaining},
    }
