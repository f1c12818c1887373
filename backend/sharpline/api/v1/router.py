from fastapi import APIRouter

from sharpline.api.v1.picks import router as picks_router
from sharpline.api.v1.scan import router as scan_router
from sharpline.api.v1.settlement import router as settlement_router
from sharpline.api.v1.system import router as system_router

api_router = APIRouter()
api_router.include_router(picks_router)
api_router.include_router(scan_router)
api_router.include_router(system_router)
api_router.include_router(settlement_router)
