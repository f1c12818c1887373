import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sharpline.api.v1.router import api_router
from sharpline.config import settings
from sharpline.data_providers.odds_api import OddsAPIError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(OddsAPIError)
async def odds_api_error_handler(request: Request, exc: OddsAPIError) -> JSONResponse:
    logger.error("upstream failure on %s: %s", request.url.path, exc)
    return JSONResponse({"ok": False, "error": str(exc)}, status_code=502)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s", request.url.path)
    return JSONResponse({"ok": False, "error": str(exc) or exc.__class__.__name__}, status_code=500)
